"""Application services.

Calculation services over a building model.
"""
from __future__ import annotations

# Re-export services for convenient imports
# These will be available as:
#   from thermal_envelope.application.services import UValueService

__all__ = [
    "EnvelopeMetricsService",
    "ModelCheckService",
    "UValueService",
    "fshobst_for_setback",
]


def __getattr__(name: str):
    """Lazy imports for services."""
    if name == "EnvelopeMetricsService":
        from thermal_envelope.application.services.envelope_metrics_service import EnvelopeMetricsService
        return EnvelopeMetricsService
    elif name == "ModelCheckService":
        from thermal_envelope.application.services.model_check_service import ModelCheckService
        return ModelCheckService
    elif name == "UValueService":
        from thermal_envelope.application.services.u_value_service import UValueService
        return UValueService
    elif name == "fshobst_for_setback":
        from thermal_envelope.application.services.shading_service import fshobst_for_setback
        return fshobst_for_setback
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
