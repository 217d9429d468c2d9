"""Thermal Envelope.

Thermal performance indicators of a building envelope: U-values of opaque
elements, global transmittance K, air tightness n50, compacity and July
solar gain control, computed over an immutable building model.
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Thermal Envelope Team"

# Re-export main entry points
from thermal_envelope.domain import BuildingModel, Meta

__all__ = ["BuildingModel", "Meta", "__version__"]
