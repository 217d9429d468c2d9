"""Domain Value Objects.

Immutable objects that represent domain concepts without identity.
"""
from __future__ import annotations

from thermal_envelope.domain.value_objects.orientation import Orientation
from thermal_envelope.domain.value_objects.tilt import Tilt

__all__ = [
    "Orientation",
    "Tilt",
]
