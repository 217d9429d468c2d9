"""Domain Models.

Core domain entities representing the building envelope model.
"""
from __future__ import annotations

from thermal_envelope.domain.models.construction import (
    WallConstruction,
    WindowConstruction,
)
from thermal_envelope.domain.models.element import (
    BoundaryType,
    ThermalBridge,
    Wall,
    Window,
)
from thermal_envelope.domain.models.model import BuildingModel, Meta
from thermal_envelope.domain.models.space import Space, SpaceType

__all__ = [
    # Model
    "BuildingModel",
    "Meta",
    # Space
    "Space",
    "SpaceType",
    # Elements
    "BoundaryType",
    "Wall",
    "Window",
    "ThermalBridge",
    # Constructions
    "WallConstruction",
    "WindowConstruction",
]
