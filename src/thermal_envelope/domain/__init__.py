"""Domain Layer.

Contains the building model entities, value objects, exceptions and the
diagnostics interface. This layer has NO external dependencies.
"""
from __future__ import annotations

from thermal_envelope.domain.diagnostics import IDiagnosticSink
from thermal_envelope.domain.exceptions import (
    DomainError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    InvalidTiltError,
    MissingReferenceError,
    NegativeAreaError,
    ValidationError,
)
from thermal_envelope.domain.models import (
    BoundaryType,
    BuildingModel,
    Meta,
    Space,
    SpaceType,
    ThermalBridge,
    Wall,
    WallConstruction,
    Window,
    WindowConstruction,
)
from thermal_envelope.domain.value_objects import Orientation, Tilt

__all__ = [
    # Exceptions
    "DomainError",
    "EntityNotFoundError",
    "EntityAlreadyExistsError",
    "MissingReferenceError",
    "ValidationError",
    "InvalidTiltError",
    "NegativeAreaError",
    # Models
    "BuildingModel",
    "Meta",
    "Space",
    "SpaceType",
    "BoundaryType",
    "Wall",
    "Window",
    "ThermalBridge",
    "WallConstruction",
    "WindowConstruction",
    # Value Objects
    "Orientation",
    "Tilt",
    # Diagnostics
    "IDiagnosticSink",
]
