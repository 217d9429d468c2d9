"""Domain layer exceptions.

All domain-specific exceptions inherit from DomainError.
"""
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class EntityNotFoundError(DomainError):
    def __init__(self, entity_type: str, entity_id: str, details: dict[str, Any] | None = None) -> None:
        message = f"{entity_type} not found: {entity_id}"
        super().__init__(message, details)
        self.entity_type = entity_type
        self.entity_id = entity_id


class MissingReferenceError(EntityNotFoundError):
    """An element points at a space, construction or wall that is not in the model."""

    def __init__(self, entity_type: str, entity_id: str | None, owner_id: str, reference: str) -> None:
        super().__init__(
            entity_type,
            entity_id or "<undefined>",
            {"owner_id": owner_id, "reference": reference},
        )
        self.owner_id = owner_id
        self.reference = reference


class EntityAlreadyExistsError(DomainError):
    def __init__(self, entity_type: str, identifier: str, details: dict[str, Any] | None = None) -> None:
        message = f"{entity_type} already exists: {identifier}"
        super().__init__(message, details)
        self.entity_type = entity_type
        self.identifier = identifier


class ValidationError(DomainError):
    def __init__(self, field: str, message: str, value: Any = None) -> None:
        full_message = f"Validation error for '{field}': {message}"
        details = {"field": field, "value": value}
        super().__init__(full_message, details)
        self.field = field
        self.value = value


class InvalidTiltError(ValidationError):
    def __init__(self, value: float) -> None:
        super().__init__(field="tilt", message="Tilt must lie within [0, 180] degrees", value=value)


class NegativeAreaError(ValidationError):
    def __init__(self, element_id: str, value: float) -> None:
        super().__init__(field="area", message=f"Negative area for element {element_id}", value=value)
