"""Result pattern for explicit error handling.

Lets the resolver report a broken reference as a value instead of raising.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful result."""

    value: T

    def is_failure(self) -> bool:
        """Check if the result is a failure."""
        return False

    def unwrap(self) -> T:
        """Get the value."""
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed result."""

    error: E

    def is_failure(self) -> bool:
        """Check if the result is a failure."""
        return True

    def unwrap(self) -> None:
        """Raise error when unwrapping failure."""
        raise ValueError(f"Cannot unwrap Failure: {self.error}")


# Type alias
Result = Success[T] | Failure[E]


def ok(value: T) -> Success[T]:
    """Create a Success result.

    Args:
        value: The success value

    Returns:
        Success wrapping the value
    """
    return Success(value)


def err(error: E) -> Failure[E]:
    """Create a Failure result.

    Args:
        error: The error value

    Returns:
        Failure wrapping the error
    """
    return Failure(error)
