"""Space Domain Entity.

Represents a thermal zone (room or group of rooms) of the building model.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SpaceType(str, Enum):
    """Conditioning classification of a space."""

    CONDITIONED = "CONDITIONED"
    UNCONDITIONED = "UNCONDITIONED"
    UNINHABITED = "UNINHABITED"

    @classmethod
    def from_string(cls, value: str) -> SpaceType:
        """Parse a space type, defaulting to UNCONDITIONED.

        Args:
            value: Type string (e.g., "CONDITIONED", "UNHABITED")

        Returns:
            Matching SpaceType enum
        """
        normalized = value.strip().upper()
        if normalized == "CONDITIONED":
            return cls.CONDITIONED
        # Source data spells this "UNHABITED"
        if normalized in ("UNINHABITED", "UNHABITED"):
            return cls.UNINHABITED
        return cls.UNCONDITIONED


@dataclass(frozen=True)
class Space:
    """Space Domain Entity.

    Attributes:
        id: Unique identifier
        name: Space name
        area: Floor area [m²]
        height: Gross height, floor to floor [m]
        z: Floor level [m], negative when below grade
        height_net: Clear height [m]; derived from the closing top element when None
        exposed_perimeter: Perimeter in contact with the exterior [m]
        inside_tenv: Whether the space belongs to the thermal envelope
        multiplier: Number of identical copies of this space
        space_type: Conditioning classification
        n_v: Explicit air change rate [1/h]
    """

    id: str
    name: str
    area: float
    height: float
    z: float = 0.0
    height_net: float | None = None
    exposed_perimeter: float | None = None
    inside_tenv: bool = True
    multiplier: float = 1.0
    space_type: SpaceType = SpaceType.CONDITIONED
    n_v: float | None = None

    @property
    def is_conditioned(self) -> bool:
        """Check if the space is conditioned."""
        return self.space_type == SpaceType.CONDITIONED

    @property
    def is_inhabited(self) -> bool:
        """Check if the space counts towards the reference floor area."""
        return self.space_type != SpaceType.UNINHABITED

    @property
    def depth(self) -> float:
        """Depth of the floor below grade [m], 0 when at or above grade."""
        return -self.z if self.z < 0.0 else 0.0
