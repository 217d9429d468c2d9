"""Orientation Value Object.

Compass sector of an envelope element, from its azimuth.
Azimuths follow ISO 52016-1: S = 0, E = +90, W = -90 (degrees).
"""
from __future__ import annotations

from enum import Enum


class Orientation(str, Enum):
    """Orientation of an envelope element.

    Eight 45 degree compass sectors plus HZ for horizontal (upward-facing)
    elements, whose azimuth is irrelevant for solar exposure.
    """

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"
    HZ = "HZ"

    @classmethod
    def from_azimuth(cls, azimuth: float) -> Orientation:
        """Map an azimuth to its compass sector.

        Args:
            azimuth: Azimuth in degrees (S = 0, E = +90, W = -90), any range

        Returns:
            Compass Orientation (never HZ)

        Example:
            >>> Orientation.from_azimuth(0.0)
            <Orientation.S: 'S'>
            >>> Orientation.from_azimuth(-90.0)
            <Orientation.W: 'W'>
        """
        # Sector index counted counterclockwise from south, seen from above
        sectors = (cls.S, cls.SE, cls.E, cls.NE, cls.N, cls.NW, cls.W, cls.SW)
        normalized = azimuth % 360.0
        index = int(((normalized + 22.5) % 360.0) // 45.0)
        return sectors[index]

    @property
    def is_horizontal(self) -> bool:
        """Check if this is the horizontal pseudo-orientation."""
        return self is Orientation.HZ
