"""Tilt Value Object.

Classifies an envelope element by the direction its exterior face points.
"""
from __future__ import annotations

from enum import Enum

# Class boundaries sit halfway between the roof (0), wall (90) and floor (180) defaults
TOP_MAX_DEGREES = 45.0
BOTTOM_MIN_DEGREES = 135.0


class Tilt(str, Enum):
    """Tilt class of an opaque element.

    - TOP: upward-facing (roofs, ceilings), heat flow upwards
    - SIDE: vertical (walls), horizontal heat flow
    - BOTTOM: downward-facing (floors), heat flow downwards
    """

    TOP = "top"
    SIDE = "side"
    BOTTOM = "bottom"

    @classmethod
    def from_degrees(cls, tilt: float) -> Tilt:
        """Classify a tilt angle.

        Args:
            tilt: Angle from the horizontal upward-facing position, in degrees [0, 180]

        Returns:
            Matching Tilt class

        Example:
            >>> Tilt.from_degrees(0.0)
            <Tilt.TOP: 'top'>
            >>> Tilt.from_degrees(90.0)
            <Tilt.SIDE: 'side'>
        """
        if tilt < TOP_MAX_DEGREES:
            return cls.TOP
        if tilt <= BOTTOM_MIN_DEGREES:
            return cls.SIDE
        return cls.BOTTOM

    @property
    def label(self) -> str:
        """Human readable element kind for this tilt."""
        return {
            Tilt.TOP: "roof",
            Tilt.SIDE: "wall",
            Tilt.BOTTOM: "floor",
        }[self]
