"""Envelope Element Domain Entities.

Opaque elements (walls, roofs, floors), windows and linear thermal bridges.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from thermal_envelope.domain.value_objects import Orientation, Tilt


class BoundaryType(str, Enum):
    """What lies on the far side of an opaque element."""

    EXTERIOR = "EXTERIOR"
    INTERIOR = "INTERIOR"
    GROUND = "GROUND"
    ADIABATIC = "ADIABATIC"

    @property
    def exchanges_with_outside(self) -> bool:
        """Check if the element is in contact with outdoor air or the ground."""
        return self in (BoundaryType.EXTERIOR, BoundaryType.GROUND)


@dataclass(frozen=True)
class Wall:
    """Opaque envelope element of any orientation.

    Attributes:
        id: Unique identifier
        name: Element name
        cons: WallConstruction id
        space: Owning Space id
        bounds: Boundary type
        tilt: Tilt angle [degrees], 0 = roof, 90 = wall, 180 = floor
        azimuth: Azimuth [degrees], S = 0, E = +90, W = -90
        area: Net area, openings excluded [m²]
        nextto: Adjacent Space id (INTERIOR elements only)
    """

    id: str
    name: str
    cons: str
    space: str
    bounds: BoundaryType
    area: float
    tilt: float = 90.0
    azimuth: float = 0.0
    nextto: str | None = None

    @property
    def position(self) -> Tilt:
        """Tilt class of the element."""
        return Tilt.from_degrees(self.tilt)

    @property
    def orientation(self) -> Orientation:
        """Orientation used for solar exposure (HZ for upward-facing elements)."""
        if self.position == Tilt.TOP:
            return Orientation.HZ
        return Orientation.from_azimuth(self.azimuth)


@dataclass(frozen=True)
class Window:
    """Glazed envelope element hosted by a wall.

    Attributes:
        id: Unique identifier
        name: Window name
        cons: WindowConstruction id
        wall: Host Wall id
        area: Area including frame [m²]
        fshobst: Remote obstruction shading reduction factor [-]
    """

    id: str
    name: str
    cons: str
    wall: str
    area: float
    fshobst: float = 1.0


@dataclass(frozen=True)
class ThermalBridge:
    """Linear thermal bridge.

    Attributes:
        id: Unique identifier
        name: Bridge name
        length: Total length [m]
        psi: Linear thermal transmittance [W/m·K]
    """

    id: str
    name: str
    length: float
    psi: float

    @property
    def psi_l(self) -> float:
        """Heat transfer coefficient of the bridge [W/K]."""
        return self.psi * self.length
