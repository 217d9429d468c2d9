"""Construction Domain Entities.

Layered build-ups referenced by opaque and glazed envelope elements.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WallConstruction:
    """Opaque element construction.

    Attributes:
        id: Unique identifier
        name: Construction name
        group: Library group it belongs to
        thickness: Total thickness [m]
        r_intrinsic: Thermal resistance without surface films [m²K/W]
        absorptance: Solar absorptance of the exterior face [-]
    """

    id: str
    name: str
    r_intrinsic: float
    thickness: float = 0.0
    absorptance: float = 0.6
    group: str = ""


@dataclass(frozen=True)
class WindowConstruction:
    """Glazed element construction.

    Attributes:
        id: Unique identifier
        name: Construction name
        group: Library group it belongs to
        u: Overall thermal transmittance, frame and glazing [W/m²K]
        ff: Frame area fraction [-]
        gglwi: Solar energy transmittance of the glazing at normal incidence [-]
        gglshwi: Same, with movable shading devices active [-]
        infcoeff_100: Air permeability at 100 Pa [m³/h·m²]
    """

    id: str
    name: str
    u: float
    ff: float = 0.0
    gglwi: float = 0.0
    gglshwi: float = 0.0
    infcoeff_100: float = 0.0
    group: str = ""
