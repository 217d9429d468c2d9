"""Shading Service.

Remote-obstruction factor (fshobst) of a window set back from the facade
plane, after the tabulated values of the Spanish DA DB-HE/1 guidance:

- Table 17: vertical windows, by setback/height and setback/width ranges
- Table 19: horizontal windows, by the larger and smaller range
"""
from __future__ import annotations

from thermal_envelope.domain import Orientation, Tilt

# Range upper bounds for vertical windows; below the first one there is no shading
SIDE_RANGE_LIMITS = (0.05, 0.1, 0.2, 0.5)
TOP_RANGE_LIMITS = (0.1, 0.5, 1.0, 2.0, 5.0)

# (setback/height range, setback/width range) -> fshobst
_SIDE_SOUTH = {
    (1, 1): 0.82, (1, 2): 0.74, (1, 3): 0.62, (1, 4): 0.39,
    (2, 1): 0.76, (2, 2): 0.67, (2, 3): 0.56, (2, 4): 0.35,
    (3, 1): 0.56, (3, 2): 0.51, (3, 3): 0.39, (3, 4): 0.27,
    (4, 1): 0.35, (4, 2): 0.32, (4, 3): 0.27, (4, 4): 0.17,
}
_SIDE_SOUTHEAST_SOUTHWEST = {
    (1, 1): 0.86, (1, 2): 0.81, (1, 3): 0.72, (1, 4): 0.51,
    (2, 1): 0.79, (2, 2): 0.74, (2, 3): 0.66, (2, 4): 0.47,
    (3, 1): 0.59, (3, 2): 0.56, (3, 3): 0.47, (3, 4): 0.36,
    (4, 1): 0.38, (4, 2): 0.36, (4, 3): 0.32, (4, 4): 0.23,
}
_SIDE_EAST_WEST = {
    (1, 1): 0.91, (1, 2): 0.87, (1, 3): 0.81, (1, 4): 0.65,
    (2, 1): 0.86, (2, 2): 0.82, (2, 3): 0.76, (2, 4): 0.61,
    (3, 1): 0.71, (3, 2): 0.68, (3, 3): 0.61, (3, 4): 0.51,
    (4, 1): 0.53, (4, 2): 0.51, (4, 3): 0.48, (4, 4): 0.39,
}

SIDE_TABLES: dict[Orientation, dict[tuple[int, int], float]] = {
    Orientation.S: _SIDE_SOUTH,
    Orientation.SE: _SIDE_SOUTHEAST_SOUTHWEST,
    Orientation.SW: _SIDE_SOUTHEAST_SOUTHWEST,
    Orientation.E: _SIDE_EAST_WEST,
    Orientation.W: _SIDE_EAST_WEST,
}

# (larger range, smaller range) -> fshobst
TOP_TABLE: dict[tuple[int, int], float] = {
    (0, 0): 0.42,
    (1, 0): 0.43, (1, 1): 0.46,
    (2, 0): 0.43, (2, 1): 0.48, (2, 2): 0.52,
    (3, 0): 0.43, (3, 1): 0.50, (3, 2): 0.55, (3, 3): 0.60,
    (4, 0): 0.44, (4, 1): 0.51, (4, 2): 0.58, (4, 3): 0.66, (4, 4): 0.75,
    (5, 0): 0.44, (5, 1): 0.52, (5, 2): 0.59, (5, 3): 0.68, (5, 4): 0.79,
}
TOP_DEFAULT = 0.85


def _side_range(ratio: float) -> int:
    if ratio < SIDE_RANGE_LIMITS[0]:
        return 0
    for index, limit in enumerate(SIDE_RANGE_LIMITS[1:], start=1):
        if ratio <= limit:
            return index
    return len(SIDE_RANGE_LIMITS)


def _top_range(ratio: float) -> int:
    for index, limit in enumerate(TOP_RANGE_LIMITS):
        if ratio <= limit:
            return index
    return len(TOP_RANGE_LIMITS)


def fshobst_for_setback(
    tilt: float,
    azimuth: float,
    width: float,
    height: float,
    setback: float,
) -> float:
    """Obstruction factor of a window recessed from the facade plane.

    Args:
        tilt: Tilt of the host element [degrees]
        azimuth: Azimuth of the host element [degrees] (S = 0, E = +90, W = -90)
        width: Window width [m]
        height: Window height [m]
        setback: Depth of the recess [m]

    Returns:
        fshobst in (0, 1]; 1.0 means no reduction

    Example:
        >>> fshobst_for_setback(90.0, 0.0, 1.0, 1.0, 0.15)
        0.67
    """
    if width <= 0.0 or height <= 0.0:
        return 1.0

    rh = setback / height
    rw = setback / width

    position = Tilt.from_degrees(tilt)
    if position == Tilt.SIDE:
        table = SIDE_TABLES.get(Orientation.from_azimuth(azimuth))
        if table is None:
            return 1.0
        return table.get((_side_range(rh), _side_range(rw)), 1.0)

    if position == Tilt.TOP:
        range_rh = _top_range(rh)
        range_rw = _top_range(rw)
        key = (max(range_rh, range_rw), min(range_rh, range_rw))
        return TOP_TABLE.get(key, TOP_DEFAULT)

    return 1.0
