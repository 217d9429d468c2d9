"""Building Model Aggregate.

The registry of spaces, envelope elements and constructions of a building,
with id/name lookups and relationship traversal.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, TypeVar

from thermal_envelope.domain.exceptions import (
    EntityAlreadyExistsError,
    InvalidTiltError,
    NegativeAreaError,
)
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
from thermal_envelope.domain.models.space import Space
from thermal_envelope.domain.value_objects import Tilt

_Entity = TypeVar("_Entity", Space, Wall, Window, WallConstruction, WindowConstruction, ThermalBridge)


@dataclass(frozen=True)
class Meta:
    """Building metadata.

    Attributes:
        name: Project name
        is_new_building: New (or retrofitted) building, as opposed to existing
        is_dwelling: Residential use
        num_dwellings: Number of dwellings
        climate: Climate zone code
        global_ventilation_l_s: Design ventilation flow of the inhabited spaces [l/s]
        n50_test_ach: Air change rate at 50 Pa measured by a blower door test [1/h]
        d_perim_insulation: Width or depth of the slab perimeter insulation [m]
        rn_perim_insulation: Thermal resistance of the slab perimeter insulation [m²K/W]
    """

    name: str = ""
    is_new_building: bool = True
    is_dwelling: bool = True
    num_dwellings: int = 1
    climate: str = "D3"
    global_ventilation_l_s: float | None = None
    n50_test_ach: float | None = None
    d_perim_insulation: float = 0.0
    rn_perim_insulation: float = 0.0


def _index(entity_type: str, items: Iterable[_Entity]) -> Mapping[str, _Entity]:
    """Build a read-only id index, rejecting duplicated ids."""
    index: dict[str, _Entity] = {}
    for item in items:
        if item.id in index:
            raise EntityAlreadyExistsError(entity_type, item.id)
        index[item.id] = item
    return MappingProxyType(index)


@dataclass(frozen=True)
class BuildingModel:
    """Building Model Aggregate Root.

    Holds flat, id-keyed collections; elements refer to each other by id
    only. A model is assembled once and never mutated afterwards, so every
    derived quantity can be recomputed from it at any time.

    Lookups return None for unknown ids. Reporting broken references is
    left to the services that consume the model.
    """

    meta: Meta
    spaces: Mapping[str, Space] = field(default_factory=dict)
    walls: Mapping[str, Wall] = field(default_factory=dict)
    windows: Mapping[str, Window] = field(default_factory=dict)
    wall_constructions: Mapping[str, WallConstruction] = field(default_factory=dict)
    window_constructions: Mapping[str, WindowConstruction] = field(default_factory=dict)
    thermal_bridges: Mapping[str, ThermalBridge] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        meta: Meta | None = None,
        *,
        spaces: Iterable[Space] = (),
        walls: Iterable[Wall] = (),
        windows: Iterable[Window] = (),
        wall_constructions: Iterable[WallConstruction] = (),
        window_constructions: Iterable[WindowConstruction] = (),
        thermal_bridges: Iterable[ThermalBridge] = (),
    ) -> BuildingModel:
        """Factory method to assemble a BuildingModel.

        Args:
            meta: Building metadata (defaults when None)
            spaces: Spaces
            walls: Opaque elements
            windows: Windows
            wall_constructions: Opaque constructions
            window_constructions: Window constructions
            thermal_bridges: Linear thermal bridges

        Returns:
            New BuildingModel instance

        Raises:
            EntityAlreadyExistsError: Two entities of one kind share an id
            InvalidTiltError: A wall tilt lies outside [0, 180]
            NegativeAreaError: A wall or window has a negative area
        """
        walls = list(walls)
        windows = list(windows)
        for wall in walls:
            if not 0.0 <= wall.tilt <= 180.0:
                raise InvalidTiltError(wall.tilt)
            if wall.area < 0.0:
                raise NegativeAreaError(wall.id, wall.area)
        for window in windows:
            if window.area < 0.0:
                raise NegativeAreaError(window.id, window.area)

        return cls(
            meta=meta or Meta(),
            spaces=_index("Space", spaces),
            walls=_index("Wall", walls),
            windows=_index("Window", windows),
            wall_constructions=_index("WallConstruction", wall_constructions),
            window_constructions=_index("WindowConstruction", window_constructions),
            thermal_bridges=_index("ThermalBridge", thermal_bridges),
        )

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_space(self, space_id: str | None) -> Space | None:
        """Get a space by id."""
        if space_id is None:
            return None
        return self.spaces.get(space_id)

    def get_space_by_name(self, name: str) -> Space | None:
        """Get the first space with the given name."""
        return next((s for s in self.spaces.values() if s.name == name), None)

    def get_wall(self, wall_id: str) -> Wall | None:
        """Get a wall by id."""
        return self.walls.get(wall_id)

    def get_wall_by_name(self, name: str) -> Wall | None:
        """Get the first wall with the given name."""
        return next((w for w in self.walls.values() if w.name == name), None)

    def get_window(self, window_id: str) -> Window | None:
        """Get a window by id."""
        return self.windows.get(window_id)

    def get_wall_space(self, wall: Wall) -> Space | None:
        """Get the space a wall belongs to."""
        return self.spaces.get(wall.space)

    def get_wall_construction(self, wall: Wall) -> WallConstruction | None:
        """Get the construction of a wall."""
        return self.wall_constructions.get(wall.cons)

    def get_window_wall(self, window: Window) -> Wall | None:
        """Get the wall hosting a window."""
        return self.walls.get(window.wall)

    def get_window_construction(self, window: Window) -> WindowConstruction | None:
        """Get the construction of a window."""
        return self.window_constructions.get(window.cons)

    def get_wall_multiplier(self, wall: Wall) -> float:
        """Multiplier of the wall's space, 1.0 when the space is unknown."""
        space = self.get_wall_space(wall)
        return space.multiplier if space is not None else 1.0

    # =========================================================================
    # Traversal
    # =========================================================================

    def windows_of_wall(self, wall_id: str) -> Iterator[Window]:
        """Iterate over the windows hosted by a wall."""
        return (w for w in self.windows.values() if w.wall == wall_id)

    def walls_of_space(self, space_id: str) -> Iterator[Wall]:
        """Iterate over the walls bounding a space.

        Includes the space's own walls and any interior wall of another
        space whose adjacent space is this one.
        """
        return (
            w for w in self.walls.values()
            if w.space == space_id or (w.nextto is not None and w.nextto == space_id)
        )

    def walls_of_envelope(self) -> Iterator[Wall]:
        """Iterate over envelope walls in contact with outdoor air or the ground.

        Walls whose space is unknown are not part of the envelope.
        """
        for wall in self.walls.values():
            if not wall.bounds.exchanges_with_outside:
                continue
            space = self.get_wall_space(wall)
            if space is not None and space.inside_tenv:
                yield wall

    def windows_of_envelope(self) -> Iterator[Window]:
        """Iterate over envelope windows in contact with outdoor air.

        Only windows hosted by EXTERIOR envelope walls are included.
        """
        for wall in self.walls_of_envelope():
            if wall.bounds == BoundaryType.EXTERIOR:
                yield from self.windows_of_wall(wall.id)

    def top_walls_of_space(self, space_id: str) -> Iterator[Wall]:
        """Iterate over the elements closing the top of a space.

        These are the space's own upward-facing elements (roofs) and the
        downward-facing interior elements of the space above (its floors).
        """
        for wall in self.walls.values():
            position = wall.position
            if position == Tilt.TOP and wall.space == space_id:
                yield wall
            elif position == Tilt.BOTTOM and wall.nextto == space_id:
                yield wall

    # =========================================================================
    # Heights
    # =========================================================================

    def wall_thickness(self, wall: Wall) -> float:
        """Thickness of a wall's construction, 0.0 when unknown."""
        cons = self.get_wall_construction(wall)
        return cons.thickness if cons is not None else 0.0

    def top_wall_thickness(self, space_id: str) -> float:
        """Average thickness of the elements closing the top of a space."""
        thicknesses = [self.wall_thickness(w) for w in self.top_walls_of_space(space_id)]
        if not thicknesses:
            return 0.0
        return sum(thicknesses) / len(thicknesses)

    def space_height_net(self, space: Space) -> float:
        """Clear height of a space [m].

        Uses the explicit net height when given, otherwise subtracts the
        thickness of the closing top elements from the gross height.
        """
        if space.height_net is not None:
            return space.height_net
        return space.height - self.top_wall_thickness(space.id)

    # =========================================================================
    # Areas and volumes
    # =========================================================================

    def a_ref(self) -> float:
        """Reference usable floor area [m²].

        Inhabited spaces inside the thermal envelope, multipliers applied.
        """
        return sum(
            s.area * s.multiplier
            for s in self.spaces.values()
            if s.inside_tenv and s.is_inhabited
        )

    def vol_env_gross(self) -> float:
        """Gross volume of the spaces inside the thermal envelope [m³]."""
        return sum(
            s.area * s.height * s.multiplier
            for s in self.spaces.values()
            if s.inside_tenv
        )

    def vol_env_net(self) -> float:
        """Net volume of the spaces inside the thermal envelope [m³].

        Slab and roof thicknesses above each space are discounted.
        """
        return sum(
            s.area * self.space_height_net(s) * s.multiplier
            for s in self.spaces.values()
            if s.inside_tenv
        )

    def vol_env_inh_net(self) -> float:
        """Net volume of the inhabited spaces inside the thermal envelope [m³]."""
        return sum(
            s.area * self.space_height_net(s) * s.multiplier
            for s in self.spaces.values()
            if s.inside_tenv and s.is_inhabited
        )
