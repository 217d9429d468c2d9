"""U-Value Service.

Thermal transmittance of opaque envelope elements according to their
position and boundary:

- ISO 6946 for elements in contact with outdoor air
- ISO 13370 for slabs and basement walls in contact with the ground
- ISO 13789 for partitions towards unconditioned spaces

All resistances in m²K/W, conductivities in W/(m·K), U-values in W/m²K.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from thermal_envelope.domain import (
    BoundaryType,
    BuildingModel,
    IDiagnosticSink,
    MissingReferenceError,
    Space,
    Tilt,
    Wall,
)
from thermal_envelope.infrastructure.diagnostics import StructlogDiagnosticSink
from thermal_envelope.shared.result import Result, err, ok

# Surface resistances, ISO 6946
RSI_ASCENDING = 0.10
RSI_HORIZONTAL = 0.13
RSI_DESCENDING = 0.17
RSE = 0.04

# Unfrozen ground and perimeter insulation conductivities
LAMBDA_GND = 2.0
LAMBDA_INS = 0.035

# Assumed thickness of the walls around a slab on grade [m]
PERIMETER_WALL_WIDTH = 0.3

# Ventilation heat transfer per unit flow, ρ·c_p of air [Wh/(m³·K)]
AIR_HEAT_CAPACITY = 0.33

RSI_BY_POSITION: dict[Tilt, float] = {
    Tilt.TOP: RSI_ASCENDING,
    Tilt.SIDE: RSI_HORIZONTAL,
    Tilt.BOTTOM: RSI_DESCENDING,
}


# =============================================================================
# Resolved cases
# =============================================================================


@dataclass(frozen=True)
class AdiabaticCase:
    """No heat exchange through the element."""

    wall: Wall


@dataclass(frozen=True)
class ExteriorCase:
    """Element in contact with outdoor air."""

    wall: Wall
    r_intrinsic: float
    position: Tilt


@dataclass(frozen=True)
class GroundSlabCase:
    """Slab on grade or basement floor."""

    wall: Wall
    r_intrinsic: float
    space: Space


@dataclass(frozen=True)
class BasementWallCase:
    """Vertical element partially or fully below grade."""

    wall: Wall
    r_intrinsic: float
    space: Space


@dataclass(frozen=True)
class BuriedRoofCase:
    """Roof under soil; the soil layer belongs to the construction."""

    wall: Wall
    r_intrinsic: float


@dataclass(frozen=True)
class ConditionedPartitionCase:
    """Interior element between two conditioned spaces."""

    wall: Wall
    r_intrinsic: float
    position: Tilt


@dataclass(frozen=True)
class UnconditionedPartitionCase:
    """Interior element with an unconditioned space on one side."""

    wall: Wall
    r_intrinsic: float
    position: Tilt
    unconditioned_space: Space
    owner_is_conditioned: bool


WallCase = (
    AdiabaticCase
    | ExteriorCase
    | GroundSlabCase
    | BasementWallCase
    | BuriedRoofCase
    | ConditionedPartitionCase
    | UnconditionedPartitionCase
)


@dataclass(frozen=True)
class WallUValue:
    """Resolved U-value of a single wall."""

    id: str
    name: str
    bounds: BoundaryType
    tilt: Tilt
    u: float | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict."""
        return {
            "id": self.id,
            "name": self.name,
            "bounds": self.bounds.value,
            "tilt": self.tilt.value,
            "u": round(self.u, 2) if self.u is not None else None,
        }


class UValueService:
    """Service computing the U-value of opaque elements of a building model."""

    def __init__(self, model: BuildingModel, sink: IDiagnosticSink | None = None) -> None:
        """Initialize service.

        Args:
            model: Building model to read from
            sink: Receiver of diagnostic events (structlog when None)
        """
        self._model = model
        self._sink = sink or StructlogDiagnosticSink(__name__)

    # =========================================================================
    # Public API
    # =========================================================================

    def u_for_wall(self, wall: Wall) -> float | None:
        """Thermal transmittance of an opaque element [W/m²K].

        Args:
            wall: Element to evaluate

        Returns:
            U-value, or None if a reference needed for the element's case
            cannot be resolved (the element must then be left out)
        """
        result = self.classify(wall)
        if result.is_failure():
            error: MissingReferenceError = result.error
            self._sink.warning(
                "Wall excluded, unresolved reference",
                wall_id=wall.id,
                wall_name=wall.name,
                reference=error.reference,
                missing_id=error.entity_id,
            )
            return None
        return self._u_for_case(result.unwrap())

    def u_values(self) -> list[WallUValue]:
        """U-values of every wall of the model, in model order."""
        return [
            WallUValue(
                id=wall.id,
                name=wall.name,
                bounds=wall.bounds,
                tilt=wall.position,
                u=self.u_for_wall(wall),
            )
            for wall in self._model.walls.values()
        ]

    def classify(self, wall: Wall) -> Result[WallCase, MissingReferenceError]:
        """Resolve the calculation case of a wall.

        Args:
            wall: Element to classify

        Returns:
            Success with the case, or Failure naming the missing reference
        """
        if wall.bounds == BoundaryType.ADIABATIC:
            return ok(AdiabaticCase(wall))

        cons = self._model.get_wall_construction(wall)
        if cons is None:
            return err(MissingReferenceError("WallConstruction", wall.cons, wall.id, "cons"))
        r_intrinsic = cons.r_intrinsic
        position = wall.position

        if wall.bounds == BoundaryType.EXTERIOR:
            return ok(ExteriorCase(wall, r_intrinsic, position))

        if wall.bounds == BoundaryType.GROUND and position == Tilt.TOP:
            return ok(BuriedRoofCase(wall, r_intrinsic))

        space = self._model.get_wall_space(wall)
        if space is None:
            return err(MissingReferenceError("Space", wall.space, wall.id, "space"))

        if wall.bounds == BoundaryType.GROUND:
            if position == Tilt.BOTTOM:
                return ok(GroundSlabCase(wall, r_intrinsic, space))
            return ok(BasementWallCase(wall, r_intrinsic, space))

        # INTERIOR
        next_space = self._model.get_space(wall.nextto)
        if next_space is None:
            return err(MissingReferenceError("Space", wall.nextto, wall.id, "nextto"))

        if space.is_conditioned and next_space.is_conditioned:
            return ok(ConditionedPartitionCase(wall, r_intrinsic, position))

        if next_space.is_conditioned:
            return ok(UnconditionedPartitionCase(wall, r_intrinsic, position, space, False))
        return ok(UnconditionedPartitionCase(wall, r_intrinsic, position, next_space, True))

    # =========================================================================
    # Cases
    # =========================================================================

    def _u_for_case(self, case: WallCase) -> float:
        if isinstance(case, AdiabaticCase):
            self._sink.debug("U adiabatic", wall=case.wall.name, u=0.0)
            return 0.0
        if isinstance(case, ExteriorCase):
            return self._u_exterior(case)
        if isinstance(case, GroundSlabCase):
            return self._u_ground_slab(case)
        if isinstance(case, BasementWallCase):
            return self._u_basement_wall(case)
        if isinstance(case, BuriedRoofCase):
            u = 1.0 / (case.r_intrinsic + RSI_ASCENDING + RSE)
            self._sink.debug("U buried roof", wall=case.wall.name, u=u, r_f=case.r_intrinsic)
            return u
        if isinstance(case, ConditionedPartitionCase):
            # No heat flow direction correction between conditioned spaces
            u = 1.0 / (case.r_intrinsic + 2.0 * RSI_HORIZONTAL)
            self._sink.debug(
                "U conditioned partition",
                wall=case.wall.name,
                position=case.position.label,
                u=u,
            )
            return u
        if isinstance(case, UnconditionedPartitionCase):
            return self._u_unconditioned_partition(case)
        raise TypeError(f"Unknown wall case: {type(case).__name__}")

    def _u_exterior(self, case: ExteriorCase) -> float:
        u = 1.0 / (case.r_intrinsic + RSI_BY_POSITION[case.position] + RSE)
        self._sink.debug("U exterior", wall=case.wall.name, position=case.position.label, u=u)
        return u

    def _u_ground_slab(self, case: GroundSlabCase) -> float:
        """Slab on grade, ISO 13370 9.1 and 9.3.2 with Annex B edge insulation.

        The floor is taken as square when the space has no exposed perimeter.
        """
        wall, space, r_intrinsic = case.wall, case.space, case.r_intrinsic
        meta = self._model.meta
        area = space.area
        perimeter = (
            space.exposed_perimeter
            if space.exposed_perimeter is not None
            else 4.0 * math.sqrt(area)
        )

        # Characteristic dimension B' -> inf, U -> 0
        if abs(perimeter) < 0.001 or area <= 0.0:
            self._sink.warning(
                "Slab without exposed perimeter, U = 0",
                wall_id=wall.id,
                wall_name=wall.name,
                area=area,
                perimeter=perimeter,
            )
            return 0.0

        b_1 = area / (0.5 * perimeter)
        z = space.depth
        d_t = PERIMETER_WALL_WIDTH + LAMBDA_GND * (RSI_DESCENDING + r_intrinsic + RSE)

        if (d_t + 0.5 * z) < b_1:
            # Uninsulated and moderately insulated floors
            u_bf = (
                2.0 * LAMBDA_GND / (math.pi * b_1 + d_t + 0.5 * z)
                * math.log(1.0 + math.pi * b_1 / (d_t + 0.5 * z))
            )
        else:
            # Well insulated floors
            u_bf = LAMBDA_GND / (0.457 * b_1 + d_t + 0.5 * z)

        # Additional equivalent thickness from the perimeter insulation
        d_perim = meta.d_perim_insulation
        d_1 = meta.rn_perim_insulation * (LAMBDA_GND - LAMBDA_INS)
        psi_ge = -LAMBDA_GND / math.pi * (
            math.log(d_perim / d_t + 1.0) - math.log(1.0 + d_perim / (d_t + d_1))
        )

        u = u_bf + 2.0 * psi_ge / b_1
        self._sink.debug(
            "U ground slab",
            wall=wall.name,
            u=u,
            r_n=meta.rn_perim_insulation,
            d=d_perim,
            area=area,
            perimeter=perimeter,
            b_1=b_1,
            z=z,
            d_t=d_t,
            r_f=r_intrinsic,
            u_bf=u_bf,
            psi_ge=psi_ge,
        )
        return u

    def _u_basement_wall(self, case: BasementWallCase) -> float:
        """Basement wall, ISO 13370 9.3.3, weighted by its buried height."""
        wall, space, r_intrinsic = case.wall, case.space, case.r_intrinsic
        u_w = 1.0 / (RSI_HORIZONTAL + r_intrinsic + RSE)
        z = space.depth

        if abs(z) < 0.01:
            self._sink.debug("U basement wall above grade", wall=wall.name, u_w=u_w, z=z)
            return u_w

        # Equivalent thickness of the basement floors
        floor_thicknesses = []
        for floor in self._model.walls_of_space(space.id):
            if floor.space != space.id or floor.position != Tilt.BOTTOM:
                continue
            floor_cons = self._model.get_wall_construction(floor)
            if floor_cons is None:
                continue
            floor_thicknesses.append(
                PERIMETER_WALL_WIDTH
                + LAMBDA_GND * (RSI_DESCENDING + floor_cons.r_intrinsic + RSE)
            )

        # Equivalent thickness of the wall
        d_w = LAMBDA_GND * (RSI_HORIZONTAL + r_intrinsic + RSE)
        if floor_thicknesses:
            d_t = min(sum(floor_thicknesses) / len(floor_thicknesses), d_w)
        else:
            d_t = d_w

        # Fully buried wall at depth z
        u_bw = (
            (2.0 * LAMBDA_GND / (math.pi * z))
            * (1.0 + 0.5 * d_t / (d_t + z))
            * math.log(z / d_w + 1.0)
        )

        height_net = self._model.space_height_net(space)
        h = max(0.0, height_net - z)

        if h == 0.0:
            u = u_bw
        else:
            u = (z * u_bw + h * u_w) / height_net

        self._sink.debug(
            "U basement wall",
            wall=wall.name,
            u=u,
            z=z,
            h=h,
            u_w=u_w,
            u_bw=u_bw,
            d_t=d_t,
            d_w=d_w,
        )
        return u

    def _u_unconditioned_partition(self, case: UnconditionedPartitionCase) -> float:
        """Partition towards an unconditioned space, ISO 13789 / ISO 6946 5.4.3.

        1/U = 1/U_f + A_i / (Σ A_e·U_e + 0.33·n·V)
        """
        wall, r_intrinsic, position = case.wall, case.r_intrinsic, case.position
        owner_conditioned = case.owner_is_conditioned

        if (position == Tilt.BOTTOM and owner_conditioned) or (
            position == Tilt.TOP and not owner_conditioned
        ):
            # Heat flows down into the unconditioned space below
            r_f = r_intrinsic + 2.0 * RSI_DESCENDING
        elif position == Tilt.SIDE:
            r_f = r_intrinsic + 2.0 * RSI_HORIZONTAL
        else:
            r_f = r_intrinsic + 2.0 * RSI_ASCENDING

        uncond = case.unconditioned_space
        uncond_volume = self._model.space_height_net(uncond) * uncond.area
        n_ven = self._ventilation_rate(uncond)

        # Exterior and ground elements of the unconditioned space, with their windows
        ua_e = 0.0
        for outer in self._model.walls_of_space(uncond.id):
            if not outer.bounds.exchanges_with_outside:
                continue
            outer_u = self.u_for_wall(outer)
            if outer_u is None:
                continue
            ua_e += outer.area * outer_u
            for window in self._model.windows_of_wall(outer.id):
                window_cons = self._model.get_window_construction(window)
                if window_cons is not None:
                    ua_e += window.area * window_cons.u

        h_ue = ua_e + AIR_HEAT_CAPACITY * n_ven * uncond_volume
        if h_ue <= 0.0:
            self._sink.warning(
                "Unconditioned space without heat losses, U = 0",
                wall_id=wall.id,
                wall_name=wall.name,
                space_id=uncond.id,
            )
            return 0.0

        r_u = wall.area / h_ue
        u = 1.0 / (r_f + r_u)
        self._sink.debug(
            "U partition to unconditioned space",
            wall=wall.name,
            position=position.label,
            u=u,
            r_f=r_f,
            r_u=r_u,
            a_i=wall.area,
            h_ue=h_ue,
            n_ven=n_ven,
        )
        return u

    def _ventilation_rate(self, space: Space) -> float:
        """Air change rate of an unconditioned space [1/h]."""
        if space.n_v is not None:
            return space.n_v

        global_flow = self._model.meta.global_ventilation_l_s
        volume = self._model.vol_env_inh_net()
        if global_flow is None or volume <= 0.0:
            self._sink.warning(
                "No air change rate for unconditioned space, n = 0",
                space_id=space.id,
                space_name=space.name,
                global_ventilation_l_s=global_flow,
            )
            return 0.0
        return 3.6 * global_flow / volume
