"""Envelope Metrics Service.

Whole-building indicators of the thermal envelope:

- K: global transmittance of the envelope, thermal bridges included
- n50: air change rate at 50 Pa, from a blower door test or estimated
- C_o: opaque element air permeability backed out of a measured n50
- V/A: compacity
- q_sol;jul: July solar gain control parameter
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from thermal_envelope.application.services.u_value_service import UValueService
from thermal_envelope.domain import (
    BoundaryType,
    BuildingModel,
    IDiagnosticSink,
    Orientation,
    Wall,
)
from thermal_envelope.infrastructure.diagnostics import StructlogDiagnosticSink
from thermal_envelope.shared.config import Settings, settings as default_settings

# Default air permeability of opaque elements at 100 Pa [m³/h·m²]
C_O_NEW_BUILDING = 16.0
C_O_EXISTING_BUILDING = 29.0

# Empirical conversion from permeability at 100 Pa to air changes at 50 Pa
N50_FACTOR = 0.629


@dataclass(frozen=True)
class KDetail:
    """Global transmittance K and its components."""

    k: float
    walls_a: float = 0.0
    walls_a_u: float = 0.0
    windows_a: float = 0.0
    windows_a_u: float = 0.0
    thermal_bridges_l: float = 0.0
    thermal_bridges_psi_l: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict."""
        return {
            "K": round(self.k, 2),
            "walls_a_m2": round(self.walls_a, 2),
            "walls_a_u_w_k": round(self.walls_a_u, 2),
            "windows_a_m2": round(self.windows_a, 2),
            "windows_a_u_w_k": round(self.windows_a_u, 2),
            "thermal_bridges_l_m": round(self.thermal_bridges_l, 2),
            "thermal_bridges_psi_l_w_k": round(self.thermal_bridges_psi_l, 2),
        }


@dataclass(frozen=True)
class N50Detail:
    """Estimated n50 and its components."""

    n50: float
    walls_c_a: float = 0.0
    windows_c_a: float = 0.0
    vol: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict."""
        return {
            "n50": round(self.n50, 2),
            "walls_c_a_m3_h": round(self.walls_c_a, 2),
            "windows_c_a_m3_h": round(self.windows_c_a, 2),
            "vol_m3": round(self.vol, 2),
        }


class EnvelopeMetricsService:
    """Service for whole-building envelope indicators."""

    def __init__(
        self,
        model: BuildingModel,
        sink: IDiagnosticSink | None = None,
        settings: Settings | None = None,
        u_values: UValueService | None = None,
    ) -> None:
        """Initialize service.

        Args:
            model: Building model to read from
            sink: Receiver of diagnostic events (structlog when None)
            settings: Thresholds (global settings when None)
            u_values: Resolver for opaque elements (built on the same model and sink when None)
        """
        self._model = model
        self._sink = sink or StructlogDiagnosticSink(__name__)
        self._settings = settings or default_settings
        self._u_values = u_values or UValueService(model, self._sink)

    # =========================================================================
    # Areas and volumes
    # =========================================================================

    def a_ref(self) -> float:
        """Reference usable floor area [m²]."""
        return self._model.a_ref()

    def vol_env_gross(self) -> float:
        """Gross volume inside the thermal envelope [m³]."""
        return self._model.vol_env_gross()

    def vol_env_net(self) -> float:
        """Net volume inside the thermal envelope [m³]."""
        return self._model.vol_env_net()

    def vol_env_inh_net(self) -> float:
        """Net volume of the inhabited spaces inside the thermal envelope [m³]."""
        return self._model.vol_env_inh_net()

    # =========================================================================
    # Compacity
    # =========================================================================

    def compacity(self) -> float:
        """Compacity V/A of the thermal envelope [m³/m²].

        V is the gross envelope volume; A the area of walls and windows
        exchanging heat with outdoor air or the ground, multipliers applied.
        """
        vol = self.vol_env_gross()
        area = 0.0
        for wall in self._model.walls_of_envelope():
            windows_area = sum(w.area for w in self._model.windows_of_wall(wall.id))
            area += (wall.area + windows_area) * self._model.get_wall_multiplier(wall)

        compacity = 0.0 if area == 0.0 else vol / area
        self._sink.info("Compacity", compacity=compacity, vol=vol, area=area)
        return compacity

    # =========================================================================
    # Global transmittance
    # =========================================================================

    def k_detail(self) -> KDetail:
        """Global transmittance K of the envelope [W/m²K], with its components.

        Walls without a resolvable U-value are left out together with their
        windows; windows without a construction are left out on their own.
        """
        walls_a = walls_a_u = windows_a = windows_a_u = 0.0

        for wall in self._model.walls_of_envelope():
            wall_u = self._u_values.u_for_wall(wall)
            if wall_u is None:
                continue
            multiplier = self._model.get_wall_multiplier(wall)

            win_a = win_a_u = 0.0
            for window in self._model.windows_of_wall(wall.id):
                window_cons = self._model.get_window_construction(window)
                if window_cons is None:
                    self._warn_window_reference(window.id, window.name, window.cons)
                    continue
                win_a += window.area
                win_a_u += window.area * window_cons.u

            walls_a += wall.area * multiplier
            walls_a_u += wall.area * wall_u * multiplier
            windows_a += win_a * multiplier
            windows_a_u += win_a_u * multiplier

        bridges = list(self._model.thermal_bridges.values())
        bridges_l = sum(tb.length for tb in bridges)
        bridges_psi_l = sum(tb.psi_l for tb in bridges)

        total_a_u = walls_a_u + windows_a_u + bridges_psi_l
        total_a = walls_a + windows_a
        k = 0.0 if total_a <= self._settings.min_envelope_area_m2 else total_a_u / total_a

        self._sink.info(
            "Global transmittance",
            k=k,
            walls_a=walls_a,
            walls_a_u=walls_a_u,
            windows_a=windows_a,
            windows_a_u=windows_a_u,
            thermal_bridges_l=bridges_l,
            thermal_bridges_psi_l=bridges_psi_l,
        )
        return KDetail(
            k=k,
            walls_a=walls_a,
            walls_a_u=walls_a_u,
            windows_a=windows_a,
            windows_a_u=windows_a_u,
            thermal_bridges_l=bridges_l,
            thermal_bridges_psi_l=bridges_psi_l,
        )

    def k(self) -> float:
        """Global transmittance K [W/m²K]."""
        return self.k_detail().k

    # =========================================================================
    # Air tightness
    # =========================================================================

    def default_opaque_permeability(self) -> float:
        """Default air permeability of opaque elements [m³/h·m²] by building age."""
        if self._model.meta.is_new_building:
            return C_O_NEW_BUILDING
        return C_O_EXISTING_BUILDING

    def opaque_permeability(self) -> float:
        """Opaque air permeability from the blower door test, or the default."""
        n50_test = self._model.meta.n50_test_ach
        if n50_test is not None:
            return self.opaque_permeability_from_n50(n50_test)
        return self.default_opaque_permeability()

    def n50(self) -> float:
        """Air change rate at 50 Pa [1/h], measured when available, else estimated."""
        n50_test = self._model.meta.n50_test_ach
        if n50_test is not None:
            return n50_test
        return self.n50_detail().n50

    def n50_detail(self, c_o: float | None = None) -> N50Detail:
        """Estimated air change rate at 50 Pa [1/h].

        Uses the exterior opaque elements of the envelope with the given (or
        default) opaque permeability, the permeability of their windows, and
        the net envelope volume. Windows without a construction are left out.

        Args:
            c_o: Opaque permeability [m³/h·m²], the default by building age when None

        Returns:
            N50Detail with the estimate and its components
        """
        vol = self.vol_env_net()
        if vol <= self._settings.min_volume_m3:
            self._sink.info("Estimated n50 without envelope volume", n50=0.0, vol=vol)
            return N50Detail(n50=0.0, vol=vol)

        if c_o is None:
            c_o = self.default_opaque_permeability()

        walls_area, windows_c_a = self._exterior_permeable_areas()
        walls_c_a = walls_area * c_o
        n50 = N50_FACTOR * (walls_c_a + windows_c_a) / vol

        self._sink.info(
            "Estimated n50",
            n50=n50,
            walls_c_a=walls_c_a,
            windows_c_a=windows_c_a,
            vol=vol,
        )
        return N50Detail(n50=n50, walls_c_a=walls_c_a, windows_c_a=windows_c_a, vol=vol)

    def opaque_permeability_from_n50(self, n50: float) -> float:
        """Opaque air permeability matching a given n50 [m³/h·m²].

        Inverts the n50 estimate for the opaque permeability, keeping the
        window permeabilities of the model.

        Args:
            n50: Air change rate at 50 Pa [1/h]

        Returns:
            Equivalent opaque permeability, 0.0 without exterior opaque area
        """
        vol = self.vol_env_net()
        walls_area, windows_c_a = self._exterior_permeable_areas()
        if walls_area <= 0.0:
            self._sink.warning(
                "Opaque permeability undefined without exterior opaque area",
                n50=n50,
                vol=vol,
            )
            return 0.0

        c_o = ((n50 * vol) / N50_FACTOR - windows_c_a) / walls_area
        self._sink.info(
            "Opaque permeability from n50",
            c_o=c_o,
            n50=n50,
            vol=vol,
            windows_c_a=windows_c_a,
            walls_a=walls_area,
        )
        return c_o

    def _exterior_permeable_areas(self) -> tuple[float, float]:
        """Exterior opaque area and Σ A·C of its windows, multipliers applied."""
        walls_area = 0.0
        windows_c_a = 0.0
        for wall in self._exterior_envelope_walls():
            multiplier = self._model.get_wall_multiplier(wall)
            wall_c_a = 0.0
            for window in self._model.windows_of_wall(wall.id):
                window_cons = self._model.get_window_construction(window)
                if window_cons is None:
                    self._warn_window_reference(window.id, window.name, window.cons)
                    continue
                wall_c_a += window.area * window_cons.infcoeff_100
            walls_area += wall.area * multiplier
            windows_c_a += wall_c_a * multiplier
        return walls_area, windows_c_a

    def _exterior_envelope_walls(self) -> list[Wall]:
        return [
            w for w in self._model.walls_of_envelope()
            if w.bounds == BoundaryType.EXTERIOR
        ]

    # =========================================================================
    # Solar control
    # =========================================================================

    def q_soljul(self, totradjul: Mapping[Orientation, float]) -> float:
        """July solar gain control parameter q_sol;jul [kWh/m²·month].

        Args:
            totradjul: Accumulated July irradiance per orientation [kWh/m²·month]

        Returns:
            Solar gains through the envelope windows per unit reference area
        """
        q_sol = 0.0
        for window in self._model.windows_of_envelope():
            wall = self._model.get_window_wall(window)
            window_cons = self._model.get_window_construction(window)
            if wall is None:
                self._warn_window_reference(window.id, window.name, window.wall)
                continue
            if window_cons is None:
                self._warn_window_reference(window.id, window.name, window.cons)
                continue
            orientation = wall.orientation
            radjul = totradjul.get(orientation)
            if radjul is None:
                self._sink.warning(
                    "Window excluded, no July irradiance for its orientation",
                    window_id=window.id,
                    window_name=window.name,
                    orientation=orientation.value,
                )
                continue
            self._sink.debug(
                "Window solar gain",
                window=window.name,
                area=window.area,
                orientation=orientation.value,
                ff=window_cons.ff,
                gglshwi=window_cons.gglshwi,
                fshobst=window.fshobst,
                radjul=radjul,
            )
            q_sol += (
                window.fshobst
                * window_cons.gglshwi
                * (1.0 - window_cons.ff)
                * window.area
                * radjul
            )

        a_ref = self.a_ref()
        if a_ref <= 0.0:
            self._sink.warning("Solar control parameter without reference area", q_sol=q_sol)
            return 0.0
        q_soljul = q_sol / a_ref
        self._sink.info("Solar control parameter", q_soljul=q_soljul, Q_soljul=q_sol, a_ref=a_ref)
        return q_soljul

    def _warn_window_reference(self, window_id: str, window_name: str, missing_id: str) -> None:
        self._sink.warning(
            "Window excluded, unresolved reference",
            window_id=window_id,
            window_name=window_name,
            missing_id=missing_id,
        )
