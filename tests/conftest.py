"""Pytest configuration and fixtures."""
from __future__ import annotations

from collections.abc import Callable

import pytest

from thermal_envelope.domain import (
    BoundaryType,
    BuildingModel,
    Meta,
    Space,
    SpaceType,
    Wall,
    WallConstruction,
    Window,
    WindowConstruction,
)
from thermal_envelope.infrastructure import CollectingDiagnosticSink
from thermal_envelope.shared.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with default thresholds."""
    return Settings(
        log_level="DEBUG",
        min_envelope_area_m2=0.01,
        min_volume_m3=0.01,
    )


@pytest.fixture
def sink() -> CollectingDiagnosticSink:
    """Diagnostic sink recording every event."""
    return CollectingDiagnosticSink()


@pytest.fixture
def make_cube() -> Callable[..., BuildingModel]:
    """Factory for a single conditioned cubic space with six exterior faces.

    The south face may host a window. Faces are named after their
    position: roof, floor, south, east, north, west.
    """

    def _make(
        side: float = 3.0,
        r_intrinsic: float = 2.0,
        meta: Meta | None = None,
        multiplier: float = 1.0,
        window_area: float = 0.0,
    ) -> BuildingModel:
        face = side * side
        space = Space(
            id="S1",
            name="Living",
            area=face,
            height=side,
            multiplier=multiplier,
        )
        faces = [
            ("roof", 0.0, 0.0),
            ("floor", 180.0, 0.0),
            ("south", 90.0, 0.0),
            ("east", 90.0, 90.0),
            ("north", 90.0, 180.0),
            ("west", 90.0, -90.0),
        ]
        walls = [
            Wall(
                id=f"W-{name}",
                name=name,
                cons="C-wall",
                space="S1",
                bounds=BoundaryType.EXTERIOR,
                area=face,
                tilt=tilt,
                azimuth=azimuth,
            )
            for name, tilt, azimuth in faces
        ]
        windows = []
        if window_area > 0.0:
            windows.append(Window(
                id="G-south",
                name="south window",
                cons="C-window",
                wall="W-south",
                area=window_area,
                fshobst=0.8,
            ))
        return BuildingModel.create(
            meta,
            spaces=[space],
            walls=walls,
            windows=windows,
            wall_constructions=[WallConstruction(id="C-wall", name="Wall", r_intrinsic=r_intrinsic)],
            window_constructions=[
                WindowConstruction(
                    id="C-window",
                    name="Double glazing",
                    u=2.0,
                    ff=0.2,
                    gglwi=0.6,
                    gglshwi=0.5,
                    infcoeff_100=9.0,
                ),
            ],
        )

    return _make


@pytest.fixture
def make_two_spaces() -> Callable[..., BuildingModel]:
    """Factory for a conditioned space A above an unconditioned space B.

    B has a single exterior wall of 20 m² with U = 1.0 W/m²K; the floor of A
    (100 m², R = 1.0 m²K/W) separates both spaces.
    """

    def _make(n_v: float | None = 0.5, meta: Meta | None = None) -> BuildingModel:
        spaces = [
            Space(id="A", name="Space A", area=100.0, height=3.0, z=3.0, height_net=3.0),
            Space(
                id="B",
                name="Space B",
                area=100.0,
                height=3.0,
                height_net=3.0,
                inside_tenv=False,
                space_type=SpaceType.UNCONDITIONED,
                n_v=n_v,
            ),
        ]
        walls = [
            Wall(
                id="F-AB",
                name="Floor A over B",
                cons="C-floor",
                space="A",
                bounds=BoundaryType.INTERIOR,
                area=100.0,
                tilt=180.0,
                nextto="B",
            ),
            Wall(
                id="W-B",
                name="Exterior wall B",
                cons="C-ext",
                space="B",
                bounds=BoundaryType.EXTERIOR,
                area=20.0,
                tilt=90.0,
            ),
        ]
        return BuildingModel.create(
            meta,
            spaces=spaces,
            walls=walls,
            wall_constructions=[
                WallConstruction(id="C-floor", name="Floor", r_intrinsic=1.0),
                # 1 / (0.83 + 0.13 + 0.04) = 1.0
                WallConstruction(id="C-ext", name="Exterior wall", r_intrinsic=0.83),
            ],
        )

    return _make
