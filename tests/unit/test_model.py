"""Tests for the building model registry."""
from __future__ import annotations

import dataclasses

import pytest

from thermal_envelope.domain import (
    BoundaryType,
    BuildingModel,
    EntityAlreadyExistsError,
    InvalidTiltError,
    Meta,
    NegativeAreaError,
    Space,
    SpaceType,
    ValidationError,
    Wall,
    WallConstruction,
    Window,
)


def _wall(wall_id: str, space: str = "S1", **kwargs) -> Wall:
    fields = {
        "name": wall_id,
        "cons": "C1",
        "bounds": BoundaryType.EXTERIOR,
        "area": 10.0,
    }
    fields.update(kwargs)
    return Wall(id=wall_id, space=space, **fields)


@pytest.fixture
def model() -> BuildingModel:
    """Two stacked spaces plus a space outside the envelope."""
    return BuildingModel.create(
        Meta(name="Test building"),
        spaces=[
            Space(id="S1", name="Ground floor", area=50.0, height=3.0),
            Space(id="S2", name="First floor", area=50.0, height=3.0, multiplier=2.0),
            Space(
                id="S3",
                name="Garage",
                area=20.0,
                height=2.5,
                inside_tenv=False,
                space_type=SpaceType.UNCONDITIONED,
            ),
        ],
        walls=[
            _wall("W1", azimuth=0.0),
            _wall("W2", bounds=BoundaryType.GROUND, tilt=180.0),
            # Slab between S1 and S2, owned by S2
            _wall("F2", space="S2", cons="C-slab", bounds=BoundaryType.INTERIOR, tilt=180.0, nextto="S1"),
            _wall("R2", space="S2", cons="C-roof", tilt=0.0),
            _wall("A1", bounds=BoundaryType.ADIABATIC),
            _wall("W3", space="S3"),
        ],
        windows=[
            Window(id="G1", name="Window 1", cons="WC1", wall="W1", area=2.0),
            Window(id="G2", name="Window 2", cons="WC1", wall="W3", area=1.0),
        ],
        wall_constructions=[
            WallConstruction(id="C1", name="Wall", r_intrinsic=2.0, thickness=0.3),
            WallConstruction(id="C-slab", name="Slab", r_intrinsic=0.5, thickness=0.2),
            WallConstruction(id="C-roof", name="Roof", r_intrinsic=3.0, thickness=0.4),
        ],
    )


class TestBuildingModelCreate:
    """Tests for BuildingModel.create."""

    def test_create_empty(self) -> None:
        """Test creating an empty model with default metadata."""
        model = BuildingModel.create()
        assert model.meta == Meta()
        assert len(model.spaces) == 0
        assert len(model.walls) == 0

    def test_duplicate_id_raises(self) -> None:
        """Test that duplicated ids are rejected."""
        with pytest.raises(EntityAlreadyExistsError, match="Wall already exists: W1"):
            BuildingModel.create(walls=[_wall("W1"), _wall("W1")])

    @pytest.mark.parametrize("tilt", [-1.0, 180.5, 270.0])
    def test_invalid_tilt_raises(self, tilt: float) -> None:
        """Test that tilts outside [0, 180] are rejected."""
        with pytest.raises(InvalidTiltError):
            BuildingModel.create(walls=[_wall("W1", tilt=tilt)])

    def test_negative_area_raises(self) -> None:
        """Test that negative areas are rejected."""
        with pytest.raises(NegativeAreaError) as exc_info:
            BuildingModel.create(
                windows=[Window(id="G1", name="G1", cons="WC1", wall="W1", area=-1.0)],
            )
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.details["value"] == -1.0

    def test_model_is_immutable(self, model: BuildingModel) -> None:
        """Test that the model cannot be modified after creation."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            model.meta = Meta(name="Other")  # type: ignore[misc]
        with pytest.raises(TypeError):
            model.spaces["S9"] = Space(id="S9", name="X", area=1.0, height=1.0)  # type: ignore[index]


class TestLookups:
    """Tests for id and name lookups."""

    def test_get_space(self, model: BuildingModel) -> None:
        """Test space lookup by id."""
        assert model.get_space("S1").name == "Ground floor"
        assert model.get_space("missing") is None
        assert model.get_space(None) is None

    def test_get_by_name(self, model: BuildingModel) -> None:
        """Test lookups by name."""
        assert model.get_space_by_name("First floor").id == "S2"
        assert model.get_wall_by_name("R2").id == "R2"
        assert model.get_space_by_name("Attic") is None

    def test_construction_lookups(self, model: BuildingModel) -> None:
        """Test construction lookups, absent ones returning None."""
        assert model.get_wall_construction(model.walls["W1"]).r_intrinsic == 2.0
        assert model.get_window_construction(model.windows["G1"]) is None

    def test_window_wall_and_wall_space(self, model: BuildingModel) -> None:
        """Test lookups following element references."""
        window = model.get_window("G1")
        wall = model.get_window_wall(window)
        assert wall.id == "W1"
        assert model.get_wall_space(wall).id == "S1"

    def test_wall_multiplier(self, model: BuildingModel) -> None:
        """Test multiplier of the owning space, 1.0 when unknown."""
        assert model.get_wall_multiplier(model.walls["R2"]) == 2.0
        assert model.get_wall_multiplier(_wall("X", space="missing")) == 1.0


class TestTraversal:
    """Tests for relationship traversal."""

    def test_windows_of_wall(self, model: BuildingModel) -> None:
        """Test windows hosted by a wall."""
        assert [w.id for w in model.windows_of_wall("W1")] == ["G1"]
        assert list(model.windows_of_wall("W2")) == []

    def test_walls_of_space_includes_adjacent(self, model: BuildingModel) -> None:
        """Test that interior walls of other spaces pointing here are included."""
        ids = {w.id for w in model.walls_of_space("S1")}
        assert ids == {"W1", "W2", "A1", "F2"}

    def test_walls_of_envelope(self, model: BuildingModel) -> None:
        """Test envelope walls: exterior or ground, inside the envelope."""
        ids = {w.id for w in model.walls_of_envelope()}
        assert ids == {"W1", "W2", "R2"}

    def test_windows_of_envelope(self, model: BuildingModel) -> None:
        """Test envelope windows: hosted by exterior envelope walls."""
        assert [w.id for w in model.windows_of_envelope()] == ["G1"]

    def test_top_walls_of_space(self, model: BuildingModel) -> None:
        """Test elements closing the top of a space."""
        assert {w.id for w in model.top_walls_of_space("S1")} == {"F2"}
        assert {w.id for w in model.top_walls_of_space("S2")} == {"R2"}

    def test_traversal_is_repeatable(self, model: BuildingModel) -> None:
        """Test that traversals yield the same result on every call."""
        first = [w.id for w in model.walls_of_envelope()]
        second = [w.id for w in model.walls_of_envelope()]
        assert first == second


class TestHeightsAndVolumes:
    """Tests for net heights, areas and volumes."""

    def test_space_height_net_from_top_elements(self, model: BuildingModel) -> None:
        """Test net height discounting the closing slab or roof."""
        assert model.space_height_net(model.spaces["S1"]) == pytest.approx(2.8)
        assert model.space_height_net(model.spaces["S2"]) == pytest.approx(2.6)

    def test_space_height_net_explicit(self) -> None:
        """Test that an explicit net height takes precedence."""
        space = Space(id="S1", name="S1", area=10.0, height=3.0, height_net=2.5)
        model = BuildingModel.create(spaces=[space], walls=[_wall("R1", tilt=0.0)])
        assert model.space_height_net(space) == 2.5

    def test_space_height_net_without_top(self, model: BuildingModel) -> None:
        """Test that a space without top elements keeps its gross height."""
        assert model.space_height_net(model.spaces["S3"]) == 2.5

    def test_a_ref(self) -> None:
        """Test reference area excludes uninhabited and outside spaces."""
        model = BuildingModel.create(spaces=[
            Space(id="S1", name="S1", area=50.0, height=3.0, multiplier=2.0),
            Space(id="S2", name="S2", area=30.0, height=3.0, space_type=SpaceType.UNINHABITED),
            Space(id="S3", name="S3", area=20.0, height=3.0, inside_tenv=False),
        ])
        assert model.a_ref() == pytest.approx(100.0)

    def test_volumes(self, model: BuildingModel) -> None:
        """Test gross and net envelope volumes."""
        assert model.vol_env_gross() == pytest.approx(50.0 * 3.0 + 50.0 * 3.0 * 2.0)
        assert model.vol_env_net() == pytest.approx(50.0 * 2.8 + 50.0 * 2.6 * 2.0)
        assert model.vol_env_inh_net() == pytest.approx(model.vol_env_net())
