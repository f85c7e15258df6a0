"""Tests for placement validation."""

from factory_planner.blueprint.building_types import MachineBlueprint, Rotation
from factory_planner.blueprint.placer import (
    BoundingBox, PlacementCandidate, bounding_box, is_group_placement_valid,
    is_placement_valid, occupied_cells,
)
from factory_planner.config import CoreRegion, DEFAULT_CONFIG, PlannerConfig
from factory_planner.data.sample_data import create_sample_layout


def _layout():
    layout = create_sample_layout()
    layout.add_blueprint(MachineBlueprint(id="bar", name="Bar", width=2, height=1))
    return layout


class TestBoundingBox:
    """Tests for BoundingBox."""

    def test_unknown_blueprint(self):
        assert bounding_box(None, 0, 0, Rotation.DEG_0) is None

    def test_rotated_footprint(self):
        layout = _layout()
        box = bounding_box(layout.get_blueprint("smelter-mk1"), 5, 5, Rotation.DEG_90)
        assert box == BoundingBox(5, 5, 7, 6)
        assert box.rect == (5, 5, 3, 2)

    def test_overlap_is_symmetric(self):
        a = BoundingBox.from_rect(0, 0, 3, 3)
        b = BoundingBox.from_rect(2, 2, 3, 3)
        c = BoundingBox.from_rect(10, 10, 1, 1)
        assert a.overlaps(b) and b.overlaps(a)
        assert not a.overlaps(c) and not c.overlaps(a)

    def test_touching_boxes_do_not_overlap(self):
        a = BoundingBox.from_rect(0, 0, 2, 2)
        b = BoundingBox.from_rect(2, 0, 2, 2)
        assert not a.overlaps(b)


class TestGridBounds:
    """Tests for grid boundary checks."""

    def test_corners(self):
        layout = _layout()
        assert is_placement_valid(layout, "splitter", 0, 0, Rotation.DEG_0)
        assert is_placement_valid(layout, "splitter", 39, 39, Rotation.DEG_0)

    def test_outside(self):
        layout = _layout()
        assert not is_placement_valid(layout, "splitter", 40, 0, Rotation.DEG_0)
        assert not is_placement_valid(layout, "splitter", 0, 40, Rotation.DEG_0)
        assert not is_placement_valid(layout, "splitter", -1, 0, Rotation.DEG_0)
        assert not is_placement_valid(layout, "splitter", 0, -1, Rotation.DEG_0)

    def test_rotation_changes_fit(self):
        layout = _layout()
        assert not is_placement_valid(layout, "bar", 39, 0, Rotation.DEG_0)
        assert is_placement_valid(layout, "bar", 39, 0, Rotation.DEG_90)

    def test_unknown_blueprint_invalid(self):
        assert not is_placement_valid(_layout(), "missing", 0, 0, Rotation.DEG_0)


class TestCoreRegion:
    """Tests for the reserved core area."""

    def test_default_core_is_centred(self):
        assert DEFAULT_CONFIG.core == CoreRegion(15, 15, 9, 9)

    def test_inside_core(self):
        layout = _layout()
        for x, y in [(19, 19), (15, 15), (23, 23)]:
            assert not is_placement_valid(layout, "splitter", x, y, Rotation.DEG_0)

    def test_next_to_core(self):
        layout = _layout()
        for x, y in [(14, 15), (15, 14), (24, 15), (15, 24)]:
            assert is_placement_valid(layout, "splitter", x, y, Rotation.DEG_0)

    def test_large_machine_corner(self):
        layout = _layout()
        assert not is_placement_valid(layout, "assembler-mk1", 13, 13, Rotation.DEG_0)
        assert is_placement_valid(layout, "assembler-mk1", 12, 12, Rotation.DEG_0)

    def test_custom_grid(self):
        layout = _layout()
        config = PlannerConfig.for_grid(20, 20)
        assert config.core == CoreRegion(5, 5, 9, 9)
        assert is_placement_valid(layout, "splitter", 19, 19, Rotation.DEG_0, config=config)
        assert not is_placement_valid(layout, "splitter", 20, 0, Rotation.DEG_0, config=config)


class TestCollisions:
    """Tests for machine overlap."""

    def test_overlap_rejected(self):
        layout = _layout()
        layout.place_item("miner-mk1", 0, 0, item_id="a")
        assert not is_placement_valid(layout, "miner-mk1", 1, 1, Rotation.DEG_0)
        assert is_placement_valid(layout, "miner-mk1", 2, 0, Rotation.DEG_0)

    def test_exclude_self(self):
        layout = _layout()
        layout.place_item("miner-mk1", 0, 0, item_id="a")
        assert is_placement_valid(layout, "miner-mk1", 1, 0, Rotation.DEG_0, exclude_item_id="a")

    def test_group(self):
        layout = _layout()
        layout.place_item("miner-mk1", 0, 0, item_id="a")
        ok = [PlacementCandidate("splitter", 5, 5), PlacementCandidate("splitter", 6, 5)]
        clash = [PlacementCandidate("splitter", 5, 5), PlacementCandidate("miner-mk1", 5, 5)]
        on_item = [PlacementCandidate("splitter", 1, 1)]

        assert is_group_placement_valid(layout, ok)
        assert not is_group_placement_valid(layout, clash)
        assert not is_group_placement_valid(layout, on_item)
        assert is_group_placement_valid(layout, on_item, exclude_item_ids=["a"])

    def test_occupied_cells(self):
        layout = _layout()
        layout.place_item("miner-mk1", 3, 4)
        assert occupied_cells(layout) == {(3, 4), (4, 4), (3, 5), (4, 5)}
