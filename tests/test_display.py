"""Tests for sample data and the text display."""

import numpy as np
from factory_planner.blueprint.placer import is_placement_valid
from factory_planner.config import DEFAULT_CONFIG
from factory_planner.data.sample_data import (
    SAMPLE_BLUEPRINTS, SAMPLE_RECIPES, create_demo_layout, create_sample_layout,
)
from factory_planner.simulator.power import calculate_power
from factory_planner.visualization.layout_display import CORE, EMPTY, LayoutDisplay, get_occupancy_grid


class TestSampleData:
    """Tests for the sample catalogs."""

    def test_ports_on_edges(self):
        for bp in SAMPLE_BLUEPRINTS:
            for port in bp.ports:
                assert port.is_on_edge(bp.width, bp.height), (bp.id, port)

    def test_recipes_reference_blueprints(self):
        ids = {bp.id for bp in SAMPLE_BLUEPRINTS}
        for recipe in SAMPLE_RECIPES:
            assert recipe.machine_type in ids

    def test_demo_layout_is_valid(self):
        layout = create_demo_layout()
        for item in layout.items:
            assert is_placement_valid(
                layout, item.blueprint_id, item.x, item.y, item.rotation,
                exclude_item_id=item.id,
            ), item.id
        assert len(layout.connections) == 3

    def test_demo_layout_power(self):
        power = calculate_power(create_demo_layout())
        assert power.connected_relay_ids == {"pylon-a", "pylon-b", "pylon-c"}
        assert power.powered_machine_ids == {"miner", "smelter", "constructor"}


class TestOccupancyGrid:
    """Tests for get_occupancy_grid."""

    def test_empty_layout(self):
        grid = get_occupancy_grid(create_sample_layout())
        assert grid.shape == (40, 40)
        assert np.count_nonzero(grid == CORE) == 81
        assert grid[0, 0] == EMPTY
        assert grid[15, 15] == CORE and grid[23, 23] == CORE
        assert grid[24, 24] == EMPTY

    def test_items_numbered(self):
        layout = create_sample_layout()
        layout.place_item("smelter-mk1", 2, 3)
        grid = get_occupancy_grid(layout)
        # Indexed [y, x]
        assert np.count_nonzero(grid == 1) == 6
        assert grid[3, 2] == 1 and grid[5, 3] == 1
        assert grid[6, 2] == EMPTY

    def test_clips_outside_grid(self):
        layout = create_sample_layout()
        layout.place_item("assembler-mk1", 38, 38)
        grid = get_occupancy_grid(layout)
        assert np.count_nonzero(grid == 1) == 4


class TestLayoutDisplay:
    """Tests for LayoutDisplay."""

    def test_ascii_dimensions(self):
        text = LayoutDisplay(create_demo_layout()).to_ascii()
        rows = text.split("\n")
        assert len(rows) == DEFAULT_CONFIG.grid.height
        assert all(len(row) == DEFAULT_CONFIG.grid.width for row in rows)

    def test_ascii_symbols(self):
        rows = LayoutDisplay(create_demo_layout()).to_ascii().split("\n")
        assert rows[15][15] == "#"
        assert rows[15][24] == "+"
        assert rows[19][26] == "M"
        # Storage is out of pylon range
        assert rows[30][36] == "s"
        assert "=" in "".join(rows)

    def test_report(self):
        report = LayoutDisplay(create_demo_layout()).report()
        assert "Power: 9/10 kW" in report
        assert "Machines powered: 3/4" in report
        assert "Miner Mk1[0] -> Smelter Mk1[0]: 60.0/min" in report
        assert "Constructor Mk1[1] -> Storage Container[0]: 40.0/min" in report
