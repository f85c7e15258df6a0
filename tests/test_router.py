"""Tests for belt routing."""

from factory_planner.blueprint.building_types import Direction
from factory_planner.blueprint.router import (
    BeltRouter, PathPoint, calculate_belt_path, deduplicate_path, route_belt, route_connection,
)
from factory_planner.data.sample_data import create_sample_layout


class TestSimplePath:
    """Tests for the direct L-shaped path."""

    def test_l_path(self):
        points = calculate_belt_path((0, 0), Direction.EAST, (4, 2), Direction.WEST)
        assert points == [
            PathPoint(0.5, 0), PathPoint(1, 0), PathPoint(2, 0), PathPoint(3, 0),
            PathPoint(3, 1), PathPoint(3, 2), PathPoint(3.5, 2),
        ]

    def test_adjacent_exit_and_entry(self):
        result = route_belt((0, 0), Direction.EAST, (2, 0), Direction.WEST, obstacles={(5, 5)})
        assert result.success
        assert not result.used_astar
        assert result.points == [PathPoint(0.5, 0), PathPoint(1, 0), PathPoint(1.5, 0)]

    def test_no_consecutive_duplicates(self):
        points = calculate_belt_path((3, 3), Direction.NORTH, (3, 0), Direction.SOUTH)
        assert all(a != b for a, b in zip(points, points[1:]))

    def test_deduplicate(self):
        pts = [PathPoint(0, 0), PathPoint(0, 0), PathPoint(1, 0), PathPoint(0, 0)]
        assert deduplicate_path(pts) == [PathPoint(0, 0), PathPoint(1, 0), PathPoint(0, 0)]


class TestAStar:
    """Tests for obstacle avoidance."""

    def test_avoids_obstacle(self):
        result = route_belt((0, 0), Direction.EAST, (4, 0), Direction.WEST, obstacles={(2, 0)})

        assert result.success
        assert result.used_astar
        assert (2, 0) not in result.cells
        assert (1, 0) in result.cells
        assert (3, 0) in result.cells
        assert result.points[0] == PathPoint(0.5, 0)
        assert result.points[-1] == PathPoint(3.5, 0)

    def test_steps_are_adjacent(self):
        obstacles = {(5, y) for y in range(0, 8)}
        result = route_belt((0, 0), Direction.EAST, (10, 0), Direction.WEST, obstacles=obstacles)
        cells = result.cells
        assert result.success
        assert not obstacles & set(cells)
        for (x1, y1), (x2, y2) in zip(cells, cells[1:]):
            assert abs(x1 - x2) + abs(y1 - y2) == 1

    def test_boxed_in_falls_back(self):
        # Exit cell (6, 5) is walled in on every side
        obstacles = {(7, 5), (6, 4), (6, 6), (5, 5)}
        result = route_belt((5, 5), Direction.EAST, (10, 5), Direction.WEST, obstacles=obstacles)

        assert not result.success
        assert result.used_astar
        assert result.points
        assert result.points[0] == PathPoint(5.5, 5)
        assert result.points[-1] == PathPoint(9.5, 5)

    def test_expansion_cap(self):
        router = BeltRouter(max_expansions=1)
        result = router.route((0, 0), Direction.EAST, (10, 0), Direction.WEST, obstacles={(20, 20)})
        assert not result.success
        assert result.nodes_explored <= 1

    def test_ignore_cells(self):
        router = BeltRouter()
        result = router.route((0, 0), Direction.EAST, (4, 0), Direction.WEST,
                              obstacles={(2, 0)}, ignore_cells={(2, 0)})
        assert (2, 0) in result.cells


class TestRouteConnection:
    """Tests for routing wired connections on a layout."""

    def test_routes_around_machines(self):
        layout = create_sample_layout()
        layout.place_item("miner-mk1", 0, 0, item_id="miner")
        layout.place_item("splitter", 3, 1, item_id="block")
        layout.place_item("constructor-mk1", 6, 0, item_id="ctor")
        conn_id = layout.connect("miner", 0, "ctor", 0)

        result = route_connection(layout, layout.get_connection(conn_id))

        assert result is not None
        assert result.success
        assert (3, 1) not in result.cells

    def test_unresolved_port(self):
        layout = create_sample_layout()
        layout.place_item("miner-mk1", 0, 0, item_id="miner")
        layout.place_item("constructor-mk1", 6, 0, item_id="ctor")
        conn_id = layout.connect("miner", 0, "ctor", 0)
        conn = layout.get_connection(conn_id)
        layout.remove_item("ctor")

        assert route_connection(layout, conn) is None
