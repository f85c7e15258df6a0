"""Conveyor belt routing between machine ports with A* pathfinding."""

import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AbstractSet, Dict, List, NamedTuple, Optional, Set, Tuple

from ..config import DEFAULT_CONFIG, MAX_EXPANSIONS, SEARCH_MARGIN, GridSpec, PlannerConfig
from .building_types import Direction, port_world_position
from .placer import occupied_cells

if TYPE_CHECKING:
    from ..simulator.design import Connection, Layout

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class PathPoint(NamedTuple):
    """A point on a belt path. Cell centres are integral, port edges sit on .5."""
    x: float
    y: float


@dataclass
class RouteResult:
    """Result of routing one belt."""
    points: List[PathPoint]
    success: bool  # False when the obstacle search failed and the direct path was used
    used_astar: bool = False
    nodes_explored: int = 0

    @property
    def cells(self) -> List[Cell]:
        """Grid cells the belt occupies, without the two half-cell edge points."""
        return [
            (int(p.x), int(p.y)) for p in self.points
            if float(p.x).is_integer() and float(p.y).is_integer()
        ]


@dataclass(order=True)
class AStarNode:
    """Node for A* pathfinding."""
    priority: int
    x: int = field(compare=False)
    y: int = field(compare=False)
    g_cost: int = field(compare=False)


def _step(cell: Cell, direction: Direction) -> Cell:
    dx, dy = direction.delta
    return (cell[0] + dx, cell[1] + dy)


def _edge_point(cell: Cell, direction: Direction) -> PathPoint:
    """Half a cell from the port centre toward its facing, on the machine edge."""
    dx, dy = direction.delta
    return PathPoint(cell[0] + dx * 0.5, cell[1] + dy * 0.5)


def deduplicate_path(points: List[PathPoint]) -> List[PathPoint]:
    """Drop consecutive duplicate points."""
    result: List[PathPoint] = []
    for p in points:
        if not result or result[-1] != p:
            result.append(p)
    return result


class BeltRouter:
    """Routes belts between oriented ports.

    Open space gets a direct L-shaped path. When obstacles are supplied the
    router runs a bounded A* search and drops back to the L-path if the
    search cannot reach the entry cell.
    """

    def __init__(self, grid: Optional[GridSpec] = None, margin: int = SEARCH_MARGIN,
                 max_expansions: int = MAX_EXPANSIONS):
        """
        Initialize the router.

        Args:
            grid: Grid the search window is built around
            margin: Cells of slack around the grid on every side
            max_expansions: A* expansion cap
        """
        self.grid = grid or DEFAULT_CONFIG.grid
        self.margin = margin
        self.max_expansions = max_expansions

    def route(self, start: Cell, start_dir: Direction, end: Cell, end_dir: Direction,
              obstacles: Optional[AbstractSet[Cell]] = None,
              ignore_cells: Optional[AbstractSet[Cell]] = None) -> RouteResult:
        """
        Route a belt from an output port to an input port.

        Args:
            start: Cell of the source port
            start_dir: Direction the source port faces
            end: Cell of the target port
            end_dir: Direction the target port faces
            obstacles: Cells the belt must avoid; None disables avoidance
            ignore_cells: Cells allowed even when listed as obstacles

        Returns:
            RouteResult with the path points
        """
        start_edge = _edge_point(start, start_dir)
        end_edge = _edge_point(end, end_dir)
        exit_cell = _step(start, start_dir)
        entry_cell = _step(end, end_dir)

        if obstacles is None or exit_cell == entry_cell:
            points = self._simple_path(start_edge, exit_cell, entry_cell, end_edge, start, end)
            return RouteResult(points=points, success=True)

        cells, explored = self._find_path(exit_cell, entry_cell, obstacles, ignore_cells or set())
        if not cells:
            logger.debug(
                "No belt route from %s to %s after %d expansions, using direct path",
                exit_cell, entry_cell, explored,
            )
            points = self._simple_path(start_edge, exit_cell, entry_cell, end_edge, start, end)
            return RouteResult(points=points, success=False, used_astar=True,
                               nodes_explored=explored)

        points = [start_edge] + [PathPoint(x, y) for x, y in cells] + [end_edge]
        return RouteResult(points=deduplicate_path(points), success=True, used_astar=True,
                           nodes_explored=explored)

    def _in_window(self, x: int, y: int) -> bool:
        return (
            -self.margin <= x < self.grid.width + self.margin
            and -self.margin <= y < self.grid.height + self.margin
        )

    def _find_path(self, start: Cell, target: Cell, obstacles: AbstractSet[Cell],
                   ignore_cells: AbstractSet[Cell]) -> Tuple[List[Cell], int]:
        """
        4-directional A* with unit steps and a Manhattan heuristic.

        Returns the cell path from start to target inclusive (empty if none
        was found) and the number of nodes expanded.
        """
        def heuristic(x: int, y: int) -> int:
            return abs(x - target[0]) + abs(y - target[1])

        open_set = [AStarNode(priority=heuristic(*start), x=start[0], y=start[1], g_cost=0)]
        g_score: Dict[Cell, int] = {start: 0}
        came_from: Dict[Cell, Cell] = {}
        closed_set: Set[Cell] = set()

        iterations = 0
        while open_set and iterations < self.max_expansions:
            current = heapq.heappop(open_set)
            cell = (current.x, current.y)
            if cell in closed_set:
                continue
            iterations += 1
            closed_set.add(cell)

            if cell == target:
                return self._reconstruct_path(came_from, cell), iterations

            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                neighbor = (current.x + dx, current.y + dy)
                if neighbor in closed_set:
                    continue
                if not self._in_window(*neighbor):
                    continue
                if neighbor in obstacles and neighbor not in ignore_cells:
                    continue

                new_g = current.g_cost + 1
                if new_g < g_score.get(neighbor, new_g + 1):
                    g_score[neighbor] = new_g
                    came_from[neighbor] = cell
                    heapq.heappush(open_set, AStarNode(
                        priority=new_g + heuristic(*neighbor),
                        x=neighbor[0], y=neighbor[1],
                        g_cost=new_g,
                    ))

        return [], iterations

    @staticmethod
    def _reconstruct_path(came_from: Dict[Cell, Cell], end: Cell) -> List[Cell]:
        path = [end]
        while path[-1] in came_from:
            path.append(came_from[path[-1]])
        path.reverse()
        return path

    @staticmethod
    def _simple_path(start_edge: PathPoint, first: Cell, last: Cell, end_edge: PathPoint,
                     start: Cell, end: Cell) -> List[PathPoint]:
        """L-shaped path: along x first, then y. Port cells themselves are skipped."""
        def is_port(cell: Cell) -> bool:
            return cell == start or cell == end

        points = [start_edge]
        x, y = first
        if not is_port(first):
            points.append(PathPoint(x, y))

        while x != last[0]:
            x += 1 if x < last[0] else -1
            if not is_port((x, y)):
                points.append(PathPoint(x, y))
        while y != last[1]:
            y += 1 if y < last[1] else -1
            if not is_port((x, y)):
                points.append(PathPoint(x, y))

        points.append(end_edge)
        return deduplicate_path(points)


def route_belt(start: Cell, start_dir: Direction, end: Cell, end_dir: Direction,
               obstacles: Optional[AbstractSet[Cell]] = None,
               ignore_cells: Optional[AbstractSet[Cell]] = None,
               config: Optional[PlannerConfig] = None) -> RouteResult:
    """Route a single belt with a router sized to the configured grid."""
    config = config or DEFAULT_CONFIG
    return BeltRouter(config.grid).route(start, start_dir, end, end_dir, obstacles, ignore_cells)


def calculate_belt_path(start: Cell, start_dir: Direction, end: Cell, end_dir: Direction,
                        obstacles: Optional[AbstractSet[Cell]] = None,
                        ignore_cells: Optional[AbstractSet[Cell]] = None,
                        config: Optional[PlannerConfig] = None) -> List[PathPoint]:
    """Path points for a belt, falling back to the direct path when blocked."""
    return route_belt(start, start_dir, end, end_dir, obstacles, ignore_cells, config).points


def route_connection(layout: "Layout", connection: "Connection",
                     config: Optional[PlannerConfig] = None,
                     obstacles: Optional[AbstractSet[Cell]] = None) -> Optional[RouteResult]:
    """
    Route the belt of an existing connection around placed machines.

    Both port cells are exempt from the obstacle set so the belt can leave
    and enter its own machines.

    Returns:
        RouteResult, or None if either endpoint no longer resolves to a port
    """
    source = layout.get_item(connection.source_item_id)
    target = layout.get_item(connection.target_item_id)
    if source is None or target is None:
        return None

    source_bp = layout.get_blueprint(source.blueprint_id)
    target_bp = layout.get_blueprint(target.blueprint_id)
    if source_bp is None or target_bp is None:
        return None

    source_port = port_world_position(source_bp, source.x, source.y, source.rotation,
                                      connection.source_port_index)
    target_port = port_world_position(target_bp, target.x, target.y, target.rotation,
                                      connection.target_port_index)
    if source_port is None or target_port is None:
        return None

    (start, start_dir), (end, end_dir) = source_port, target_port
    if obstacles is None:
        obstacles = occupied_cells(layout)
    return route_belt(start, start_dir, end, end_dir, obstacles, {start, end}, config)
