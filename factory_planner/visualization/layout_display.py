"""Text display of a layout: occupancy grid, belts, power and throughput."""

from typing import Dict, List, Optional

import numpy as np

from ..blueprint.placer import item_bounding_box
from ..blueprint.router import route_connection
from ..config import DEFAULT_CONFIG, PYLON_BLUEPRINT_ID, PlannerConfig
from ..simulator.design import Layout
from ..simulator.power import PowerResult, calculate_power, power_summary
from ..simulator.simulator import ThroughputResult, ThroughputSimulator

# Occupancy grid cell codes
EMPTY = 0
CORE = -1
# Placed items are numbered from 1 in layout order


def get_occupancy_grid(layout: Layout, config: Optional[PlannerConfig] = None) -> np.ndarray:
    """
    Build an occupancy grid of shape (height, width).

    Cells hold 0 when free, -1 inside the Automation Core and the 1-based
    layout index of the machine covering them otherwise. Footprints outside
    the grid are clipped.
    """
    config = config or DEFAULT_CONFIG
    grid = np.zeros((config.grid.height, config.grid.width), dtype=np.int32)

    core = config.core
    grid[core.y:core.y + core.height, core.x:core.x + core.width] = CORE

    for number, item in enumerate(layout.items, start=1):
        box = item_bounding_box(layout, item)
        if box is None:
            continue
        x0, y0 = max(box.min_x, 0), max(box.min_y, 0)
        x1, y1 = box.max_x + 1, box.max_y + 1
        if x0 >= x1 or y0 >= y1:
            continue
        grid[y0:y1, x0:x1] = number

    return grid


class LayoutDisplay:
    """Renders a layout snapshot and its computed state as text."""

    def __init__(self, layout: Layout, config: Optional[PlannerConfig] = None):
        """
        Initialize the display and run the power and throughput queries.

        Args:
            layout: The layout to display
            config: Grid, core and power configuration
        """
        self.layout = layout
        self.config = config or DEFAULT_CONFIG
        self.power: PowerResult = calculate_power(layout, self.config)
        self.throughput: ThroughputResult = ThroughputSimulator(layout).execute()

    def _symbols(self) -> Dict[int, str]:
        """One character per placed item: first letter of its blueprint name."""
        symbols = {EMPTY: ".", CORE: "#"}
        for number, item in enumerate(self.layout.items, start=1):
            blueprint = self.layout.get_blueprint(item.blueprint_id)
            if item.blueprint_id == PYLON_BLUEPRINT_ID:
                symbol = "+"
            elif blueprint is not None and blueprint.name:
                symbol = blueprint.name[0].upper()
            else:
                symbol = "?"
            if item.id not in self.power.powered_machine_ids and item.blueprint_id != PYLON_BLUEPRINT_ID:
                symbol = symbol.lower()
            symbols[number] = symbol
        return symbols

    def to_ascii(self, show_belts: bool = True) -> str:
        """
        ASCII map of the grid.

        ``#`` is the core, ``+`` a pylon, ``=`` a belt cell. Machines use the
        first letter of their name, lowercase when unpowered.
        """
        occupancy = get_occupancy_grid(self.layout, self.config)
        symbols = self._symbols()
        rows = [[symbols.get(int(v), "?") for v in row] for row in occupancy]

        if show_belts:
            for conn in self.layout.connections:
                route = route_connection(self.layout, conn, self.config)
                if route is None:
                    continue
                for x, y in route.cells:
                    if self.config.grid.contains(x, y) and occupancy[y, x] == EMPTY:
                        rows[y][x] = "="

        return "\n".join("".join(row) for row in rows)

    def power_lines(self) -> List[str]:
        summary = power_summary(self.layout, self.power)
        lines = [
            f"Power: {summary.powered_power:g}/{summary.total_power:g} kW",
            f"  Machines powered: {summary.powered_count}/{summary.machine_count}",
            f"  Pylons connected: {len(self.power.connected_relay_ids)}",
        ]
        if summary.unpowered_power > 0:
            lines.append(f"  Unpowered draw: {summary.unpowered_power:g} kW")
        return lines

    def throughput_lines(self) -> List[str]:
        lines = ["Belts:"]
        for conn in self.layout.connections:
            source = self.layout.get_item_blueprint(conn.source_item_id)
            target = self.layout.get_item_blueprint(conn.target_item_id)
            source_name = source.name if source else conn.source_item_id
            target_name = target.name if target else conn.target_item_id
            rate = self.throughput.get_rate(conn.id)
            lines.append(
                f"  {source_name}[{conn.source_port_index}] -> "
                f"{target_name}[{conn.target_port_index}]: {rate:.1f}/min"
            )
        if len(lines) == 1:
            lines.append("  (none)")
        return lines

    def report(self) -> str:
        lines = ["=" * 60, "  LAYOUT", "=" * 60, self.to_ascii(), ""]
        lines.extend(self.power_lines())
        lines.append("")
        lines.extend(self.throughput_lines())
        return "\n".join(lines)
