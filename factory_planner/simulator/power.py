"""Power distribution from the Automation Core through pylons to machines.

Pylons relay power: a pylon in range of the core, or of any connected pylon,
is connected. Machines in range of a connected pylon are powered. "In range"
is the edge-to-edge Chebyshev gap between the two footprints.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Set, Tuple

from ..blueprint.placer import item_bounding_box
from ..config import (
    DEFAULT_CONFIG, DEFAULT_CONSUMER_FOOTPRINT, POWER_RANGE,
    PYLON_BLUEPRINT_ID, PYLON_FOOTPRINT, PlannerConfig,
)
from ..ids import ItemId
from .design import Layout, PlacedItem

Rect = Tuple[int, int, int, int]  # (x, y, width, height)


@dataclass
class PowerResult:
    """Which pylons reach the core and which machines they power."""
    connected_relay_ids: Set[ItemId] = field(default_factory=set)
    powered_machine_ids: Set[ItemId] = field(default_factory=set)

    def is_powered(self, item_id: str) -> bool:
        return item_id in self.powered_machine_ids or item_id in self.connected_relay_ids


@dataclass
class PowerSummary:
    """Power draw totals over every non-pylon machine."""
    total_power: float = 0.0
    powered_power: float = 0.0
    powered_count: int = 0
    machine_count: int = 0

    @property
    def unpowered_power(self) -> float:
        return self.total_power - self.powered_power


def edge_gap(a: Rect, b: Rect) -> int:
    """Chebyshev gap between two rectangles; 0 when they touch or overlap."""
    x1, y1, w1, h1 = a
    x2, y2, w2, h2 = b
    dx = max(0, max(x1, x2) - min(x1 + w1, x2 + w2))
    dy = max(0, max(y1, y2) - min(y1 + h1, y2 + h2))
    return max(dx, dy)


def is_within_power_range(a: Rect, b: Rect, power_range: int = POWER_RANGE) -> bool:
    return edge_gap(a, b) <= power_range


def _relay_rect(item: PlacedItem) -> Rect:
    return (item.x, item.y, PYLON_FOOTPRINT[0], PYLON_FOOTPRINT[1])


def _consumer_rect(layout: Layout, item: PlacedItem) -> Rect:
    box = item_bounding_box(layout, item)
    if box is None:
        return (item.x, item.y, DEFAULT_CONSUMER_FOOTPRINT[0], DEFAULT_CONSUMER_FOOTPRINT[1])
    return box.rect


def calculate_power(layout: Layout, config: Optional[PlannerConfig] = None) -> PowerResult:
    """
    Compute connected pylons and powered machines.

    Algorithm (BFS):
    1. Pylons within range of the core seed the queue
    2. Each dequeued pylon connects every unconnected pylon in its range
    3. Every other machine is powered if a connected pylon reaches it

    Args:
        layout: Layout snapshot
        config: Core region and power range

    Returns:
        PowerResult with both id sets
    """
    config = config or DEFAULT_CONFIG
    power_range = config.power_range

    relays = [i for i in layout.items if i.blueprint_id == PYLON_BLUEPRINT_ID]
    machines = [i for i in layout.items if i.blueprint_id != PYLON_BLUEPRINT_ID]

    result = PowerResult()
    queue: Deque[PlacedItem] = deque()

    for relay in relays:
        if is_within_power_range(config.core.rect, _relay_rect(relay), power_range):
            result.connected_relay_ids.add(relay.id)
            queue.append(relay)

    while queue:
        current = queue.popleft()
        current_rect = _relay_rect(current)
        for relay in relays:
            if relay.id in result.connected_relay_ids:
                continue
            if is_within_power_range(current_rect, _relay_rect(relay), power_range):
                result.connected_relay_ids.add(relay.id)
                queue.append(relay)

    connected: List[Rect] = [
        _relay_rect(r) for r in relays if r.id in result.connected_relay_ids
    ]
    for machine in machines:
        machine_rect = _consumer_rect(layout, machine)
        if any(is_within_power_range(r, machine_rect, power_range) for r in connected):
            result.powered_machine_ids.add(machine.id)

    return result


def power_summary(layout: Layout, power: Optional[PowerResult] = None,
                  config: Optional[PlannerConfig] = None) -> PowerSummary:
    """Total and powered draw of all machines except pylons."""
    if power is None:
        power = calculate_power(layout, config)

    summary = PowerSummary()
    for item in layout.items:
        if item.blueprint_id == PYLON_BLUEPRINT_ID:
            continue
        blueprint = layout.get_blueprint(item.blueprint_id)
        consumption = blueprint.power_consumption if blueprint else 0.0
        summary.machine_count += 1
        summary.total_power += consumption
        if item.id in power.powered_machine_ids:
            summary.powered_count += 1
            summary.powered_power += consumption
    return summary
