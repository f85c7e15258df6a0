"""Throughput propagation over the belt connection graph."""

from typing import Dict, FrozenSet, Tuple

from ..blueprint.building_types import MachineBlueprint, Recipe
from ..config import MERGER_BLUEPRINT_ID, SPLITTER_BLUEPRINT_ID
from ..ids import ConnectionId, ItemId
from .design import Layout

SECONDS_PER_MINUTE = 60.0

VisitKey = Tuple[str, int]


class ThroughputResult:
    """Result of a throughput calculation, rates in items per minute."""

    def __init__(self):
        self.connection_rates: Dict[ConnectionId, float] = {}
        self.item_output_rates: Dict[ItemId, float] = {}

    def get_rate(self, connection_id: str) -> float:
        """Rate on a belt; 0 for unknown connections."""
        return self.connection_rates.get(connection_id, 0.0)

    def get_item_output(self, item_id: str) -> float:
        return self.item_output_rates.get(item_id, 0.0)


class ThroughputSimulator:
    """Computes the item rate carried by every belt in a layout.

    Production machines emit recipe output / duration split over their output
    ports. Splitters divide what they receive over their wired outputs, and
    mergers pass on the sum of their inputs. Loops contribute 0 on the edge
    that closes them.
    """

    def __init__(self, layout: Layout):
        """
        Initialize the simulator with a layout snapshot.

        Args:
            layout: The layout to evaluate
        """
        self.layout = layout

    def execute(self) -> ThroughputResult:
        result = ThroughputResult()

        for conn in self.layout.connections:
            rate = self.port_rate(conn.source_item_id, conn.source_port_index) * SECONDS_PER_MINUTE
            result.connection_rates[conn.id] = rate
            result.item_output_rates[conn.source_item_id] = (
                result.item_output_rates.get(conn.source_item_id, 0.0) + rate
            )

        return result

    def port_rate(self, item_id: str, port_index: int,
                  visited: FrozenSet[VisitKey] = frozenset()) -> float:
        """
        Items per second leaving one port.

        ``visited`` holds the ports on the current branch only; each recursive
        call gets its own extended copy.
        """
        key = (item_id, port_index)
        if key in visited:
            return 0.0
        visited = visited | {key}

        item = self.layout.get_item(item_id)
        blueprint = self.layout.get_item_blueprint(item_id)
        port = self.layout.get_port(item_id, port_index)
        if item is None or blueprint is None or port is None:
            return 0.0
        if port.is_input:
            return 0.0

        if blueprint.id == SPLITTER_BLUEPRINT_ID:
            active_outputs = self.layout.outgoing_connections(item_id)
            if not active_outputs:
                return 0.0
            return self._input_rate(item_id, blueprint, visited) / len(active_outputs)

        if blueprint.id == MERGER_BLUEPRINT_ID:
            return self._input_rate(item_id, blueprint, visited)

        recipe = self.layout.get_recipe(item.recipe_id)
        if recipe is None:
            return 0.0
        if not self._has_required_inputs(item_id, blueprint, recipe):
            return 0.0

        base_rate = recipe.total_output_amount / recipe.duration
        return base_rate / (len(blueprint.output_ports) or 1)

    def _input_rate(self, item_id: str, blueprint: MachineBlueprint,
                    visited: FrozenSet[VisitKey]) -> float:
        """Sum of the rates feeding every input port of a machine."""
        total = 0.0
        for idx in blueprint.input_port_indices():
            for conn in self.layout.incoming_connections(item_id, idx):
                total += self.port_rate(conn.source_item_id, conn.source_port_index, visited)
        return total

    def _has_required_inputs(self, item_id: str, blueprint: MachineBlueprint,
                             recipe: Recipe) -> bool:
        """One wired input per recipe ingredient. Recipes without inputs always run."""
        if not recipe.inputs:
            return True
        input_indices = set(blueprint.input_port_indices())
        connected = [
            c for c in self.layout.incoming_connections(item_id)
            if c.target_port_index in input_indices
        ]
        return len(connected) >= len(recipe.inputs)


def calculate_connection_rates(layout: Layout) -> Dict[ConnectionId, float]:
    """Rate on every belt of a layout, in items per minute."""
    return ThroughputSimulator(layout).execute().connection_rates


def calculate_port_rate(layout: Layout, item_id: str, port_index: int,
                        per_minute: bool = True) -> float:
    """Rate leaving one port, whether or not it is wired."""
    rate = ThroughputSimulator(layout).port_rate(item_id, port_index)
    return rate * SECONDS_PER_MINUTE if per_minute else rate
