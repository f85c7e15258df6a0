"""Layout state plus the power and throughput queries over it."""

from .design import Connection, Layout, PlacedItem
from .power import PowerResult, calculate_power, power_summary
from .simulator import ThroughputResult, ThroughputSimulator, calculate_connection_rates

__all__ = [
    "Connection",
    "Layout",
    "PlacedItem",
    "PowerResult",
    "calculate_power",
    "power_summary",
    "ThroughputResult",
    "ThroughputSimulator",
    "calculate_connection_rates",
]
