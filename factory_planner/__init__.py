"""Factory planner core: placement, belt routing, power and throughput."""

from .config import DEFAULT_CONFIG, CoreRegion, GridSpec, PlannerConfig
from .simulator.design import Connection, Layout, PlacedItem

__all__ = [
    "DEFAULT_CONFIG",
    "CoreRegion",
    "GridSpec",
    "PlannerConfig",
    "Connection",
    "Layout",
    "PlacedItem",
]
