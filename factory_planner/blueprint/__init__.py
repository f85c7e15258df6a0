"""Machine geometry, placement validation and belt routing."""

from .building_types import (
    Direction,
    MachineBlueprint,
    Port,
    PortType,
    Recipe,
    RecipeIO,
    Rotation,
    get_machine_ports,
)
from .placer import BoundingBox, bounding_box, is_group_placement_valid, is_placement_valid
from .router import BeltRouter, PathPoint, RouteResult, calculate_belt_path, route_connection

__all__ = [
    "Direction",
    "MachineBlueprint",
    "Port",
    "PortType",
    "Recipe",
    "RecipeIO",
    "Rotation",
    "get_machine_ports",
    "BoundingBox",
    "bounding_box",
    "is_group_placement_valid",
    "is_placement_valid",
    "BeltRouter",
    "PathPoint",
    "RouteResult",
    "calculate_belt_path",
    "route_connection",
]
