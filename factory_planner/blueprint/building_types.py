"""Machine blueprint definitions and the rotation transform."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from ..config import MAX_MACHINE_SIZE, MIN_MACHINE_SIZE
from ..ids import BlueprintId, RecipeId


class Direction(Enum):
    """Port facing directions, declared in clockwise order."""
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit grid step (dx, dy) in this direction. y grows downward."""
        return {
            Direction.NORTH: (0, -1),
            Direction.EAST: (1, 0),
            Direction.SOUTH: (0, 1),
            Direction.WEST: (-1, 0),
        }[self]

    @property
    def opposite(self) -> "Direction":
        return {
            Direction.NORTH: Direction.SOUTH,
            Direction.SOUTH: Direction.NORTH,
            Direction.EAST: Direction.WEST,
            Direction.WEST: Direction.EAST,
        }[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Clockwise order used by the rotation transform
DIRECTION_ORDER: List[Direction] = [
    Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST,
]


class Rotation(Enum):
    """Clockwise rotation of a placed machine, in degrees."""
    DEG_0 = 0
    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270

    @property
    def steps(self) -> int:
        """Number of 90° clockwise steps."""
        return self.value // 90

    @property
    def is_quarter_turn(self) -> bool:
        """True when width and height swap."""
        return self in (Rotation.DEG_90, Rotation.DEG_270)

    def rotated_cw(self) -> "Rotation":
        """The next rotation clockwise (270 wraps to 0)."""
        return Rotation((self.value + 90) % 360)


class PortType(Enum):
    """Whether a port accepts or emits items."""
    INPUT = "input"
    OUTPUT = "output"


@dataclass(frozen=True)
class Port:
    """A belt attachment point on an unrotated blueprint footprint."""
    port_type: PortType
    offset_x: int
    offset_y: int
    direction: Direction

    @property
    def is_input(self) -> bool:
        return self.port_type == PortType.INPUT

    @property
    def is_output(self) -> bool:
        return self.port_type == PortType.OUTPUT

    def is_on_edge(self, width: int, height: int) -> bool:
        """Check the port sits on the boundary its direction faces."""
        if self.direction in (Direction.NORTH, Direction.SOUTH):
            return self.offset_y in (0, height - 1)
        return self.offset_x in (0, width - 1)


@dataclass(frozen=True)
class MachineBlueprint:
    """A machine type that can be placed on the grid (not an instance)."""
    id: BlueprintId
    name: str
    width: int
    height: int
    color: str = "#656D78"
    ports: Tuple[Port, ...] = field(default_factory=tuple)
    power_consumption: float = 0.0

    def __post_init__(self):
        for label, size in (("width", self.width), ("height", self.height)):
            if not MIN_MACHINE_SIZE <= size <= MAX_MACHINE_SIZE:
                raise ValueError(
                    f"Blueprint {self.id} {label} must be in "
                    f"{MIN_MACHINE_SIZE}..{MAX_MACHINE_SIZE}, got {size}"
                )
        if self.power_consumption < 0:
            raise ValueError(f"Blueprint {self.id} power consumption must be >= 0")
        # Accept lists from callers but keep the stored value hashable
        object.__setattr__(self, "ports", tuple(self.ports))

    @property
    def input_ports(self) -> List[Port]:
        return [p for p in self.ports if p.is_input]

    @property
    def output_ports(self) -> List[Port]:
        return [p for p in self.ports if p.is_output]

    def input_port_indices(self) -> List[int]:
        return [i for i, p in enumerate(self.ports) if p.is_input]

    def output_port_indices(self) -> List[int]:
        return [i for i, p in enumerate(self.ports) if p.is_output]

    def get_port(self, index: int) -> Optional[Port]:
        """Port at ``index``, or None when the index is out of range."""
        if 0 <= index < len(self.ports):
            return self.ports[index]
        return None


@dataclass(frozen=True)
class RecipeIO:
    """An item kind and the amount consumed or produced per cycle."""
    item_id: str
    amount: float


@dataclass(frozen=True)
class Recipe:
    """A crafting cycle that runs on one machine type."""
    id: RecipeId
    name: str
    machine_type: BlueprintId
    duration: float  # Seconds per cycle
    inputs: Tuple[RecipeIO, ...] = field(default_factory=tuple)
    outputs: Tuple[RecipeIO, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.duration <= 0:
            raise ValueError(f"Recipe {self.id} duration must be positive, got {self.duration}")
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))

    @property
    def total_output_amount(self) -> float:
        return sum(o.amount for o in self.outputs)


class RotatedPort(NamedTuple):
    """A port after the machine rotation has been applied."""
    index: int
    port_type: PortType
    offset_x: int
    offset_y: int
    direction: Direction


def effective_dimensions(width: int, height: int, rotation: Rotation) -> Tuple[int, int]:
    """Footprint (width, height) after rotation."""
    if rotation.is_quarter_turn:
        return (height, width)
    return (width, height)


def rotated_direction(direction: Direction, rotation: Rotation) -> Direction:
    """Rotate a facing direction clockwise by the machine rotation."""
    idx = DIRECTION_ORDER.index(direction)
    return DIRECTION_ORDER[(idx + rotation.steps) % 4]


def rotated_port_offset(offset_x: int, offset_y: int, width: int, height: int,
                        rotation: Rotation) -> Tuple[int, int]:
    """Rotate a port offset so it stays inside the rotated footprint.

    Args:
        offset_x, offset_y: Offset within the unrotated blueprint
        width, height: Unrotated blueprint dimensions
        rotation: Machine rotation
    """
    if rotation == Rotation.DEG_90:
        return (height - 1 - offset_y, offset_x)
    elif rotation == Rotation.DEG_180:
        return (width - 1 - offset_x, height - 1 - offset_y)
    elif rotation == Rotation.DEG_270:
        return (offset_y, width - 1 - offset_x)
    return (offset_x, offset_y)


def get_machine_ports(blueprint: MachineBlueprint,
                      rotation: Rotation = Rotation.DEG_0) -> List[RotatedPort]:
    """Get all ports of a blueprint for a rotation, in port-index order.

    Offsets are INTERNAL to the rotated footprint.
    """
    rotated = []
    for index, port in enumerate(blueprint.ports):
        rot_x, rot_y = rotated_port_offset(
            port.offset_x, port.offset_y, blueprint.width, blueprint.height, rotation
        )
        rotated.append(RotatedPort(
            index=index,
            port_type=port.port_type,
            offset_x=rot_x,
            offset_y=rot_y,
            direction=rotated_direction(port.direction, rotation),
        ))
    return rotated


def port_world_position(blueprint: MachineBlueprint, x: int, y: int, rotation: Rotation,
                        port_index: int) -> Optional[Tuple[Tuple[int, int], Direction]]:
    """Absolute grid cell and facing of one port of a placed machine.

    Returns None when ``port_index`` does not name a port.
    """
    port = blueprint.get_port(port_index)
    if port is None:
        return None
    rot_x, rot_y = rotated_port_offset(
        port.offset_x, port.offset_y, blueprint.width, blueprint.height, rotation
    )
    return (x + rot_x, y + rot_y), rotated_direction(port.direction, rotation)
