"""Placement validation: grid bounds, the reserved core and machine overlap."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, NamedTuple, Optional, Set, Tuple

from ..config import DEFAULT_CONFIG, CoreRegion, PlannerConfig
from .building_types import MachineBlueprint, Rotation, effective_dimensions

if TYPE_CHECKING:
    from ..simulator.design import Layout, PlacedItem


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive cell bounds of a footprint."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        """(x, y, width, height) form."""
        return (self.min_x, self.min_y, self.width, self.height)

    @classmethod
    def from_rect(cls, x: int, y: int, width: int, height: int) -> "BoundingBox":
        return cls(x, y, x + width - 1, y + height - 1)

    def overlaps(self, other: "BoundingBox") -> bool:
        """AABB test. Boxes that only share an edge do not overlap."""
        return not (
            self.max_x < other.min_x
            or self.min_x > other.max_x
            or self.max_y < other.min_y
            or self.min_y > other.max_y
        )

    def cells(self) -> List[Tuple[int, int]]:
        """Every (x, y) cell inside the box."""
        return [
            (x, y)
            for x in range(self.min_x, self.max_x + 1)
            for y in range(self.min_y, self.max_y + 1)
        ]


class PlacementCandidate(NamedTuple):
    """A machine position to validate before it is committed."""
    blueprint_id: str
    x: int
    y: int
    rotation: Rotation = Rotation.DEG_0


def bounding_box(blueprint: Optional[MachineBlueprint], x: int, y: int,
                 rotation: Rotation) -> Optional[BoundingBox]:
    """Footprint of a blueprint placed at (x, y); None for an unknown blueprint."""
    if blueprint is None:
        return None
    width, height = effective_dimensions(blueprint.width, blueprint.height, rotation)
    return BoundingBox.from_rect(x, y, width, height)


def core_box(core: CoreRegion) -> BoundingBox:
    return BoundingBox.from_rect(core.x, core.y, core.width, core.height)


def item_bounding_box(layout: "Layout", item: "PlacedItem") -> Optional[BoundingBox]:
    """Footprint of a placed item, or None if its blueprint is gone."""
    return bounding_box(layout.get_blueprint(item.blueprint_id), item.x, item.y, item.rotation)


def _fits(box: BoundingBox, layout: "Layout", exclude: Set[str], config: PlannerConfig) -> bool:
    grid = config.grid
    if box.min_x < 0 or box.min_y < 0 or box.max_x >= grid.width or box.max_y >= grid.height:
        return False

    if box.overlaps(core_box(config.core)):
        return False

    for item in layout.items:
        if item.id in exclude:
            continue
        item_box = item_bounding_box(layout, item)
        if item_box is None:
            continue
        if box.overlaps(item_box):
            return False

    return True


def is_placement_valid(layout: "Layout", blueprint_id: str, x: int, y: int, rotation: Rotation,
                       exclude_item_id: Optional[str] = None,
                       config: Optional[PlannerConfig] = None) -> bool:
    """
    Check whether a machine may be placed at a position.

    Args:
        layout: Layout snapshot holding blueprints and placed items
        blueprint_id: Machine type to place
        x, y: Top-left cell
        rotation: Machine rotation
        exclude_item_id: Item to ignore for collisions (the one being moved)
        config: Grid and core configuration

    Returns:
        True if the footprint is inside the grid, clear of the core and
        clear of every other placed machine.
    """
    config = config or DEFAULT_CONFIG
    box = bounding_box(layout.get_blueprint(blueprint_id), x, y, rotation)
    if box is None:
        return False
    exclude = {exclude_item_id} if exclude_item_id else set()
    return _fits(box, layout, exclude, config)


def is_group_placement_valid(layout: "Layout", candidates: Iterable[PlacementCandidate],
                             exclude_item_ids: Iterable[str] = (),
                             config: Optional[PlannerConfig] = None) -> bool:
    """Check several machines placed together (paste, multi-select move).

    Every candidate must be individually valid with ``exclude_item_ids``
    ignored, and no two candidates may overlap.
    """
    config = config or DEFAULT_CONFIG
    exclude = set(exclude_item_ids)
    boxes: List[BoundingBox] = []

    for candidate in candidates:
        box = bounding_box(
            layout.get_blueprint(candidate.blueprint_id),
            candidate.x, candidate.y, candidate.rotation,
        )
        if box is None or not _fits(box, layout, exclude, config):
            return False
        if any(box.overlaps(placed) for placed in boxes):
            return False
        boxes.append(box)

    return True


def occupied_cells(layout: "Layout") -> Set[Tuple[int, int]]:
    """Every cell covered by a placed machine."""
    cells: Set[Tuple[int, int]] = set()
    for item in layout.items:
        box = item_bounding_box(layout, item)
        if box is not None:
            cells.update(box.cells())
    return cells
