"""Fixed planner configuration.

Grid size, the reserved Automation Core region, power range and the router
limits. Core queries take a ``PlannerConfig`` and fall back to
``DEFAULT_CONFIG`` when none is given.
"""

from dataclasses import dataclass, field
from typing import Tuple


# Power distribution
POWER_RANGE = 3  # Max edge-to-edge gap (cells, diagonals included)
PYLON_BLUEPRINT_ID = "pylon"
PYLON_FOOTPRINT: Tuple[int, int] = (2, 2)
DEFAULT_CONSUMER_FOOTPRINT: Tuple[int, int] = (2, 2)  # Used when a blueprint is missing

# Logistics devices with pass-through rate semantics
SPLITTER_BLUEPRINT_ID = "splitter"
MERGER_BLUEPRINT_ID = "merger"

# Belt routing limits
SEARCH_MARGIN = 50      # Cells of slack around the grid the A* search may use
MAX_EXPANSIONS = 10000  # Node expansion cap before falling back to the direct path

# Blueprint size limits
MIN_MACHINE_SIZE = 1
MAX_MACHINE_SIZE = 10


@dataclass(frozen=True)
class GridSpec:
    """Dimensions of the placement grid in cells."""
    width: int = 40
    height: int = 40

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


@dataclass(frozen=True)
class CoreRegion:
    """The Automation Core: fixed power source and reserved placement zone."""
    x: int
    y: int
    width: int = 9
    height: int = 9

    @classmethod
    def centered(cls, grid: GridSpec, width: int = 9, height: int = 9) -> "CoreRegion":
        """Create a core region centred on the grid (rounded toward the origin)."""
        return cls(
            x=(grid.width - width) // 2,
            y=(grid.height - height) // 2,
            width=width,
            height=height,
        )

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        """(x, y, width, height) rectangle used by the power range test."""
        return (self.x, self.y, self.width, self.height)


DEFAULT_GRID = GridSpec()


@dataclass(frozen=True)
class PlannerConfig:
    """Everything the core needs besides the layout snapshot."""
    grid: GridSpec = DEFAULT_GRID
    core: CoreRegion = field(default_factory=lambda: CoreRegion.centered(DEFAULT_GRID))
    power_range: int = POWER_RANGE

    @classmethod
    def for_grid(cls, width: int, height: int, power_range: int = POWER_RANGE) -> "PlannerConfig":
        """Build a config for a custom grid with a centred core."""
        grid = GridSpec(width, height)
        return cls(grid=grid, core=CoreRegion.centered(grid), power_range=power_range)


DEFAULT_CONFIG = PlannerConfig()
