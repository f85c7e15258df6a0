"""Sample catalogs."""

from .sample_data import (
    PYLON_BLUEPRINT,
    SAMPLE_BLUEPRINTS,
    SAMPLE_RECIPES,
    create_demo_layout,
    create_sample_layout,
)

__all__ = [
    "PYLON_BLUEPRINT",
    "SAMPLE_BLUEPRINTS",
    "SAMPLE_RECIPES",
    "create_demo_layout",
    "create_sample_layout",
]
