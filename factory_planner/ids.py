"""Identifier types for planner entities.

Each entity kind gets its own ``NewType`` so an item id cannot be passed
where a connection id is expected without the type checker noticing.
"""

import random
import string
import time
from typing import NewType

BlueprintId = NewType("BlueprintId", str)
RecipeId = NewType("RecipeId", str)
ItemId = NewType("ItemId", str)
ConnectionId = NewType("ConnectionId", str)
PortIndex = NewType("PortIndex", int)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str) -> str:
    """Generate a unique id like ``item-1718000000000-k3j9x0a``."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(7))
    return f"{prefix}-{millis}-{suffix}"
