"""Layout snapshot: catalogs, placed machines and belt connections."""

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from ..blueprint.building_types import MachineBlueprint, Port, Recipe, Rotation
from ..ids import BlueprintId, ConnectionId, ItemId, PortIndex, RecipeId, generate_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedItem:
    """A machine instance on the grid."""
    id: ItemId
    blueprint_id: BlueprintId
    x: int  # Left edge
    y: int  # Top edge
    rotation: Rotation = Rotation.DEG_0
    recipe_id: Optional[RecipeId] = None


@dataclass(frozen=True)
class Connection:
    """A belt from an output port to an input port."""
    id: ConnectionId
    source_item_id: ItemId
    source_port_index: PortIndex
    target_item_id: ItemId
    target_port_index: PortIndex


class Layout:
    """The planner state: one authority owns it and hands it to core queries.

    Core functions only read from a layout. Edits go through the methods
    here, which keep cascades (blueprint -> items -> connections) consistent
    and enforce one belt per port.
    """

    def __init__(self, blueprints: Optional[List[MachineBlueprint]] = None,
                 recipes: Optional[List[Recipe]] = None):
        self._blueprints: Dict[BlueprintId, MachineBlueprint] = {}
        self._recipes: Dict[RecipeId, Recipe] = {}
        self._items: Dict[ItemId, PlacedItem] = {}
        self._connections: Dict[ConnectionId, Connection] = {}

        for blueprint in blueprints or []:
            self.add_blueprint(blueprint)
        for recipe in recipes or []:
            self.add_recipe(recipe)

    # -- Read access -------------------------------------------------------

    @property
    def blueprints(self) -> List[MachineBlueprint]:
        return list(self._blueprints.values())

    @property
    def recipes(self) -> List[Recipe]:
        return list(self._recipes.values())

    @property
    def items(self) -> List[PlacedItem]:
        return list(self._items.values())

    @property
    def connections(self) -> List[Connection]:
        return list(self._connections.values())

    def get_blueprint(self, blueprint_id: Optional[str]) -> Optional[MachineBlueprint]:
        if blueprint_id is None:
            return None
        return self._blueprints.get(blueprint_id)

    def get_recipe(self, recipe_id: Optional[str]) -> Optional[Recipe]:
        if recipe_id is None:
            return None
        return self._recipes.get(recipe_id)

    def get_item(self, item_id: str) -> Optional[PlacedItem]:
        return self._items.get(item_id)

    def get_connection(self, connection_id: str) -> Optional[Connection]:
        return self._connections.get(connection_id)

    def get_item_blueprint(self, item_id: str) -> Optional[MachineBlueprint]:
        """Blueprint of a placed item, or None if either is unknown."""
        item = self._items.get(item_id)
        if item is None:
            return None
        return self._blueprints.get(item.blueprint_id)

    def get_port(self, item_id: str, port_index: int) -> Optional[Port]:
        """Port of a placed item; None for unknown items or indices out of range."""
        blueprint = self.get_item_blueprint(item_id)
        if blueprint is None:
            return None
        return blueprint.get_port(port_index)

    def recipes_for_machine(self, blueprint_id: str) -> List[Recipe]:
        return [r for r in self._recipes.values() if r.machine_type == blueprint_id]

    def items_of(self, blueprint_id: str) -> List[PlacedItem]:
        return [i for i in self._items.values() if i.blueprint_id == blueprint_id]

    def incoming_connections(self, item_id: str,
                             port_index: Optional[int] = None) -> List[Connection]:
        """Connections targeting an item, optionally only one input port."""
        return [
            c for c in self._connections.values()
            if c.target_item_id == item_id
            and (port_index is None or c.target_port_index == port_index)
        ]

    def outgoing_connections(self, item_id: str,
                             port_index: Optional[int] = None) -> List[Connection]:
        """Connections leaving an item, optionally only one output port."""
        return [
            c for c in self._connections.values()
            if c.source_item_id == item_id
            and (port_index is None or c.source_port_index == port_index)
        ]

    # -- Blueprints --------------------------------------------------------

    def add_blueprint(self, blueprint: MachineBlueprint) -> None:
        if blueprint.id in self._blueprints:
            raise ValueError(f"Duplicate blueprint id: {blueprint.id}")
        self._blueprints[blueprint.id] = blueprint

    def update_blueprint(self, blueprint_id: str, **changes) -> Optional[MachineBlueprint]:
        """Replace fields of a blueprint. Placed instances keep their position.

        Returns the updated blueprint, or None if it does not exist.
        """
        blueprint = self._blueprints.get(blueprint_id)
        if blueprint is None:
            return None
        changes.pop("id", None)
        updated = replace(blueprint, **changes)
        self._blueprints[blueprint.id] = updated
        return updated

    def remove_blueprint(self, blueprint_id: str) -> bool:
        """Delete a blueprint with all its placed instances and their belts."""
        if blueprint_id not in self._blueprints:
            return False
        del self._blueprints[blueprint_id]
        instances = [i.id for i in self.items_of(blueprint_id)]
        for item_id in instances:
            self.remove_item(item_id)
        logger.debug("Removed blueprint %s and %d instances", blueprint_id, len(instances))
        return True

    # -- Recipes -----------------------------------------------------------

    def add_recipe(self, recipe: Recipe) -> None:
        if recipe.id in self._recipes:
            raise ValueError(f"Duplicate recipe id: {recipe.id}")
        self._recipes[recipe.id] = recipe

    def update_recipe(self, recipe_id: str, **changes) -> Optional[Recipe]:
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            return None
        changes.pop("id", None)
        updated = replace(recipe, **changes)
        self._recipes[recipe.id] = updated
        return updated

    def remove_recipe(self, recipe_id: str) -> bool:
        """Delete a recipe and clear it from every machine running it."""
        if recipe_id not in self._recipes:
            return False
        del self._recipes[recipe_id]
        for item in self.items:
            if item.recipe_id == recipe_id:
                self._items[item.id] = replace(item, recipe_id=None)
        return True

    # -- Placed items ------------------------------------------------------

    def place_item(self, blueprint_id: str, x: int, y: int,
                   rotation: Rotation = Rotation.DEG_0,
                   recipe_id: Optional[str] = None,
                   item_id: Optional[str] = None) -> ItemId:
        """Add a machine instance. Validity is the caller's check."""
        new_id = ItemId(item_id or generate_id("item"))
        if new_id in self._items:
            raise ValueError(f"Duplicate item id: {new_id}")
        self._items[new_id] = PlacedItem(
            id=new_id,
            blueprint_id=BlueprintId(blueprint_id),
            x=x,
            y=y,
            rotation=rotation,
            recipe_id=RecipeId(recipe_id) if recipe_id else None,
        )
        return new_id

    def move_item(self, item_id: str, x: int, y: int,
                  rotation: Optional[Rotation] = None) -> bool:
        item = self._items.get(item_id)
        if item is None:
            return False
        self._items[item.id] = replace(
            item, x=x, y=y, rotation=item.rotation if rotation is None else rotation
        )
        return True

    def rotate_item(self, item_id: str) -> bool:
        """Turn a placed item 90° clockwise in place."""
        item = self._items.get(item_id)
        if item is None:
            return False
        self._items[item.id] = replace(item, rotation=item.rotation.rotated_cw())
        return True

    def assign_recipe(self, item_id: str, recipe_id: Optional[str]) -> bool:
        item = self._items.get(item_id)
        if item is None:
            return False
        self._items[item.id] = replace(
            item, recipe_id=RecipeId(recipe_id) if recipe_id else None
        )
        return True

    def remove_item(self, item_id: str) -> bool:
        """Delete a machine and every belt touching it."""
        if item_id not in self._items:
            return False
        del self._items[item_id]
        dropped = [
            c.id for c in self._connections.values()
            if c.source_item_id == item_id or c.target_item_id == item_id
        ]
        for conn_id in dropped:
            del self._connections[conn_id]
        if dropped:
            logger.debug("Removed item %s with %d connections", item_id, len(dropped))
        return True

    # -- Connections -------------------------------------------------------

    def connect(self, source_item_id: str, source_port_index: int,
                target_item_id: str, target_port_index: int,
                connection_id: Optional[str] = None) -> Optional[ConnectionId]:
        """Wire an output port to an input port.

        Returns the new connection id, or None when the wire is rejected.
        A port carries at most one belt in each role.
        """
        if source_item_id == target_item_id and source_port_index == target_port_index:
            logger.debug("Rejected connection: %s[%s] loops onto itself",
                         source_item_id, source_port_index)
            return None

        source_port = self.get_port(source_item_id, source_port_index)
        target_port = self.get_port(target_item_id, target_port_index)
        if source_port is None or target_port is None:
            logger.debug(
                "Rejected connection: unresolved port %s[%s] -> %s[%s]",
                source_item_id, source_port_index, target_item_id, target_port_index,
            )
            return None
        if not source_port.is_output or not target_port.is_input:
            logger.debug("Rejected connection: must run from an output to an input")
            return None

        if self.outgoing_connections(source_item_id, source_port_index):
            logger.debug("Rejected connection: %s[%s] already wired",
                         source_item_id, source_port_index)
            return None
        if self.incoming_connections(target_item_id, target_port_index):
            logger.debug("Rejected connection: %s[%s] already wired",
                         target_item_id, target_port_index)
            return None

        new_id = ConnectionId(connection_id or generate_id("conn"))
        if new_id in self._connections:
            raise ValueError(f"Duplicate connection id: {new_id}")
        self._connections[new_id] = Connection(
            id=new_id,
            source_item_id=ItemId(source_item_id),
            source_port_index=PortIndex(source_port_index),
            target_item_id=ItemId(target_item_id),
            target_port_index=PortIndex(target_port_index),
        )
        return new_id

    def disconnect(self, connection_id: str) -> bool:
        return self._connections.pop(connection_id, None) is not None

    def is_port_connected(self, item_id: str, port_index: int) -> bool:
        return bool(
            self.outgoing_connections(item_id, port_index)
            or self.incoming_connections(item_id, port_index)
        )

    # -- Snapshots ---------------------------------------------------------

    def copy(self) -> "Layout":
        """Create an independent copy. Entries are frozen, so sharing them is safe."""
        new_layout = Layout()
        new_layout._blueprints = dict(self._blueprints)
        new_layout._recipes = dict(self._recipes)
        new_layout._items = dict(self._items)
        new_layout._connections = dict(self._connections)
        return new_layout

    def __repr__(self) -> str:
        return (
            f"Layout(blueprints={len(self._blueprints)}, "
            f"items={len(self._items)}, "
            f"conns={len(self._connections)})"
        )
