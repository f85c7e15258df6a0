"""Sample machine blueprints, recipes and a small demo layout."""

from typing import List, Tuple

from ..blueprint.building_types import (
    Direction, MachineBlueprint, Port, PortType, Recipe, RecipeIO,
)
from ..config import MERGER_BLUEPRINT_ID, PYLON_BLUEPRINT_ID, SPLITTER_BLUEPRINT_ID
from ..ids import BlueprintId, RecipeId
from ..simulator.design import Layout


def _inp(x: int, y: int, direction: str) -> Port:
    return Port(PortType.INPUT, x, y, Direction(direction))


def _out(x: int, y: int, direction: str) -> Port:
    return Port(PortType.OUTPUT, x, y, Direction(direction))


def _blueprint(bp_id: str, name: str, width: int, height: int, color: str,
               power: float, ports: List[Port]) -> MachineBlueprint:
    return MachineBlueprint(
        id=BlueprintId(bp_id), name=name, width=width, height=height,
        color=color, ports=tuple(ports), power_consumption=power,
    )


def _recipe(recipe_id: str, name: str, machine: str, duration: float,
            inputs: List[Tuple[str, float]], outputs: List[Tuple[str, float]]) -> Recipe:
    return Recipe(
        id=RecipeId(recipe_id), name=name, machine_type=BlueprintId(machine),
        duration=duration,
        inputs=tuple(RecipeIO(item, amount) for item, amount in inputs),
        outputs=tuple(RecipeIO(item, amount) for item, amount in outputs),
    )


PYLON_BLUEPRINT = _blueprint(PYLON_BLUEPRINT_ID, "Power Pylon", 2, 2, "#F5C518", 0, [])

SAMPLE_BLUEPRINTS: List[MachineBlueprint] = [
    # Production
    _blueprint("miner-mk1", "Miner Mk1", 2, 2, "#5D9CEC", 2, [_out(1, 1, "E")]),
    _blueprint("smelter-mk1", "Smelter Mk1", 2, 3, "#FC6E51", 4,
               [_inp(0, 1, "W"), _out(1, 1, "E")]),
    _blueprint("assembler-mk1", "Assembler Mk1", 3, 3, "#48CFAD", 6,
               [_inp(0, 0, "W"), _inp(0, 2, "W"), _out(2, 1, "E")]),
    _blueprint("constructor-mk1", "Constructor Mk1", 2, 2, "#A0D468", 3,
               [_inp(0, 0, "W"), _out(1, 1, "E")]),
    _blueprint("refinery-mk1", "Refinery Mk1", 4, 3, "#AC92EC", 8,
               [_inp(0, 1, "W"), _out(3, 0, "E"), _out(3, 2, "E")]),
    _blueprint("chemical-plant", "Chemical Plant", 3, 4, "#967ADC", 7,
               [_inp(0, 1, "W"), _inp(0, 2, "W"), _out(2, 1, "E"), _out(2, 2, "E")]),
    # Logistics
    _blueprint(SPLITTER_BLUEPRINT_ID, "Splitter", 1, 1, "#37BC9B", 1,
               [_inp(0, 0, "W"), _out(0, 0, "N"), _out(0, 0, "S")]),
    _blueprint(MERGER_BLUEPRINT_ID, "Merger", 1, 1, "#3BAFDA", 1,
               [_inp(0, 0, "N"), _inp(0, 0, "S"), _out(0, 0, "E")]),
    # Storage
    _blueprint("storage-container", "Storage Container", 2, 2, "#656D78", 1,
               [_inp(0, 0, "W"), _out(1, 1, "E")]),
    # Generators draw nothing
    _blueprint("power-generator", "Power Generator", 3, 2, "#F5C518", 0, [_inp(0, 0, "W")]),
]

SAMPLE_RECIPES: List[Recipe] = [
    _recipe("mine-iron-ore", "Mine Iron Ore", "miner-mk1", 1.0, [], [("iron-ore", 1)]),
    _recipe("mine-copper-ore", "Mine Copper Ore", "miner-mk1", 1.0, [], [("copper-ore", 1)]),
    _recipe("smelt-iron-ingot", "Smelt Iron Ingot", "smelter-mk1", 2.0,
            [("iron-ore", 1)], [("iron-ingot", 1)]),
    _recipe("smelt-copper-ingot", "Smelt Copper Ingot", "smelter-mk1", 2.0,
            [("copper-ore", 1)], [("copper-ingot", 1)]),
    _recipe("smelt-steel-ingot", "Smelt Steel Ingot", "smelter-mk1", 4.0,
            [("iron-ingot", 2)], [("steel-ingot", 1)]),
    _recipe("make-iron-plate", "Iron Plate", "constructor-mk1", 1.5,
            [("iron-ingot", 1)], [("iron-plate", 1)]),
    _recipe("make-copper-wire", "Copper Wire", "constructor-mk1", 1.0,
            [("copper-ingot", 1)], [("copper-wire", 2)]),
    _recipe("make-iron-rod", "Iron Rod", "constructor-mk1", 1.0,
            [("iron-ingot", 1)], [("iron-rod", 1)]),
    _recipe("make-circuit-board", "Circuit Board", "assembler-mk1", 3.0,
            [("copper-wire", 4), ("iron-plate", 2)], [("circuit-board", 1)]),
    _recipe("make-reinforced-plate", "Reinforced Plate", "assembler-mk1", 4.0,
            [("iron-plate", 4), ("iron-rod", 2)], [("reinforced-plate", 1)]),
    _recipe("refine-crude-oil", "Refine Crude Oil", "refinery-mk1", 5.0,
            [("crude-oil", 3)], [("fuel", 2), ("plastic", 1)]),
    _recipe("burn-fuel", "Burn Fuel", "power-generator", 10.0, [("fuel", 1)], []),
]


def create_sample_layout() -> Layout:
    """An empty layout holding the sample catalogs and the pylon."""
    return Layout(blueprints=SAMPLE_BLUEPRINTS + [PYLON_BLUEPRINT], recipes=SAMPLE_RECIPES)


def create_demo_layout() -> Layout:
    """
    A small iron line east of the core on the default 40x40 grid.

    Miner -> smelter -> constructor -> storage, powered by a chain of three
    pylons starting at the core edge. The storage sits out of pylon range.
    """
    layout = create_sample_layout()

    layout.place_item(PYLON_BLUEPRINT_ID, 24, 15, item_id="pylon-a")
    layout.place_item(PYLON_BLUEPRINT_ID, 28, 15, item_id="pylon-b")
    layout.place_item(PYLON_BLUEPRINT_ID, 32, 15, item_id="pylon-c")

    layout.place_item("miner-mk1", 26, 19, recipe_id="mine-iron-ore", item_id="miner")
    layout.place_item("smelter-mk1", 30, 18, recipe_id="smelt-iron-ingot", item_id="smelter")
    layout.place_item("constructor-mk1", 34, 19, recipe_id="make-iron-plate",
                      item_id="constructor")
    layout.place_item("storage-container", 36, 30, item_id="storage")

    layout.connect("miner", 0, "smelter", 0, connection_id="ore")
    layout.connect("smelter", 1, "constructor", 0, connection_id="ingots")
    layout.connect("constructor", 1, "storage", 0, connection_id="plates")

    return layout
