"""
Player Module
==============
Player entity creation and input handling.
"""

import random
from typing import NamedTuple, Optional

from loguru import logger

from .ecs import World
from .arena_map import ArenaMap
from .components import (
    Position, Speed, Renderable, Health, Ammo, PlayerTag
)
from .config import (
    PLAYER_HEALTH, PLAYER_AMMO, PLAYER_SPEED,
    PLAYER_CHAR, COLOR_PLAYER
)


# Action kinds
ACTION_MOVE = 'move'
ACTION_SHOOT = 'shoot'
ACTION_QUIT = 'quit'


class Action(NamedTuple):
    """One discrete player command for a single frame."""
    kind: str
    dx: int = 0
    dy: int = 0


# Arrow keys move, wasd fires orthogonally, qezc fires diagonally, x quits.
# Letter keys match lowercase only.
KEY_BINDINGS = {
    'KEY_UP': Action(ACTION_MOVE, 0, -1),
    'KEY_DOWN': Action(ACTION_MOVE, 0, 1),
    'KEY_LEFT': Action(ACTION_MOVE, -1, 0),
    'KEY_RIGHT': Action(ACTION_MOVE, 1, 0),
    'w': Action(ACTION_SHOOT, 0, -1),
    's': Action(ACTION_SHOOT, 0, 1),
    'a': Action(ACTION_SHOOT, -1, 0),
    'd': Action(ACTION_SHOOT, 1, 0),
    'q': Action(ACTION_SHOOT, -1, -1),
    'e': Action(ACTION_SHOOT, 1, -1),
    'z': Action(ACTION_SHOOT, -1, 1),
    'c': Action(ACTION_SHOOT, 1, 1),
    'x': Action(ACTION_QUIT),
}


def create_player(world: World, x: float, y: float) -> int:
    """Create the player entity with all required components."""
    entity_id = world.create_entity()

    world.add_component(entity_id, Position(x, y))
    world.add_component(entity_id, Speed(PLAYER_SPEED))
    world.add_component(entity_id, Renderable(
        char=PLAYER_CHAR,
        color=COLOR_PLAYER,
        layer=1  # Drawn first: enemies and projectiles cover it
    ))
    world.add_component(entity_id, Health(PLAYER_HEALTH, PLAYER_HEALTH))
    world.add_component(entity_id, Ammo(PLAYER_AMMO))
    world.add_component(entity_id, PlayerTag())

    return entity_id


def spawn_player(world: World, arena: ArenaMap, rng: random.Random) -> int:
    """Create the player on a random floor cell."""
    x, y = arena.random_floor_cell(rng)
    entity_id = create_player(world, x, y)
    logger.debug("player spawned at ({}, {})", x, y)
    return entity_id


class InputHandler:
    """
    Turns key presses into at most one pending Action.

    The terminal is polled once per frame; a later key in the same
    frame replaces an earlier one.
    """

    def __init__(self):
        self._action: Optional[Action] = None

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        if key.is_sequence:
            action = KEY_BINDINGS.get(key.name)
        else:
            action = KEY_BINDINGS.get(str(key))

        if action is not None:
            self._action = action

    def consume_action(self) -> Optional[Action]:
        """Check and consume the pending action, or None."""
        action = self._action
        self._action = None
        return action


def get_player_entity(world: World) -> Optional[int]:
    """Get the player entity ID."""
    for entity_id, _ in world.query(PlayerTag):
        return entity_id
    return None


def get_player_position(world: World) -> Optional[Position]:
    """Get the player's position component."""
    player_id = get_player_entity(world)
    if player_id is not None:
        return world.get_component(player_id, Position)
    return None
