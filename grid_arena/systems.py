"""
ECS Systems
============
Functions that operate on entities with matching components.
Each system queries the World for entities with required components
and updates them.
"""

from typing import Tuple
import math
import random

from .ecs import World
from .arena_map import ArenaMap
from .components import (
    Position, Speed, Renderable, ShootTimer, EnemyTag
)
from .config import ENEMY_JITTER
from .engine import GameRenderer
from .enemies import roll_shoot_delay
from .player import get_player_position
from .projectiles import shoot


# =============================================================================
# MOVEMENT
# =============================================================================

def move_entity(world: World, arena: ArenaMap, entity_id: int,
                dx: float, dy: float) -> bool:
    """
    Step an entity by (dx, dy) on the grid.

    The destination is the truncated cell of the new position. If it is
    an in-bounds floor cell the entity snaps to it (dropping any sub-cell
    offset); otherwise the entity stays put. Returns whether it moved.
    """
    pos = world.get_component(entity_id, Position)
    if pos is None:
        return False

    new_x = int(pos.x + dx)
    new_y = int(pos.y + dy)
    if not arena.is_floor(new_x, new_y):
        return False

    pos.x = new_x
    pos.y = new_y
    return True


# =============================================================================
# AI SYSTEM
# =============================================================================

def enemy_ai_system(world: World, arena: ArenaMap, rng: random.Random,
                    dt: float, now: float):
    """
    Move every enemy toward the player and fire when its timer is up.

    Movement keeps sub-cell precision: the jittered step is committed
    as-is when its truncated cell is in-bounds floor. Shots aim at the
    player from the enemy's post-move position.
    """
    player_pos = get_player_position(world)
    if player_pos is None:
        return

    for entity_id, pos, speed, timer, _ in world.query(
        Position, Speed, ShootTimer, EnemyTag
    ):
        dir_x, dir_y = get_direction_to(pos, player_pos)
        dir_x += rng.uniform(-ENEMY_JITTER, ENEMY_JITTER)
        dir_y += rng.uniform(-ENEMY_JITTER, ENEMY_JITTER)

        new_x = pos.x + dir_x * speed.value * dt
        new_y = pos.y + dir_y * speed.value * dt
        if arena.is_floor(int(new_x), int(new_y)):
            pos.x = new_x
            pos.y = new_y

        if now - timer.last_shot_time >= timer.shoot_delay:
            shot_x, shot_y = get_direction_to(pos, player_pos)
            shoot(world, pos.x, pos.y, shot_x, shot_y, is_enemy=True)
            timer.last_shot_time = now
            timer.shoot_delay = roll_shoot_delay(rng)


# =============================================================================
# RENDERING
# =============================================================================

def render_arena(arena: ArenaMap, renderer: GameRenderer, wall_color: int, floor_color: int):
    """Draw the tile grid."""
    for y, row in enumerate(arena.rows()):
        for x, char in enumerate(row):
            color = wall_color if arena.is_wall(x, y) else floor_color
            renderer.put(x, y, char, color)


def render_system(world: World, renderer: GameRenderer):
    """
    Render all entities on top of the map.

    Sorts by render layer: the player first, then enemies, then
    projectiles, so a shot is visible on the cell it occupies.
    """
    render_list = []

    for entity_id, pos, rend in world.query(Position, Renderable):
        render_list.append((rend.layer, entity_id, pos, rend))

    render_list.sort(key=lambda x: x[0])

    for _, entity_id, pos, rend in render_list:
        renderer.put(int(pos.x), int(pos.y), rend.char, rend.color)


# =============================================================================
# UTILITY
# =============================================================================

def get_direction_to(from_pos: Position, to_pos: Position) -> Tuple[float, float]:
    """Get normalized direction vector between two positions."""
    dx = to_pos.x - from_pos.x
    dy = to_pos.y - from_pos.y
    dist = math.sqrt(dx * dx + dy * dy)
    if dist > 0:
        return dx / dist, dy / dist
    return 0.0, 0.0
