"""
Projectile System
==================
Projectile lifecycle: spawn, fly, collide, destroy.
"""

from typing import Optional, List

from loguru import logger

from .ecs import World
from .arena_map import ArenaMap
from .components import (
    Position, Renderable, Projectile, ProjectileTag,
    Health, Ammo, EnemyTag
)
from .config import (
    MAX_PROJECTILES, PROJECTILE_SPEED, PROJECTILE_DAMAGE, KILL_AMMO_REWARD,
    ARROW_CHAR, ENEMY_ARROW_CHAR, COLOR_PROJECTILE, COLOR_ENEMY_PROJECTILE
)
from .player import get_player_entity


def spawn_projectile(
    world: World,
    x: float, y: float,
    dx: float, dy: float,
    is_enemy: bool = False,
    speed: float = PROJECTILE_SPEED,
) -> int:
    """Spawn a single projectile entity."""
    eid = world.create_entity()

    world.add_component(eid, Position(x, y))
    world.add_component(eid, Renderable(
        char=ENEMY_ARROW_CHAR if is_enemy else ARROW_CHAR,
        color=COLOR_ENEMY_PROJECTILE if is_enemy else COLOR_PROJECTILE,
        layer=8
    ))
    world.add_component(eid, Projectile(dx=dx, dy=dy, speed=speed, is_enemy=is_enemy))
    world.add_component(eid, ProjectileTag())

    return eid


def shoot(world: World, x: float, y: float, dx: float, dy: float,
          is_enemy: bool = False) -> Optional[int]:
    """
    Fire a projectile from (x, y) along (dx, dy).

    Player shots need ammo and spend one round. A shot with no ammo,
    or with MAX_PROJECTILES already in flight, is dropped without
    complaint. Returns the projectile ID, or None if dropped.
    """
    ammo = None
    if not is_enemy:
        player_id = get_player_entity(world)
        ammo = world.get_component(player_id, Ammo) if player_id is not None else None
        if ammo is None or ammo.count <= 0:
            logger.debug("shot dropped: out of ammo")
            return None

    if world.count(ProjectileTag) >= MAX_PROJECTILES:
        logger.debug("shot dropped: {} projectiles in flight", MAX_PROJECTILES)
        return None

    if ammo is not None:
        ammo.count -= 1

    return spawn_projectile(world, x, y, dx, dy, is_enemy)


def projectile_system(world: World, arena: ArenaMap, dt: float) -> List[dict]:
    """
    Advance every projectile and resolve what it runs into.

    Checks run in a fixed order and the first match destroys the
    projectile: out of bounds, wall, player (enemy shots only), enemy
    (player shots only). A player shot kills at most one enemy.

    Returns a list of event dicts describing each removal.
    """
    events = []

    player_id = get_player_entity(world)
    p_pos = world.get_component(player_id, Position) if player_id is not None else None
    p_health = world.get_component(player_id, Health) if player_id is not None else None
    p_ammo = world.get_component(player_id, Ammo) if player_id is not None else None

    for proj_id, pos, proj in world.query(Position, Projectile):
        pos.x += proj.dx * proj.speed * dt
        pos.y += proj.dy * proj.speed * dt
        x, y = int(pos.x), int(pos.y)

        if not arena.in_bounds(x, y):
            world.destroy_entity(proj_id)
            events.append({'kind': 'out_of_bounds', 'projectile': proj_id})
            continue

        if arena.is_wall(x, y):
            world.destroy_entity(proj_id)
            events.append({'kind': 'wall', 'projectile': proj_id, 'x': x, 'y': y})
            continue

        if proj.is_enemy:
            if p_pos is None or (int(p_pos.x), int(p_pos.y)) != (x, y):
                continue

            p_health.current = max(0, p_health.current - PROJECTILE_DAMAGE)
            world.destroy_entity(proj_id)
            events.append({'kind': 'player_hit', 'projectile': proj_id,
                           'health': p_health.current})
            logger.debug("player hit at ({}, {}), health {}", x, y, p_health.current)

            if p_health.current <= 0:
                events.append({'kind': 'player_killed', 'projectile': proj_id})
            continue

        for enemy_id, e_pos, _ in world.query(Position, EnemyTag):
            if (int(e_pos.x), int(e_pos.y)) != (x, y):
                continue

            world.destroy_entity(enemy_id)
            world.destroy_entity(proj_id)
            if p_ammo is not None:
                p_ammo.count += KILL_AMMO_REWARD
            events.append({'kind': 'enemy_killed', 'projectile': proj_id,
                           'enemy': enemy_id, 'x': x, 'y': y})
            logger.debug("enemy {} destroyed at ({}, {})", enemy_id, x, y)
            break

    return events
