"""
Enemies
========
Enemy entity creation and the session spawn wave.

Every enemy is the same archetype: a slow chaser that fires at the
player on its own randomized cadence and dies to a single hit.
"""

import random
from typing import List

from loguru import logger

from .ecs import World
from .arena_map import ArenaMap
from .components import (
    Position, Speed, Renderable, Health, ShootTimer, EnemyTag
)
from .config import (
    NUM_ENEMIES, ENEMY_HEALTH, ENEMY_SPEED,
    SHOOT_DELAY_MIN, SHOOT_DELAY_STEPS,
    ENEMY_CHAR, COLOR_ENEMY
)


def roll_shoot_delay(rng: random.Random) -> float:
    """Seconds until the next shot, in [1.0, 3.0) at 1/100 s granularity."""
    return SHOOT_DELAY_MIN + rng.randrange(SHOOT_DELAY_STEPS) / 100.0


def create_enemy(world: World, x: float, y: float,
                 last_shot_time: float = 0.0, shoot_delay: float = SHOOT_DELAY_MIN) -> int:
    """
    Create an enemy.

    Visual: E (red)
    Behavior: Jittery pursuit, periodic aimed shot
    """
    entity_id = world.create_entity()

    world.add_component(entity_id, Position(x, y))
    world.add_component(entity_id, Speed(ENEMY_SPEED))
    world.add_component(entity_id, Renderable(
        char=ENEMY_CHAR,
        color=COLOR_ENEMY,
        layer=5
    ))
    world.add_component(entity_id, Health(ENEMY_HEALTH, ENEMY_HEALTH))
    world.add_component(entity_id, ShootTimer(last_shot_time, shoot_delay))
    world.add_component(entity_id, EnemyTag())

    return entity_id


def spawn_enemies(world: World, arena: ArenaMap, rng: random.Random,
                  now: float, count: int = NUM_ENEMIES) -> List[int]:
    """
    Spawn up to `count` enemies on random floor cells.

    Spawns are not spread apart: two enemies, or an enemy and the
    player, may share a cell. Never exceeds NUM_ENEMIES live enemies.
    """
    entities = []
    for _ in range(count):
        if world.count(EnemyTag) >= NUM_ENEMIES:
            break
        x, y = arena.random_floor_cell(rng)
        entities.append(create_enemy(world, x, y, now, roll_shoot_delay(rng)))

    logger.debug("spawned {} enemies", len(entities))
    return entities
