"""
Game Session
=============
Owns one play-through: the map, the ECS world, the RNG and the clock,
and advances them one frame at a time.

Phase machine:
    playing → won → (restart) playing
    playing → lost
    playing / won → exited
"""

import random
import time
from typing import Callable, Optional

from loguru import logger

from .ecs import World
from .arena_map import ArenaMap, generate_map
from .components import Position, Health, Ammo, EnemyTag, ProjectileTag
from .enemies import spawn_enemies
from .player import (
    Action, ACTION_MOVE, ACTION_SHOOT, ACTION_QUIT, spawn_player
)
from .projectiles import shoot, projectile_system
from .systems import move_entity, enemy_ai_system


# Session phases
PHASE_PLAYING = 'playing'
PHASE_WON = 'won'
PHASE_LOST = 'lost'
PHASE_EXITED = 'exited'

TERMINAL_PHASES = (PHASE_LOST, PHASE_EXITED)


class GameSession:
    """Central game state container. Passed through all systems."""

    def __init__(self, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock

        self.phase = PHASE_PLAYING
        self.world: Optional[World] = None
        self.arena: Optional[ArenaMap] = None
        self.player_id: Optional[int] = None
        self.last_update = 0.0
        self.frame = 0

        self._pending_action: Optional[Action] = None

    def start_game(self, arena: Optional[ArenaMap] = None):
        """
        Initialize a new session: fresh world, map and spawns.

        A prebuilt arena may be passed in; otherwise one is generated.
        """
        self.world = World()
        self.arena = arena if arena is not None else generate_map(self.rng)
        self.last_update = self.clock()
        self.frame = 0
        self._pending_action = None

        self.player_id = spawn_player(self.world, self.arena, self.rng)
        spawn_enemies(self.world, self.arena, self.rng, self.last_update)

        self.phase = PHASE_PLAYING
        logger.info("session started with {} enemies", self.enemy_count)

    def restart(self):
        """Start over after a win. Ignored in any other phase."""
        if self.phase != PHASE_WON:
            return
        logger.info("restarting session")
        self.start_game()

    def quit(self):
        """Leave the session from play or from the win screen."""
        if self.phase in (PHASE_PLAYING, PHASE_WON):
            self.phase = PHASE_EXITED
            logger.info("session exited by player")

    @property
    def running(self) -> bool:
        return self.phase not in TERMINAL_PHASES

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def enemy_count(self) -> int:
        return self.world.count(EnemyTag)

    @property
    def projectile_count(self) -> int:
        return self.world.count(ProjectileTag)

    @property
    def player_position(self) -> Position:
        return self.world.get_component(self.player_id, Position)

    @property
    def player_health(self) -> int:
        return self.world.get_component(self.player_id, Health).current

    @property
    def player_ammo(self) -> int:
        return self.world.get_component(self.player_id, Ammo).count

    def status_text(self) -> str:
        return (
            f'Enemies Left: {self.enemy_count} | '
            f'Player Health: {self.player_health} | '
            f'Ammo: {self.player_ammo}'
        )

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def queue_action(self, action: Optional[Action]):
        """Set the action applied on the next update. None clears it."""
        self._pending_action = action

    def apply_action(self, action: Action):
        """Apply one player command immediately."""
        if action.kind == ACTION_QUIT:
            self.quit()
        elif action.kind == ACTION_MOVE:
            move_entity(self.world, self.arena, self.player_id, action.dx, action.dy)
        elif action.kind == ACTION_SHOOT:
            pos = self.player_position
            shoot(self.world, pos.x, pos.y, action.dx, action.dy, is_enemy=False)

    def update(self, now: Optional[float] = None):
        """
        Run one frame.

        Order: elapsed time, player action, projectiles, enemies,
        win check. A frame that kills the player stops after the
        projectile pass, unless that same pass destroyed the last
        enemy: clearing the arena wins even on a fatal frame.
        """
        if self.phase != PHASE_PLAYING:
            return

        if now is None:
            now = self.clock()
        dt = now - self.last_update
        self.last_update = now
        self.frame += 1

        action = self._pending_action
        self._pending_action = None
        if action is not None:
            self.apply_action(action)
            if self.phase != PHASE_PLAYING:
                return

        events = projectile_system(self.world, self.arena, dt)
        if any(event['kind'] == 'player_killed' for event in events):
            self.world.process_dead_entities()
            if self.enemy_count == 0:
                self._win()
            else:
                self.phase = PHASE_LOST
                logger.info("player killed on frame {}", self.frame)
            return

        enemy_ai_system(self.world, self.arena, self.rng, dt, now)
        self.world.process_dead_entities()

        if self.enemy_count == 0:
            self._win()

    def _win(self):
        self.phase = PHASE_WON
        logger.info("all enemies destroyed on frame {}", self.frame)
