"""Shared fixtures for grid arena tests."""

from __future__ import annotations

import random

import pytest
from blessed.keyboard import Keystroke

from grid_arena.arena_map import ArenaMap
from grid_arena.components import EnemyTag
from grid_arena.ecs import World
from grid_arena.game import GameSession


# 7x5, walled, one interior pillar at (3, 2)
PILLAR_ROWS = [
    "#######",
    "#.....#",
    "#..#..#",
    "#.....#",
    "#######",
]

# No border: projectiles can fly off the edge. Enemy pocket at (8, 1).
OPEN_ROWS = [
    ".......###",
    ".......#.#",
    ".......###",
    "..........",
    "..........",
]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class StubTerminal:
    """Just enough of blessed.Terminal for the renderer and input polling."""

    def __init__(self, width: int = 40, height: int = 21, keys=None):
        self.width = width
        self.height = height
        self.normal = ''
        self.bold = ''
        self._keys = list(keys or [])

    def move_xy(self, x, y):
        return ''

    def color(self, value):
        return ''

    def inkey(self, timeout=None):
        if self._keys:
            return self._keys.pop(0)
        return Keystroke('')


def arrow(name: str) -> Keystroke:
    codes = {'KEY_UP': 259, 'KEY_DOWN': 258, 'KEY_LEFT': 260, 'KEY_RIGHT': 261}
    return Keystroke('\x1b[A', code=codes[name], name=name)


def clear_enemies(world: World):
    for enemy_id, _ in list(world.query(EnemyTag)):
        world.destroy_entity(enemy_id)
    world.process_dead_entities()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def world():
    return World()


@pytest.fixture
def pillar_arena():
    return ArenaMap.from_rows(PILLAR_ROWS)


@pytest.fixture
def open_arena():
    return ArenaMap.from_rows(OPEN_ROWS)


@pytest.fixture
def session(rng, clock):
    s = GameSession(rng=rng, clock=clock)
    s.start_game()
    return s
