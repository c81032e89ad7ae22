"""
Arena Map
==========
Static floor/wall tile grid generated once per session.
"""

import random
from enum import Enum
from typing import List, Sequence, Tuple

from loguru import logger

from .config import (
    MAP_WIDTH, MAP_HEIGHT, WALL_DENSITY,
    WALL_CHAR, FLOOR_CHAR
)


class Tile(Enum):
    """Map cell kinds, valued by their display glyph."""
    FLOOR = FLOOR_CHAR
    WALL = WALL_CHAR


class ArenaMap:
    """
    Fixed-size tile grid indexed as tiles[y][x].

    Nothing mutates the grid after generation.
    """

    def __init__(self, tiles: List[List[Tile]]):
        self.tiles = tiles
        self.height = len(tiles)
        self.width = len(tiles[0]) if tiles else 0

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'ArenaMap':
        """Build a map from glyph rows ('#' wall, anything else floor)."""
        return cls([
            [Tile.WALL if char == WALL_CHAR else Tile.FLOOR for char in row]
            for row in rows
        ])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        return self.tiles[y][x]

    def is_wall(self, x: int, y: int) -> bool:
        return self.tiles[y][x] is Tile.WALL

    def is_floor(self, x: int, y: int) -> bool:
        """True for in-bounds floor cells; out of bounds counts as not floor."""
        return self.in_bounds(x, y) and self.tiles[y][x] is Tile.FLOOR

    def random_floor_cell(self, rng: random.Random) -> Tuple[int, int]:
        """
        Sample interior cells until one is floor.

        There is no retry limit: an interior made entirely of walls
        never returns.
        """
        while True:
            x = rng.randrange(self.width - 2) + 1
            y = rng.randrange(self.height - 2) + 1
            if self.tiles[y][x] is Tile.FLOOR:
                return x, y

    def rows(self) -> List[str]:
        """Glyph strings, one per row."""
        return [''.join(tile.value for tile in row) for row in self.tiles]


def generate_map(
    rng: random.Random,
    width: int = MAP_WIDTH,
    height: int = MAP_HEIGHT,
    density: int = WALL_DENSITY,
) -> ArenaMap:
    """
    Generate a walled arena.

    The border ring is solid wall and the interior is floor, then
    width * height // density interior cells are picked at random and
    turned into walls. The same cell may be picked twice. Regions may
    end up disconnected; nothing checks reachability.
    """
    tiles = [[Tile.FLOOR for _ in range(width)] for _ in range(height)]

    for x in range(width):
        tiles[0][x] = Tile.WALL
        tiles[height - 1][x] = Tile.WALL
    for y in range(height):
        tiles[y][0] = Tile.WALL
        tiles[y][width - 1] = Tile.WALL

    wall_count = width * height // density
    for _ in range(wall_count):
        x = rng.randrange(width - 2) + 1
        y = rng.randrange(height - 2) + 1
        tiles[y][x] = Tile.WALL

    logger.debug("generated {}x{} arena with {} random walls", width, height, wall_count)
    return ArenaMap(tiles)
