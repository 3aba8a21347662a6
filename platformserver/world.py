"""The tile map the game is played on."""

from __future__ import annotations

from typing import Iterable, Sequence

MAP_WIDTH = 50
MAP_HEIGHT = 30
TILE_SIZE = 40.0

EMPTY = 0
WALL = 1


class TileMap:
    """A rectangular grid of tiles; 1 marks a wall, anything else is open."""

    def __init__(self, rows: Iterable[Sequence[int]]) -> None:
        grid = tuple(tuple(int(tile) for tile in row) for row in rows)
        if grid and any(len(row) != len(grid[0]) for row in grid):
            raise ValueError("all rows of a tile map must have the same length")
        self._grid = grid

    @property
    def width(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    @property
    def height(self) -> int:
        return len(self._grid)

    def is_solid(self, x: int, y: int) -> bool:
        """Whether tile (x, y) blocks movement; outside the map counts as wall."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return True
        return self._grid[y][x] == WALL

    def rows(self) -> list[list[int]]:
        """A fresh copy of the grid, top row first."""
        return [list(row) for row in self._grid]


def build_default_map() -> TileMap:
    """The standard level: a floor, three platforms and two side walls."""
    rows = [[EMPTY] * MAP_WIDTH for _ in range(MAP_HEIGHT)]
    rows[MAP_HEIGHT - 1] = [WALL] * MAP_WIDTH
    for row, start, stop in (
        (MAP_HEIGHT - 4, 5, 15),
        (MAP_HEIGHT - 6, 17, 28),
        (MAP_HEIGHT - 8, 30, 45),
    ):
        rows[row][start:stop] = [WALL] * (stop - start)
    for y in range(MAP_HEIGHT - 10, MAP_HEIGHT - 1):
        rows[y][0] = WALL
        rows[y][MAP_WIDTH - 1] = WALL
    return TileMap(rows)