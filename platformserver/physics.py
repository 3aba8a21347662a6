"""Server-side player movement: gravity, jumping and tile collisions."""

from __future__ import annotations

from dataclasses import dataclass, field

from .protocol import FRAME_HEIGHT, FRAME_WIDTH, PlayerInputState
from .world import TILE_SIZE, TileMap

GRAVITY = 980.0
JUMP_STRENGTH = -500.0

_HALF_WIDTH = FRAME_WIDTH / 2
_HALF_HEIGHT = FRAME_HEIGHT / 2


def _tile(coord: float) -> int:
    # Truncation toward zero, as the collision grid has always used.
    return int(coord / TILE_SIZE)


@dataclass
class ServerPlayer:
    """A player's authoritative state; (x, y) is the centre of its box."""

    id: int = 0
    x: float = 400.0
    y: float = 300.0
    speed: float = 200.0
    last_input: PlayerInputState = field(default_factory=PlayerInputState)
    velocity_y: float = 0.0
    is_on_ground: bool = False
    needs_update: bool = True

    def step(self, dt: float, tile_map: TileMap) -> bool:
        """Advance by dt seconds; return True if the player landed this step."""
        solid = tile_map.is_solid
        was_on_ground = self.is_on_ground
        landed = False

        if self.is_on_ground:
            left = _tile(self.x - _HALF_WIDTH)
            right = _tile(self.x + _HALF_WIDTH - 1)
            below = _tile(self.y + _HALF_HEIGHT)
            if not solid(left, below) and not solid(right, below):
                self.is_on_ground = False

        if not self.is_on_ground:
            self.velocity_y += GRAVITY * dt

        if self.last_input.jump and self.is_on_ground:
            self.velocity_y = JUMP_STRENGTH
            self.is_on_ground = False
            self.needs_update = True

        move_x = 0.0
        if self.last_input.left:
            move_x -= self.speed * dt
        if self.last_input.right:
            move_x += self.speed * dt
        move_y = self.velocity_y * dt

        next_x = self.x + move_x
        next_y = self.y + move_y

        next_left = _tile(next_x - _HALF_WIDTH)
        next_right = _tile(next_x + _HALF_WIDTH - 1)
        rows = (
            _tile(self.y - _HALF_HEIGHT),
            _tile(self.y + _HALF_HEIGHT - 1),
            _tile(self.y),
        )
        if move_x > 0:
            if any(solid(next_right, row) for row in rows):
                next_x = next_right * TILE_SIZE - _HALF_WIDTH
        elif move_x < 0:
            if any(solid(next_left, row) for row in rows):
                next_x = (next_left + 1) * TILE_SIZE + _HALF_WIDTH
        self.x = next_x

        next_top = _tile(next_y - _HALF_HEIGHT)
        next_bottom = _tile(next_y + _HALF_HEIGHT - 1)
        left = _tile(self.x - _HALF_WIDTH)
        right = _tile(self.x + _HALF_WIDTH - 1)
        if move_y > 0:
            if solid(left, next_bottom) or solid(right, next_bottom):
                next_y = next_bottom * TILE_SIZE - _HALF_HEIGHT
                self.velocity_y = 0.0
                self.is_on_ground = True
                landed = True
        elif move_y < 0:
            if solid(left, next_top) or solid(right, next_top):
                next_y = (next_top + 1) * TILE_SIZE + _HALF_HEIGHT
                self.velocity_y = 0.0

        if self.y != next_y or self.is_on_ground != was_on_ground:
            self.needs_update = True
        self.y = next_y
        return landed