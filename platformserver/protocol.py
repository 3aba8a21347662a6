"""Message types, shared constants and the packets exchanged with clients."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

from .packet import Packet, PacketError

FRAME_WIDTH = 64
FRAME_HEIGHT = 64
FRAMES_PER_ROW = 8
STATE_CHANGE_COOLDOWN = 0.1
CLIENT_TILE_SIZE = 40.0


class PacketType(IntEnum):
    WELCOME = 0
    PLAYER_STATE = 1
    PLAYER_INPUT = 2
    PLAYER_JOINED = 3
    PLAYER_LEFT = 4
    MAP_DATA = 5


class PlayerAnimState(IntEnum):
    STAND = 0
    WALK = 1
    JUMP = 2
    STANCE = 3


@dataclass(frozen=True)
class AnimationData:
    start_frame_index: int
    frame_count: int
    time_per_frame: float


ANIM_DATA: dict[PlayerAnimState, AnimationData] = {
    PlayerAnimState.STAND: AnimationData(64, 1, 0.18),
    PlayerAnimState.WALK: AnimationData(32, 8, 0.1),
    PlayerAnimState.JUMP: AnimationData(42, 6, 0.1),
    PlayerAnimState.STANCE: AnimationData(0, 4, 0.18),
}


@dataclass
class PlayerInputState:
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    jump: bool = False

    def write_to(self, packet: Packet) -> Packet:
        for flag in (self.up, self.down, self.left, self.right, self.jump):
            packet.write_bool(flag)
        return packet

    @classmethod
    def read_from(cls, packet: Packet) -> "PlayerInputState":
        return cls(
            up=packet.read_bool(),
            down=packet.read_bool(),
            left=packet.read_bool(),
            right=packet.read_bool(),
            jump=packet.read_bool(),
        )


def read_packet_type(packet: Packet) -> PacketType:
    """Read the leading type byte; unknown values raise PacketError."""
    value = packet.read_uint8()
    try:
        return PacketType(value)
    except ValueError as exc:
        raise PacketError(f"unknown packet type {value}") from exc


def _typed(kind: PacketType) -> Packet:
    return Packet().write_uint8(kind)


def welcome_packet(client_id: int) -> Packet:
    return _typed(PacketType.WELCOME).write_uint32(client_id)


def player_state_packet(
    player_id: int, x: float, y: float, on_ground: bool | None = None
) -> Packet:
    """Build a state packet; the ground flag is appended only when given."""
    packet = _typed(PacketType.PLAYER_STATE).write_uint32(player_id)
    packet.write_float(x).write_float(y)
    if on_ground is not None:
        packet.write_bool(on_ground)
    return packet


def player_joined_packet(player_id: int, x: float, y: float) -> Packet:
    packet = _typed(PacketType.PLAYER_JOINED).write_uint32(player_id)
    return packet.write_float(x).write_float(y)


def player_left_packet(player_id: int) -> Packet:
    return _typed(PacketType.PLAYER_LEFT).write_uint32(player_id)


def map_data_packet(tile_map: Iterable[Sequence[int]]) -> Packet:
    """Width, height, then every tile row by row as a signed 32-bit value."""
    rows = [list(row) for row in tile_map]
    width = len(rows[0]) if rows else 0
    packet = _typed(PacketType.MAP_DATA).write_uint32(width).write_uint32(len(rows))
    for row in rows:
        for tile in row:
            packet.write_int32(int(tile))
    return packet


def parse_input_packet(packet: Packet) -> PlayerInputState | None:
    """Return the input carried by a player-input packet, or None otherwise."""
    try:
        if read_packet_type(packet) is not PacketType.PLAYER_INPUT:
            return None
        return PlayerInputState.read_from(packet)
    except PacketError:
        return None