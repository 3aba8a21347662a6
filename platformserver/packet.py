"""Binary packets and stream framing used on the wire.

Integers are written in network byte order. Floats are written as 32-bit
IEEE values in little-endian order, the layout common hosts produce.
Booleans take one byte. On a stream every packet is preceded by its
payload size as a big-endian unsigned 32-bit integer.
"""

from __future__ import annotations

import struct

_UINT8 = struct.Struct("!B")
_UINT32 = struct.Struct("!I")
_INT32 = struct.Struct("!i")
_FLOAT = struct.Struct("<f")
_SIZE = struct.Struct("!I")


class PacketError(Exception):
    """Raised when a packet holds too little data for a read."""


class Packet:
    """A growable byte buffer with typed writes and sequential typed reads."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Packet({bytes(self._data)!r})"

    def _write(self, fmt: struct.Struct, value) -> "Packet":
        try:
            self._data += fmt.pack(value)
        except struct.error as exc:
            raise ValueError(f"value {value!r} does not fit: {exc}") from exc
        return self

    def _read(self, fmt: struct.Struct):
        end = self._pos + fmt.size
        if end > len(self._data):
            raise PacketError(
                f"need {fmt.size} bytes at offset {self._pos}, "
                f"only {len(self._data) - self._pos} left"
            )
        (value,) = fmt.unpack_from(self._data, self._pos)
        self._pos = end
        return value

    def write_bool(self, value: bool) -> "Packet":
        return self._write(_UINT8, 1 if value else 0)

    def write_uint8(self, value: int) -> "Packet":
        return self._write(_UINT8, value)

    def write_uint32(self, value: int) -> "Packet":
        return self._write(_UINT32, value)

    def write_int32(self, value: int) -> "Packet":
        return self._write(_INT32, value)

    def write_float(self, value: float) -> "Packet":
        return self._write(_FLOAT, value)

    def read_bool(self) -> bool:
        return self._read(_UINT8) != 0

    def read_uint8(self) -> int:
        return self._read(_UINT8)

    def read_uint32(self) -> int:
        return self._read(_UINT32)

    def read_int32(self) -> int:
        return self._read(_INT32)

    def read_float(self) -> float:
        return self._read(_FLOAT)

    def to_bytes(self) -> bytes:
        """Return the whole payload, independent of the read position."""
        return bytes(self._data)

    def end_of_packet(self) -> bool:
        """True once every byte has been read."""
        return self._pos >= len(self._data)


def frame(payload: bytes | Packet) -> bytes:
    """Prefix a payload with its size for sending on a stream."""
    data = payload.to_bytes() if isinstance(payload, Packet) else bytes(payload)
    return _SIZE.pack(len(data)) + data


class FrameDecoder:
    """Reassembles size-prefixed packets from arbitrary stream chunks."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[Packet]:
        """Add received bytes and return every packet now complete."""
        self._buffer += data
        packets: list[Packet] = []
        while len(self._buffer) >= _SIZE.size:
            (size,) = _SIZE.unpack_from(self._buffer, 0)
            end = _SIZE.size + size
            if len(self._buffer) < end:
                break
            packets.append(Packet(bytes(self._buffer[_SIZE.size:end])))
            del self._buffer[:end]
        return packets