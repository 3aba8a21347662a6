# platformserver

An authoritative TCP server for a small 2D multiplayer platformer. Each
connected client sends its input state (up, down, left, right, jump). For each
client's player, the server runs gravity, jumping and tile collision about
every 10 ms. Whenever a player's position or ground state changes, the server
sends that player's state to every connected client.

## Installing

```
pip install .
```

## Running

```
platformserver
```

By default the server listens on `0.0.0.0`, port 53000. You can change this
with `--host` and `--port`:

```
platformserver --host 127.0.0.1 --port 6000
```

If the port cannot be bound, the command logs the error and exits with
status 1.

## What happens on connect

Each new client gets the next player id, starting from 0. The server then
sends the new client these messages, in this order:

1. `WELCOME` with the client's own id.
2. One `PLAYER_STATE` (id, x, y only) for each player already connected.
3. `MAP_DATA` with the whole tile map.

It also sends every other client a `PLAYER_JOINED` message. When a client
disconnects, the others receive `PLAYER_LEFT`.

## Wire format

Every message is sent as a frame: a 32-bit big-endian byte count, then the
payload. Inside the payload:

- Integers are big-endian.
- Booleans and the packet type take one byte each.
- Floats are IEEE-754 single precision in little-endian byte order.

Each payload begins with a `PacketType` byte:

| Type | Value | Direction | Body |
|------|-------|-----------|------|
| `WELCOME` | 0 | server → client | player id (uint32) |
| `PLAYER_STATE` | 1 | server → client | id (uint32), x, y (float), on-ground (bool) |
| `PLAYER_INPUT` | 2 | client → server | up, down, left, right, jump (bools) |
| `PLAYER_JOINED` | 3 | server → client | id (uint32), x, y (float) |
| `PLAYER_LEFT` | 4 | server → client | id (uint32) |
| `MAP_DATA` | 5 | server → client | width, height (uint32), then one int32 per tile, row by row |

When an existing player is announced to a newcomer, its `PLAYER_STATE` has no
on-ground byte. The server ignores any incoming packet that is not a complete
`PLAYER_INPUT`.

## Using it from Python

```python
from platformserver.world import build_default_map
from platformserver.physics import ServerPlayer

tiles = build_default_map()
player = ServerPlayer(id=0)
landed = player.step(0.016, tiles)
print(player.x, player.y, player.is_on_ground, landed)
```

The modules are:

- `platformserver.packet`: `Packet` for typed reads and writes, `PacketError`,
  `frame`, and `FrameDecoder` for splitting a byte stream back into packets.
- `platformserver.protocol`: `PacketType`, `PlayerInputState`, the message
  builders (`welcome_packet`, `player_state_packet`, `player_joined_packet`,
  `player_left_packet`, `map_data_packet`) and `parse_input_packet`. It also
  holds the sprite animation table `ANIM_DATA`, for use by clients.
- `platformserver.world`: `TileMap` and `build_default_map`, a 50×30 level
  with a floor, three platforms and two side walls. Tiles outside the map
  count as solid.
- `platformserver.physics`: `ServerPlayer` and its `step` method.
- `platformserver.server`: `GameServer`, with `start`, `serve_forever`,
  `broadcast` and `close`, and the `main` entry point.

To embed the server in your own asyncio program:

```python
import asyncio
from platformserver.server import GameServer

async def run():
    server = await GameServer("127.0.0.1", 0).start()
    print("listening on", server.port)
    await server.serve_forever()

asyncio.run(run())
```

## What it does not do

This package is the server only. It has no game client and no rendering, and
it does not play animations. Players are never saved between connections, and
the only map is the built-in default, unless you pass your own `TileMap` to
`GameServer`.

## Tests

```
pip install .[test]
pytest
```