"""The game server: accepts players, simulates them and relays their state."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
from dataclasses import dataclass

from .packet import FrameDecoder, Packet, frame
from .physics import ServerPlayer
from .protocol import (
    map_data_packet,
    parse_input_packet,
    player_joined_packet,
    player_left_packet,
    player_state_packet,
    welcome_packet,
)
from .world import TileMap, build_default_map

log = logging.getLogger(__name__)

DEFAULT_PORT = 53000
TICK_SECONDS = 0.01
_READ_CHUNK = 4096


@dataclass
class ClientInfo:
    """A connected client: its stream writer and its player."""

    player: ServerPlayer
    writer: asyncio.StreamWriter
    connected: bool = True

    def send(self, packet: Packet) -> None:
        if self.connected and not self.writer.is_closing():
            self.writer.write(frame(packet))


class GameServer:
    """Runs one simulation loop per connected client over TCP."""

    def __init__(
        self,
        host: str = "0.0.0.0",
        port: int = DEFAULT_PORT,
        tile_map: TileMap | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.tile_map = tile_map if tile_map is not None else build_default_map()
        self.clients: dict[int, ClientInfo] = {}
        self._next_player_id = 0
        self._server: asyncio.base_events.Server | None = None

    def broadcast(self, packet: Packet, exclude: int | None = None) -> None:
        """Send a packet to every connected client except the excluded id."""
        for client_id, client in list(self.clients.items()):
            if client_id != exclude and client.connected:
                client.send(packet)

    async def handle_client(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        """Serve one connection from greeting to removal."""
        client_id = self._next_player_id
        self._next_player_id += 1
        client = ClientInfo(player=ServerPlayer(id=client_id), writer=writer)
        self.clients[client_id] = client
        log.info("Client assigned ID: %d", client_id)

        # Everything up to the first await goes out without interleaving.
        client.send(welcome_packet(client_id))
        for other_id, other in self.clients.items():
            if other_id != client_id and other.connected:
                client.send(
                    player_state_packet(other.player.id, other.player.x, other.player.y)
                )
        self.broadcast(
            player_joined_packet(client_id, client.player.x, client.player.y),
            exclude=client_id,
        )
        client.send(map_data_packet(self.tile_map.rows()))
        log.info("Sent map data to client %d", client_id)

        receiver = asyncio.create_task(self._receive(client, reader))
        try:
            await self._simulate(client)
        except (ConnectionError, OSError):
            client.connected = False
        finally:
            receiver.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await receiver
            self.broadcast(player_left_packet(client_id), exclude=client_id)
            self.clients.pop(client_id, None)
            log.info(
                "Client %d removed. Active clients: %d", client_id, len(self.clients)
            )
            writer.close()
            with contextlib.suppress(ConnectionError, OSError):
                await writer.wait_closed()

    async def _receive(self, client: ClientInfo, reader: asyncio.StreamReader) -> None:
        decoder = FrameDecoder()
        try:
            while client.connected:
                data = await reader.read(_READ_CHUNK)
                if not data:
                    log.info("Client %d disconnected.", client.player.id)
                    break
                for packet in decoder.feed(data):
                    user_input = parse_input_packet(packet)
                    if user_input is not None:
                        client.player.last_input = user_input
                        client.player.needs_update = True
        except (ConnectionError, OSError):
            pass
        finally:
            client.connected = False

    async def _simulate(self, client: ClientInfo) -> None:
        loop = asyncio.get_running_loop()
        player = client.player
        last = loop.time()
        while client.connected:
            now = loop.time()
            dt, last = now - last, now
            if player.step(dt, self.tile_map):
                log.debug("Player %d landed.", player.id)
            if player.needs_update:
                self.broadcast(
                    player_state_packet(player.id, player.x, player.y, player.is_on_ground)
                )
                player.needs_update = False
            await client.writer.drain()
            await asyncio.sleep(TICK_SECONDS)

    async def start(self) -> "GameServer":
        """Bind the listening socket; the bound port is stored in ``port``."""
        self._server = await asyncio.start_server(
            self.handle_client, self.host, self.port
        )
        self.port = self._server.sockets[0].getsockname()[1]
        return self

    async def serve_forever(self) -> None:
        if self._server is None:
            await self.start()
        assert self._server is not None
        await self._server.serve_forever()

    async def close(self) -> None:
        """Stop listening and drop every client."""
        if self._server is not None:
            self._server.close()
        for client in list(self.clients.values()):
            client.connected = False
            client.writer.close()
        if self._server is not None:
            await self._server.wait_closed()
            self._server = None


async def _run(host: str, port: int) -> None:
    server = GameServer(host, port)
    await server.start()
    log.info("Server successfully bound to port %d", server.port)
    try:
        await server.serve_forever()
    finally:
        await server.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the platform game server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        asyncio.run(_run(args.host, args.port))
    except OSError as exc:
        log.error("Failed to bind server to port %d: %s", args.port, exc)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0