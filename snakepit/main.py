"""Entry point for the asyncio based game server."""

from __future__ import annotations

import argparse
import asyncio
import http
import json
import logging
from typing import Awaitable, Callable, Dict, Optional, Union

from websockets.asyncio.server import ServerConnection, broadcast, serve
from websockets.datastructures import Headers
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response

from . import constants, protocol
from .config import ServerConfig
from .messages import ClientMessage, InputMessage, Joined, JoinMessage, RespawnMessage, ServerMessage
from .payout import Disburser, PayoutQueue, unconfigured_disburser
from .world import World

logger = logging.getLogger(__name__)


def _json_response(status: http.HTTPStatus, payload: dict) -> Response:
    body = json.dumps(payload).encode()
    headers = Headers(
        [
            ("Content-Type", "application/json"),
            ("Content-Length", str(len(body))),
            ("Connection", "close"),
        ]
    )
    return Response(status.value, status.phrase, headers, body)


class GameServer:
    """High level orchestration of the world simulation and websocket IO."""

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        world: Optional[World] = None,
        disburser: Disburser = unconfigured_disburser,
    ) -> None:
        self.config = config or ServerConfig()
        self.world = world or World(
            payouts=PayoutQueue(),
            round_time=self.config.round_time,
            min_players=self.config.min_players,
            prize_amount=self.config.prize_amount,
        )
        self.disburser = disburser
        # Every open connection observes the game; joined ones also own a snake.
        self.clients: Dict[ServerConnection, Optional[str]] = {}

    async def start(self) -> None:
        """Start the websocket server and the three periodic loops."""

        async with serve(
            self._handle_client,
            self.config.host,
            self.config.port,
            process_request=self._process_request,
        ):
            logger.info("Server listening on %s:%s", self.config.host, self.config.port)
            logger.info("Prize per round: %s %s", self.config.prize_amount, constants.PRIZE_CURRENCY)
            logger.info("Round duration: %ss", self.config.round_time)
            await asyncio.gather(
                self._run_periodic(1.0 / constants.TICK_RATE, self.run_tick, "tick"),
                self._run_periodic(1.0, self.run_round_step, "round"),
                self._run_periodic(self.config.payout_interval, self.run_payout_step, "payout"),
            )

    async def _run_periodic(
        self,
        interval: float,
        step: Callable[[], Union[None, Awaitable[None]]],
        label: str,
    ) -> None:
        """Call ``step`` every ``interval`` seconds on the loop clock.

        A step never overlaps the previous one. When the loop falls behind,
        the missed periods are dropped instead of being replayed. A failing
        step is logged and the loop carries on with the next period.
        """

        loop = asyncio.get_running_loop()
        next_run = loop.time()
        while True:
            try:
                result = step()
                if result is not None:
                    await result
            except Exception:
                logger.exception("Unexpected error in %s step", label)
            next_run += interval
            now = loop.time()
            if next_run < now:
                missed = int((now - next_run) // interval) + 1
                logger.debug("Skipping %d %s step(s)", missed, label)
                next_run += missed * interval
            await asyncio.sleep(next_run - now)

    def run_tick(self) -> None:
        for message in self.world.update():
            self.broadcast(protocol.encode_message(message))
        self.broadcast(protocol.encode_state(self.world.snapshot()))

    def run_round_step(self) -> None:
        for message in self.world.step_round():
            self.broadcast(protocol.encode_message(message))

    async def run_payout_step(self) -> None:
        await self.world.payouts.process_next(self.disburser)

    def broadcast(self, payload: str) -> None:
        if self.clients:
            broadcast(self.clients, payload)

    def apply_message(self, player_id: Optional[str], message: ClientMessage) -> Optional[ServerMessage]:
        """Apply a parsed client message on behalf of ``player_id``.

        Returns the reply for the sending connection, if any.
        """

        if isinstance(message, JoinMessage):
            if player_id is not None:
                self.world.remove_snake(player_id)
            snake = self.world.add_snake(message.name, message.wallet)
            return Joined(id=snake.id, world_width=constants.WORLD_WIDTH, world_height=constants.WORLD_HEIGHT)
        if player_id is None:
            return None
        if isinstance(message, InputMessage):
            self.world.set_player_input(player_id, message.angle, message.boost)
        elif isinstance(message, RespawnMessage):
            self.world.respawn_snake(player_id, message.wallet)
        return None

    async def _handle_client(self, websocket: ServerConnection) -> None:
        self.clients[websocket] = None
        try:
            async for raw in websocket:
                try:
                    message = protocol.parse_client_message(raw)
                except protocol.ProtocolError as exc:
                    logger.warning("Discarding message from %s: %s", websocket.remote_address, exc)
                    continue
                reply = self.apply_message(self.clients.get(websocket), message)
                if isinstance(reply, Joined):
                    self.clients[websocket] = reply.id
                    await websocket.send(protocol.encode_message(reply))
        except ConnectionClosed:
            pass
        finally:
            player_id = self.clients.pop(websocket, None)
            if player_id is not None:
                self.world.remove_snake(player_id)

    def _process_request(self, connection: ServerConnection, request: Request) -> Optional[Response]:
        """Answer the read-only admin endpoints; let websocket upgrades through."""

        if request.headers.get("Upgrade", "").lower() == "websocket":
            return None
        path = request.path.split("?", 1)[0]
        if path == "/api/stats":
            return _json_response(http.HTTPStatus.OK, self.world.stats())
        if path == "/api/payouts":
            payouts = self.world.payouts
            return _json_response(
                http.HTTPStatus.OK,
                {
                    "pending": [item.to_dict() for item in payouts.pending()],
                    "total": payouts.total(),
                },
            )
        return _json_response(http.HTTPStatus.NOT_FOUND, {"error": "Not found"})


def parse_args(argv: Optional[list[str]] = None) -> ServerConfig:
    env = ServerConfig.from_env()
    parser = argparse.ArgumentParser(description="Run the snakepit arena server")
    parser.add_argument("--host", default=env.host, help="Host interface to bind to")
    parser.add_argument("--port", type=int, default=env.port, help="Port to listen on")
    parser.add_argument("--prize-amount", type=float, default=env.prize_amount, help="Prize queued per round")
    parser.add_argument("--round-time", type=int, default=env.round_time, help="Round length in seconds")
    parser.add_argument("--min-players", type=int, default=env.min_players, help="Players needed to start")
    parser.add_argument(
        "--payout-interval", type=float, default=env.payout_interval, help="Seconds between payout attempts"
    )
    parser.add_argument("--log-level", default=env.log_level, help="Logging level")
    args = parser.parse_args(argv)
    config = ServerConfig(
        host=args.host,
        port=args.port,
        prize_amount=args.prize_amount,
        round_time=args.round_time,
        min_players=args.min_players,
        payout_interval=args.payout_interval,
        log_level=args.log_level,
    )
    config.validate()
    return config


def main() -> None:
    config = parse_args()
    logging.basicConfig(level=config.log_level.upper(), format="[%(levelname)s] %(message)s")
    server = GameServer(config)
    asyncio.run(server.start())


if __name__ == "__main__":
    main()
