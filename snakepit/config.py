"""Process configuration for the game server."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping, Optional

from . import constants


@dataclass(frozen=True)
class ServerConfig:
    """Runtime settings collected from the command line and environment.

    Attributes
    ----------
    host, port:
        Interface and port the websocket server binds to.
    prize_amount:
        Reward queued for the winner of each round, in ``PRIZE_CURRENCY``.
    round_time:
        Length of a round in seconds once enough players are alive.
    min_players:
        Number of living snakes needed before a round starts.
    payout_interval:
        Seconds between two attempts of draining the payout queue.
    log_level:
        Name of the root logging level.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    prize_amount: float = constants.PRIZE_AMOUNT
    round_time: int = constants.ROUND_TIME
    min_players: int = constants.MIN_PLAYERS
    payout_interval: float = constants.PAYOUT_INTERVAL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        environ = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=environ.get("HOST", defaults.host),
            port=int(environ.get("PORT", defaults.port)),
            prize_amount=float(environ.get("PRIZE_AMOUNT", defaults.prize_amount)),
            round_time=int(environ.get("ROUND_TIME", defaults.round_time)),
            min_players=int(environ.get("MIN_PLAYERS", defaults.min_players)),
            payout_interval=float(environ.get("PAYOUT_INTERVAL", defaults.payout_interval)),
            log_level=environ.get("LOG_LEVEL", defaults.log_level),
        )

    def validate(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError("Port must be between 1 and 65535")
        if self.prize_amount < 0:
            raise ValueError("Prize amount cannot be negative")
        if self.round_time <= 0:
            raise ValueError("Round time must be positive")
        if self.min_players <= 0:
            raise ValueError("Minimum player count must be positive")
        if self.payout_interval <= 0:
            raise ValueError("Payout interval must be positive")
