"""Typed messages exchanged with clients.

Inbound messages are produced by :func:`snakepit.protocol.parse_client_message`;
outbound messages are turned into JSON by :func:`snakepit.protocol.encode_message`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class JoinMessage:
    """A connection asking for a snake of its own."""

    name: str
    wallet: Optional[str] = None


@dataclass(frozen=True)
class InputMessage:
    """Steering update; ``None`` fields leave the current value untouched."""

    angle: Optional[float] = None
    boost: Optional[bool] = None


@dataclass(frozen=True)
class RespawnMessage:
    wallet: Optional[str] = None


ClientMessage = Union[JoinMessage, InputMessage, RespawnMessage]


@dataclass(frozen=True)
class Joined:
    type: ClassVar[str] = "joined"

    id: str
    world_width: float
    world_height: float

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "id": self.id,
            "worldWidth": self.world_width,
            "worldHeight": self.world_height,
        }


@dataclass(frozen=True)
class KillNotice:
    type: ClassVar[str] = "kill"

    killer: str
    killer_id: str
    victim: str
    victim_id: str

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "killer": self.killer,
            "killerId": self.killer_id,
            "victim": self.victim,
            "victimId": self.victim_id,
        }


@dataclass(frozen=True)
class RoundStart:
    type: ClassVar[str] = "roundStart"

    round: int
    players: int

    def to_dict(self) -> dict:
        return {"type": self.type, "round": self.round, "players": self.players}


@dataclass(frozen=True)
class RoundEnd:
    """Announces the winner of the round that just finished.

    ``winner`` and ``winner_id`` are ``None`` when nobody was alive at the
    end of the round.
    """

    type: ClassVar[str] = "roundEnd"

    round: int
    winner: Optional[str]
    winner_id: Optional[str]
    winner_length: int
    prize: str

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "round": self.round,
            "winner": self.winner,
            "winnerId": self.winner_id,
            "winnerLength": self.winner_length,
            "prize": self.prize,
        }


ServerMessage = Union[Joined, KillNotice, RoundStart, RoundEnd]
