"""Round lifecycle: waiting for players, playing, and crowning a winner."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, List, Optional

from . import constants
from .messages import RoundEnd, RoundStart, ServerMessage
from .payout import PayoutQueue, PayoutRequest

if TYPE_CHECKING:
    from .snake import Snake
    from .world import World

logger = logging.getLogger(__name__)


class RoundPhase(enum.Enum):
    WAITING = "waiting"
    ACTIVE = "active"


def prize_label(amount: float) -> str:
    return f"{amount:g} {constants.PRIZE_CURRENCY}"


class RoundController:
    """State machine stepped once per second by the server.

    Round end is not a phase of its own: it is bookkeeping done inside a
    single step, after which the next round is already active.
    """

    def __init__(
        self,
        payouts: PayoutQueue,
        round_time: int = constants.ROUND_TIME,
        min_players: int = constants.MIN_PLAYERS,
        prize_amount: float = constants.PRIZE_AMOUNT,
    ) -> None:
        self.payouts = payouts
        self.full_round_time = round_time
        self.min_players = min_players
        self.prize_amount = prize_amount
        self.phase = RoundPhase.WAITING
        self.round_time = round_time
        self.round_num = 1

    @property
    def round_active(self) -> bool:
        return self.phase is RoundPhase.ACTIVE

    @property
    def waiting_for_players(self) -> bool:
        return self.phase is RoundPhase.WAITING

    def step(self, world: "World") -> List[ServerMessage]:
        """Advance the round clock by one second."""

        player_count = len(world.alive_snakes())
        if player_count < self.min_players:
            self.phase = RoundPhase.WAITING
            self.round_time = self.full_round_time
            return []

        if self.phase is RoundPhase.WAITING:
            self.phase = RoundPhase.ACTIVE
            self.round_time = self.full_round_time
            logger.info("[ROUND %d] Starting with %d players!", self.round_num, player_count)
            return [RoundStart(round=self.round_num, players=player_count)]

        if self.round_time > 0:
            self.round_time -= 1
            return []
        return [self._finish_round(world)]

    def _finish_round(self, world: "World") -> RoundEnd:
        winner = self._pick_winner(world)
        message = RoundEnd(
            round=self.round_num,
            winner=winner.name if winner else None,
            winner_id=winner.id if winner else None,
            winner_length=winner.length if winner else 0,
            prize=prize_label(self.prize_amount),
        )
        if winner is not None:
            logger.info(
                "[ROUND %d] Winner: %s (%d) - Prize: %s",
                self.round_num,
                winner.name,
                winner.length,
                message.prize,
            )
            if winner.wallet:
                self.payouts.enqueue(
                    PayoutRequest.create(winner.wallet, self.prize_amount, winner.name, self.round_num)
                )
            else:
                logger.info("[PAYOUT SKIPPED] %s has no wallet connected", winner.name)

        self.round_num += 1
        self.round_time = self.full_round_time
        world.reset_round()
        logger.info("[ROUND %d] Starting...", self.round_num)
        return message

    @staticmethod
    def _pick_winner(world: "World") -> Optional["Snake"]:
        winner = None
        for snake in world.alive_snakes():
            if winner is None or snake.length > winner.length:
                winner = snake
        return winner

    def to_dict(self) -> dict:
        return {
            "roundTime": self.round_time,
            "roundNum": self.round_num,
            "waiting": self.waiting_for_players,
            "minPlayers": self.min_players,
        }
