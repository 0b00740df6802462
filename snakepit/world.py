"""Authoritative game world simulation."""

from __future__ import annotations

import logging
import random
import uuid
from typing import Dict, List, Optional

from . import collision, constants, utils
from .food import FoodField
from .messages import ServerMessage
from .payout import PayoutQueue
from .rounds import RoundController
from .snake import Snake

logger = logging.getLogger(__name__)


def new_player_id() -> str:
    return uuid.uuid4().hex


class World:
    """Holds all entities and advances the simulation on every tick.

    Every public method runs to completion without yielding, so the server
    can call them from independent asyncio tasks without further locking.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        payouts: Optional[PayoutQueue] = None,
        round_time: int = constants.ROUND_TIME,
        min_players: int = constants.MIN_PLAYERS,
        prize_amount: float = constants.PRIZE_AMOUNT,
    ) -> None:
        self.rng = rng or random.Random()
        self.tick: int = 0
        self.snakes: Dict[str, Snake] = {}
        self.food = FoodField(self.rng)
        self.food.spawn(constants.INITIAL_FOOD_COUNT)
        self.payouts = payouts if payouts is not None else PayoutQueue()
        self.rounds = RoundController(
            self.payouts,
            round_time=round_time,
            min_players=min_players,
            prize_amount=prize_amount,
        )

    def _spawn_snake(self, snake_id: str, name: str, wallet: Optional[str] = None) -> Snake:
        # Each snake gets its own generator so replaying a seed stays stable.
        rng = random.Random(self.rng.getrandbits(64))
        snake = Snake.spawn(snake_id, name, wallet=wallet, rng=rng)
        self.snakes[snake_id] = snake
        return snake

    def add_snake(self, name: str, wallet: Optional[str] = None) -> Snake:
        snake = self._spawn_snake(new_player_id(), name, wallet)
        logger.info("Player joined: %s (%s) [%s]", snake.name, snake.id, utils.mask_wallet(wallet))
        return snake

    def remove_snake(self, snake_id: str) -> Optional[Snake]:
        """Kill and remove a snake whose connection went away."""

        snake = self.snakes.pop(snake_id, None)
        if snake is None:
            return None
        if snake.alive:
            snake.die(self.food)
        logger.info("Player left: %s", snake.name)
        return snake

    def respawn_snake(self, snake_id: str, wallet: Optional[str] = None) -> Optional[Snake]:
        """Replace a player's snake with a fresh one keeping id and name."""

        previous = self.snakes.get(snake_id)
        if previous is None:
            return None
        return self._spawn_snake(snake_id, previous.name, wallet)

    def set_player_input(
        self, snake_id: str, angle: Optional[float] = None, boost: Optional[bool] = None
    ) -> bool:
        snake = self.snakes.get(snake_id)
        if snake is None:
            return False
        snake.set_input(angle, boost)
        return True

    def alive_snakes(self) -> List[Snake]:
        return [snake for snake in self.snakes.values() if snake.alive]

    def update(self) -> List[ServerMessage]:
        """Run one simulation tick and return the kill notifications it produced."""

        self.tick += 1
        for snake in self.snakes.values():
            snake.update(self.food)
        collision.resolve_food_collisions(self.snakes.values(), self.food)
        return list(collision.resolve_body_collisions(self.snakes.values(), self.food))

    def step_round(self) -> List[ServerMessage]:
        """Advance the round clock by one second."""

        return self.rounds.step(self)

    def reset_round(self) -> None:
        """Start every player over and refill the food field for a new round."""

        for snake_id, snake in list(self.snakes.items()):
            self._spawn_snake(snake_id, snake.name)
        self.food.reset(constants.INITIAL_FOOD_COUNT)

    def snapshot(self) -> dict:
        """Return the full world state broadcast to observers every tick."""

        return {
            "players": [snake.to_snapshot() for snake in self.snakes.values()],
            "food": self.food.to_list(),
            **self.rounds.to_dict(),
            "currentPlayers": len(self.alive_snakes()),
        }

    def stats(self) -> dict:
        return {
            "players": len(self.snakes),
            "alive": len(self.alive_snakes()),
            "round": self.rounds.round_num,
            "timeLeft": self.rounds.round_time,
            "prizePool": self.rounds.prize_amount,
        }
