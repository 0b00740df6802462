from __future__ import annotations

import random
from typing import Iterable, Optional, Tuple

import pytest

from snakepit.food import FoodField
from snakepit.snake import Snake
from snakepit.utils import Vec2
from snakepit.world import World


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def food(rng: random.Random) -> FoodField:
    return FoodField(rng)


@pytest.fixture()
def world(rng: random.Random) -> World:
    return World(rng=rng)


def line(start: Tuple[float, float], step: Tuple[float, float], count: int) -> list[Vec2]:
    """Return ``count`` points starting at ``start`` spaced by ``step``."""

    return [Vec2(start[0] + step[0] * i, start[1] + step[1] * i) for i in range(count)]


def place_snake(
    world: World,
    name: str,
    segments: Iterable[Vec2],
    angle: float = 0.0,
    wallet: Optional[str] = None,
) -> Snake:
    snake = world.add_snake(name, wallet)
    snake.segments = list(segments)
    snake.angle = angle
    snake.target_angle = angle
    return snake
