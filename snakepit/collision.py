"""Collision helpers for the game server."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List

from . import constants, utils
from .food import FoodField
from .messages import KillNotice
from .snake import Snake

logger = logging.getLogger(__name__)


def _within(a: utils.Vec2, b: utils.Vec2, distance: float) -> bool:
    """Return ``True`` if ``a`` and ``b`` are strictly closer than ``distance``."""

    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy < distance * distance


def resolve_food_collisions(snakes: Iterable[Snake], food: FoodField) -> int:
    """Let every living snake eat the pellets under its head.

    Each eaten pellet is replaced immediately so the field keeps its size.
    Returns the number of pellets consumed.
    """

    eaten = 0
    for snake in snakes:
        if not snake.alive:
            continue
        for pellet in food:
            if not _within(pellet.position, snake.head, constants.EAT_DISTANCE + pellet.radius):
                continue
            snake.grow(math.ceil(pellet.radius / 2))
            snake.add_score(math.ceil(pellet.radius))
            food.consume(pellet)
            food.spawn(1)
            eaten += 1
    return eaten


def resolve_body_collisions(snakes: Iterable[Snake], food: FoodField) -> List[KillNotice]:
    """Kill every snake whose head touches another snake's body.

    The first ``SAFE_HEAD_SEGMENTS`` of the other snake never kill, so two
    heads brushing past each other are harmless. A victim dies at most once
    per tick and is credited to the first killer found in iteration order.
    """

    snakes = list(snakes)
    kills: List[KillNotice] = []
    for victim in snakes:
        if not victim.alive:
            continue
        for killer in snakes:
            if killer is victim or not killer.alive:
                continue
            segments = killer.segments[constants.SAFE_HEAD_SEGMENTS:]
            if not any(_within(segment, victim.head, constants.KILL_DISTANCE) for segment in segments):
                continue
            victim.die(food)
            killer.add_score(victim.length * constants.KILL_SCORE_MULTIPLIER)
            killer.grow(victim.length // constants.KILL_GROWTH_DIVISOR)
            logger.info("%s was killed by %s", victim.name, killer.name)
            kills.append(
                KillNotice(
                    killer=killer.name,
                    killer_id=killer.id,
                    victim=victim.name,
                    victim_id=victim.id,
                )
            )
            break
    return kills
