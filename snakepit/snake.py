"""Snake entity implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
import math
import random
from typing import List, Optional

from . import constants, utils
from .food import FoodField


@dataclass
class Snake:
    """Authoritative representation of a snake controlled by a player.

    The body is a position history: ``segments[0]`` is the head and every
    tick the new head is pushed to the front while the last point is
    dropped. Growth appends copies of the tail which then trail naturally.
    """

    id: str
    name: str
    wallet: Optional[str] = None
    segments: List[utils.Vec2] = field(default_factory=list)
    angle: float = 0.0
    target_angle: float = 0.0
    speed: float = constants.BASE_SPEED
    alive: bool = True
    boosting: bool = False
    score: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @classmethod
    def spawn(
        cls,
        snake_id: str,
        name: str,
        wallet: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> "Snake":
        """Create a fresh snake at a random point with a random heading."""

        rng = rng or random.Random()
        angle = rng.random() * 2 * math.pi
        start = utils.random_point_in_world(rng)
        backwards = utils.heading(angle) * -constants.SEGMENT_SPACING
        segments = [
            utils.wrap_world_position(start + backwards * index)
            for index in range(constants.START_SEGMENTS)
        ]
        return cls(
            id=snake_id,
            name=name,
            wallet=wallet,
            segments=segments,
            angle=angle,
            target_angle=angle,
            rng=rng,
        )

    @property
    def head(self) -> utils.Vec2:
        return self.segments[0]

    @property
    def length(self) -> int:
        return len(self.segments)

    @property
    def can_boost(self) -> bool:
        """Boosting only takes effect on snakes long enough to pay for it."""

        return self.length > constants.MIN_BOOST_SEGMENTS

    def set_input(self, angle: Optional[float] = None, boost: Optional[bool] = None) -> None:
        """Update the desired heading and/or boost flag.

        Fields left as ``None`` keep their previous value.
        """

        if angle is not None:
            self.target_angle = angle
        if boost is not None:
            self.boosting = boost

    def update(self, food: FoodField) -> None:
        """Advance the snake by one tick, dropping boost pellets into ``food``."""

        if not self.alive:
            return

        delta = utils.shortest_angle_delta(self.angle, self.target_angle)
        self.angle += delta * constants.TURN_SMOOTHING

        speed = self.speed
        if self.boosting and self.can_boost:
            speed *= constants.BOOST_MULTIPLIER
            if self.rng.random() < constants.BOOST_DROP_CHANCE:
                tail = self.segments.pop()
                food.drop(tail, constants.BOOST_PELLET_RADIUS, constants.ACCENT_COLOR)

        new_head = utils.wrap_world_position(self.head + utils.heading(self.angle) * speed)
        self.segments.insert(0, new_head)
        self.segments.pop()

    def grow(self, amount: int = 1) -> None:
        """Append ``amount`` segments at the current tail position."""

        tail = self.segments[-1]
        for _ in range(amount):
            self.segments.append(tail.copy())

    def add_score(self, points: int) -> None:
        if points > 0:
            self.score += points

    def die(self, food: FoodField) -> None:
        """Mark the snake as dead and scatter part of its body as food."""

        self.alive = False
        jitter = constants.DEATH_PELLET_JITTER
        for segment in self.segments:
            if self.rng.random() >= constants.DEATH_PELLET_CHANCE:
                continue
            offset = utils.Vec2((self.rng.random() - 0.5) * jitter, (self.rng.random() - 0.5) * jitter)
            color = (
                constants.ACCENT_COLOR
                if self.rng.random() < constants.DEATH_ACCENT_CHANCE
                else constants.DEFAULT_COLOR
            )
            food.drop(segment + offset, constants.DEATH_PELLET_RADIUS, color)

    def to_snapshot(self) -> dict:
        """Return a snapshot representation for clients."""

        return {
            "id": self.id,
            "name": self.name,
            "segments": [point.to_dict() for point in self.segments],
            "angle": self.angle,
            "alive": self.alive,
            "length": self.length,
        }
