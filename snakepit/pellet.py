"""Pellet entity definition."""

from __future__ import annotations

from dataclasses import dataclass
import itertools
import random
from typing import Optional

from . import constants, utils

_id_counter = itertools.count(1)


@dataclass(frozen=True)
class Pellet:
    """A food pellet that snakes can consume to grow."""

    id: int
    position: utils.Vec2
    radius: float
    color: str

    @classmethod
    def spawn_random(cls, rng: Optional[random.Random] = None) -> "Pellet":
        """Create a pellet at a random position with a random radius and color."""

        rng = rng or random
        radius = rng.uniform(constants.PELLET_MIN_RADIUS, constants.PELLET_MAX_RADIUS)
        if radius >= constants.PELLET_MAX_RADIUS:
            radius = constants.PELLET_MIN_RADIUS
        color = (
            constants.ACCENT_COLOR
            if rng.random() < constants.ACCENT_COLOR_CHANCE
            else constants.DEFAULT_COLOR
        )
        return cls(
            id=next(_id_counter),
            position=utils.random_point_in_world(rng),
            radius=radius,
            color=color,
        )

    @classmethod
    def from_position(cls, position: utils.Vec2, radius: float, color: str) -> "Pellet":
        """Create a pellet at a specific ``position``, wrapped into the world."""

        return cls(
            id=next(_id_counter),
            position=utils.wrap_world_position(position),
            radius=radius,
            color=color,
        )

    def to_dict(self) -> dict[str, float | int | str]:
        """Serialise the pellet to a JSON friendly dictionary."""

        return {
            "id": self.id,
            "x": self.position.x,
            "y": self.position.y,
            "radius": self.radius,
            "color": self.color,
        }
