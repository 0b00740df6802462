"""The food field: every pellet currently lying in the world."""

from __future__ import annotations

import random
from typing import Dict, Iterator, List, Optional

from . import constants, utils
from .pellet import Pellet


class FoodField:
    """Unordered collection of pellets keyed by pellet id."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._pellets: Dict[int, Pellet] = {}

    def __len__(self) -> int:
        return len(self._pellets)

    def __iter__(self) -> Iterator[Pellet]:
        # Iterate over a copy so callers may consume while looping.
        return iter(list(self._pellets.values()))

    def __contains__(self, pellet: object) -> bool:
        return isinstance(pellet, Pellet) and pellet.id in self._pellets

    def spawn(self, count: int = 1) -> List[Pellet]:
        """Scatter ``count`` random pellets across the world."""

        spawned = []
        for _ in range(count):
            pellet = Pellet.spawn_random(self._rng)
            self._pellets[pellet.id] = pellet
            spawned.append(pellet)
        return spawned

    def drop(self, position: utils.Vec2, radius: float, color: str) -> Pellet:
        """Place a single pellet at ``position``."""

        pellet = Pellet.from_position(position, radius, color)
        self._pellets[pellet.id] = pellet
        return pellet

    def consume(self, pellet: Pellet) -> bool:
        """Remove ``pellet``. Returns ``False`` if it was already gone."""

        return self._pellets.pop(pellet.id, None) is not None

    def reset(self, count: int = constants.INITIAL_FOOD_COUNT) -> None:
        """Clear the field and scatter a fresh batch of ``count`` pellets."""

        self._pellets.clear()
        self.spawn(count)

    def to_list(self) -> List[dict]:
        return [pellet.to_dict() for pellet in self._pellets.values()]
