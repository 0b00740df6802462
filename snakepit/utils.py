"""Utility primitives used by the authoritative game server."""

from __future__ import annotations

from dataclasses import dataclass
import math
import random
from typing import Optional

from . import constants


@dataclass
class Vec2:
    """A light-weight two dimensional point used for snake segments and pellets.

    Only the handful of operations needed inside the hot tick loop are
    implemented: copying, addition, subtraction and scaling.
    """

    x: float
    y: float

    def copy(self) -> "Vec2":
        """Return a shallow copy of the vector."""

        return Vec2(self.x, self.y)

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


def heading(angle: float) -> Vec2:
    """Return the unit vector pointing along ``angle`` (radians)."""

    return Vec2(math.cos(angle), math.sin(angle))


def random_point_in_world(rng: Optional[random.Random] = None) -> Vec2:
    """Return a uniformly random point inside the world rectangle."""

    rng = rng or random
    return Vec2(rng.random() * constants.WORLD_WIDTH, rng.random() * constants.WORLD_HEIGHT)


def _wrap(value: float, limit: float) -> float:
    wrapped = value % limit
    # A tiny negative value can round up to exactly ``limit``.
    if wrapped >= limit:
        return 0.0
    return wrapped


def wrap_world_position(position: Vec2) -> Vec2:
    """Wrap ``position`` onto the torus ``[0, WIDTH) x [0, HEIGHT)``."""

    return Vec2(
        _wrap(position.x, constants.WORLD_WIDTH),
        _wrap(position.y, constants.WORLD_HEIGHT),
    )


def shortest_angle_delta(current: float, target: float) -> float:
    """Return the signed rotation from ``current`` to ``target`` in ``(-pi, pi]``."""

    delta = math.fmod(target - current, 2 * math.pi)
    if delta > math.pi:
        delta -= 2 * math.pi
    elif delta <= -math.pi:
        delta += 2 * math.pi
    return delta


def mask_wallet(wallet: Optional[str]) -> str:
    """Shorten a wallet address to ``abcd...wxyz`` for log output."""

    if not wallet:
        return "no wallet"
    if len(wallet) <= 8:
        return wallet
    return f"{wallet[:4]}...{wallet[-4:]}"
