from __future__ import annotations

import math

import pytest

from snakepit import constants
from snakepit.utils import Vec2, mask_wallet, shortest_angle_delta, wrap_world_position


@pytest.mark.parametrize(
    "point, expected",
    [
        (Vec2(constants.WORLD_WIDTH, 10.0), Vec2(0.0, 10.0)),
        (Vec2(-1.0, 10.0), Vec2(constants.WORLD_WIDTH - 1.0, 10.0)),
        (Vec2(10.0, constants.WORLD_HEIGHT + 2.5), Vec2(10.0, 2.5)),
        (Vec2(10.0, -0.5), Vec2(10.0, constants.WORLD_HEIGHT - 0.5)),
    ],
)
def test_wrap_moves_to_opposite_edge(point: Vec2, expected: Vec2) -> None:
    wrapped = wrap_world_position(point)
    assert wrapped.x == pytest.approx(expected.x)
    assert wrapped.y == pytest.approx(expected.y)


def test_wrap_never_returns_the_upper_bound() -> None:
    wrapped = wrap_world_position(Vec2(-1e-18, -1e-18))
    assert 0.0 <= wrapped.x < constants.WORLD_WIDTH
    assert 0.0 <= wrapped.y < constants.WORLD_HEIGHT


def test_shortest_angle_delta_takes_the_short_way_round() -> None:
    assert shortest_angle_delta(0.0, 1.0) == pytest.approx(1.0)
    assert shortest_angle_delta(3.0, -3.0) == pytest.approx(2 * math.pi - 6.0)
    assert shortest_angle_delta(-3.0, 3.0) == pytest.approx(6.0 - 2 * math.pi)
    assert -math.pi < shortest_angle_delta(0.0, -math.pi) <= math.pi


def test_mask_wallet() -> None:
    assert mask_wallet("ABCDEFGHIJKLMNOP") == "ABCD...MNOP"
    assert mask_wallet(None) == "no wallet"
