from __future__ import annotations

import math

from snakepit import constants
from snakepit.collision import resolve_body_collisions, resolve_food_collisions
from snakepit.messages import KillNotice
from snakepit.utils import Vec2
from snakepit.world import World

from conftest import line, place_snake


def test_eating_grows_scores_and_replaces_the_pellet(world: World) -> None:
    world.food.reset(0)
    snake = place_snake(world, "Eater", line((500.0, 500.0), (-10.0, 0.0), 10))
    pellet = world.food.drop(Vec2(510.0, 500.0), 6.0, constants.DEFAULT_COLOR)

    eaten = resolve_food_collisions(world.snakes.values(), world.food)

    assert eaten == 1
    assert pellet not in world.food
    assert len(world.food) == 1
    assert snake.length == 10 + math.ceil(6.0 / 2)
    assert snake.score == math.ceil(6.0)


def test_pellets_out_of_reach_are_left_alone(world: World) -> None:
    world.food.reset(0)
    snake = place_snake(world, "Eater", line((500.0, 500.0), (-10.0, 0.0), 10))
    # Reach is 15 + radius; 22 units away from the head with radius 6 is too far.
    pellet = world.food.drop(Vec2(522.0, 500.0), 6.0, constants.DEFAULT_COLOR)

    assert resolve_food_collisions(world.snakes.values(), world.food) == 0
    assert pellet in world.food
    assert snake.length == 10


def test_a_snake_can_eat_several_pellets_in_one_tick(world: World) -> None:
    world.food.reset(0)
    snake = place_snake(world, "Eater", line((500.0, 500.0), (-10.0, 0.0), 10))
    for offset in (-5.0, 0.0, 5.0):
        world.food.drop(Vec2(500.0 + offset, 505.0), 4.0, constants.DEFAULT_COLOR)

    assert resolve_food_collisions(world.snakes.values(), world.food) == 3
    assert len(world.food) == 3
    assert snake.length == 10 + 3 * 2
    assert snake.score == 3 * 4


def test_dead_snakes_do_not_eat(world: World) -> None:
    world.food.reset(0)
    snake = place_snake(world, "Ghost", line((500.0, 500.0), (-10.0, 0.0), 10))
    snake.alive = False
    world.food.drop(Vec2(500.0, 500.0), 6.0, constants.DEFAULT_COLOR)

    assert resolve_food_collisions(world.snakes.values(), world.food) == 0


def _cross(world: World, lethal_index: int):
    """Put the victim's head 10 units from segment ``lethal_index`` of the other snake."""

    victim = place_snake(world, "Victim", line((1000.0, 1000.0), (0.0, -30.0), 10), angle=math.pi / 2)
    other = place_snake(
        world,
        "Other",
        line((1000.0 - 30.0 * lethal_index, 1010.0), (30.0, 0.0), 12),
        angle=math.pi,
    )
    return victim, other


def test_touching_the_other_snakes_neck_is_harmless(world: World) -> None:
    victim, other = _cross(world, lethal_index=4)

    kills = resolve_body_collisions(world.snakes.values(), world.food)

    assert kills == []
    assert victim.alive and other.alive


def test_touching_the_other_snakes_body_kills(world: World) -> None:
    victim, other = _cross(world, lethal_index=6)

    kills = resolve_body_collisions(world.snakes.values(), world.food)

    assert kills == [KillNotice(killer="Other", killer_id=other.id, victim="Victim", victim_id=victim.id)]
    assert not victim.alive
    assert other.alive
    assert other.score == 10 * constants.KILL_SCORE_MULTIPLIER
    assert other.length == 12 + 10 // constants.KILL_GROWTH_DIVISOR


def test_a_victim_dies_once_and_credits_one_killer(world: World) -> None:
    victim = place_snake(world, "Victim", line((1000.0, 1000.0), (0.0, -30.0), 10))
    first = place_snake(world, "First", line((820.0, 1010.0), (30.0, 0.0), 12))
    second = place_snake(world, "Second", line((820.0, 990.0), (30.0, 0.0), 12))

    kills = resolve_body_collisions(world.snakes.values(), world.food)

    assert [kill.killer for kill in kills] == ["First"]
    assert first.score > 0
    assert second.score == 0
    assert second.length == 12


def test_dead_snakes_are_harmless(world: World) -> None:
    victim, other = _cross(world, lethal_index=6)
    other.alive = False

    assert resolve_body_collisions(world.snakes.values(), world.food) == []
    assert victim.alive
