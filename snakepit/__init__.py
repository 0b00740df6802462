"""Authoritative server for a multiplayer snake arena.

The package owns every snake, pellet and round timer, advances the world on
a fixed tick and tells connected clients what happened.
"""

__all__ = [
    "collision",
    "config",
    "constants",
    "food",
    "main",
    "messages",
    "payout",
    "pellet",
    "protocol",
    "rounds",
    "snake",
    "utils",
    "world",
]
