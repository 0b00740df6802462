"""Gameplay constants shared across the server modules."""

WORLD_WIDTH: float = 4_000.0
WORLD_HEIGHT: float = 3_000.0
TICK_RATE: int = 60
ROUND_TIME: int = 300
MIN_PLAYERS: int = 8

INITIAL_FOOD_COUNT: int = 300
PELLET_MIN_RADIUS: float = 4.0
PELLET_MAX_RADIUS: float = 8.0
ACCENT_COLOR: str = "#14F195"
DEFAULT_COLOR: str = "#ffffff"
ACCENT_COLOR_CHANCE: float = 0.3

START_SEGMENTS: int = 10
SEGMENT_SPACING: float = 10.0
BASE_SPEED: float = 4.0
TURN_SMOOTHING: float = 0.12
BOOST_MULTIPLIER: float = 2.0
MIN_BOOST_SEGMENTS: int = 15
BOOST_DROP_CHANCE: float = 0.15
BOOST_PELLET_RADIUS: float = 4.0

DEATH_PELLET_CHANCE: float = 0.6
DEATH_PELLET_RADIUS: float = 5.0
DEATH_PELLET_JITTER: float = 20.0
DEATH_ACCENT_CHANCE: float = 0.5

EAT_DISTANCE: float = 15.0
KILL_DISTANCE: float = 18.0
SAFE_HEAD_SEGMENTS: int = 5
KILL_SCORE_MULTIPLIER: int = 10
KILL_GROWTH_DIVISOR: int = 3

DEFAULT_NAME: str = "Anonymous"
MAX_NAME_LENGTH: int = 16

PRIZE_AMOUNT: float = 0.1
PRIZE_CURRENCY: str = "SOL"
PAYOUT_INTERVAL: float = 10.0
MAX_PAYOUT_RETRIES: int = 3
