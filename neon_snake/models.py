"""Data models."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .constants import DIRECTIONS, INITIAL_SPEED, OPPOSITES


class Point(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def offset(self) -> tuple[int, int]:
        return DIRECTIONS[self.value]

    @property
    def opposite(self) -> "Direction":
        return Direction(OPPOSITES[self.value])


class GameStatus(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameState:
    snake: tuple[Point, ...]  # head first
    food: Point
    direction: Direction
    last_applied_direction: Direction
    status: GameStatus = GameStatus.IDLE
    score: int = 0
    speed: int = INITIAL_SPEED
    high_score: int = 0

    @property
    def head(self) -> Point:
        return self.snake[0]

    @property
    def tail(self) -> Point:
        return self.snake[-1]


@dataclass(frozen=True)
class GameOver:
    """Result of a tick that ran into a wall or the snake's own body."""

    reason: str  # "wall" or "self"
    head: Point
