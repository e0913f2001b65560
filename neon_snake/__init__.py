"""Neon Snake: tick logic for a grid snake arcade game."""

from .engine import advance
from .game import GameController, new_game_state, snapshot_dict
from .models import Direction, GameOver, GameState, GameStatus, Point

__all__ = [
    "Direction",
    "GameController",
    "GameOver",
    "GameState",
    "GameStatus",
    "Point",
    "advance",
    "new_game_state",
    "snapshot_dict",
]
