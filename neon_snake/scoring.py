"""Score, speed ramp and high score bookkeeping."""

import dataclasses
import logging

from .constants import FOOD_REWARD, HIGH_SCORE_KEY, MIN_SPEED, SPEED_DECREMENT
from .models import GameState

logger = logging.getLogger(__name__)


def award_food(score: int) -> int:
    return score + FOOD_REWARD


def ramp_speed(speed: int) -> int:
    return max(MIN_SPEED, speed - SPEED_DECREMENT)


def record_high_score(state: GameState, store) -> GameState:
    """Raise and persist the high score when the current score beats it."""
    if state.score <= state.high_score:
        return state
    logger.info("New high score %d (was %d)", state.score, state.high_score)
    try:
        store.set(HIGH_SCORE_KEY, str(state.score))
    except OSError as exc:
        logger.warning("Could not persist high score %d: %s", state.score, exc)
    return dataclasses.replace(state, high_score=state.score)
