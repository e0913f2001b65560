"""Turn legality."""

import logging
from typing import Optional

from .models import Direction

logger = logging.getLogger(__name__)


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b


def request_turn(requested: Direction, last_applied: Direction, buffered: Direction) -> Direction:
    """Return the direction to buffer after a turn request.

    Reversals are judged against the direction the last tick actually moved
    in, so several requests between two ticks can never fold the snake back
    onto its neck.
    """
    if is_opposite(requested, last_applied):
        logger.debug("Dropped reversal %s (last applied %s)", requested.value, last_applied.value)
        return buffered
    return requested


def parse_direction(raw) -> Optional[Direction]:
    if isinstance(raw, Direction):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return Direction(raw.strip().lower())
    except ValueError:
        return None
