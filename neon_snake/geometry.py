"""Grid bounds and free-cell sampling."""

import random

from .constants import GRID_SIZE
from .models import Direction, Point


def is_in_bounds(p: Point) -> bool:
    return 0 <= p.x < GRID_SIZE and 0 <= p.y < GRID_SIZE


def step(p: Point, direction: Direction) -> Point:
    dx, dy = direction.offset
    return Point(p.x + dx, p.y + dy)


def random_free_cell(snake, rng=random) -> Point:
    """Pick a uniformly random cell that no snake segment occupies.

    Rejection sampling over the whole grid. Only loops forever if the snake
    fills every cell, which a game ends long before reaching.
    """
    occupied = set(snake)
    while True:
        cell = Point(rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE))
        if cell not in occupied:
            return cell
