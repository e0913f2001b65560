"""Per-tick movement, collisions and food consumption."""

import dataclasses
import random
from typing import Union

from .geometry import is_in_bounds, random_free_cell, step
from .models import GameOver, GameState
from .scoring import award_food, ramp_speed


def advance(state: GameState, rng=random) -> Union[GameState, GameOver]:
    applied = state.direction
    new_head = step(state.head, applied)

    if not is_in_bounds(new_head):
        return GameOver(reason="wall", head=new_head)

    # The tail leaves its cell this tick, so only the rest of the body blocks.
    # Growth moves get the same exemption.
    if new_head in state.snake[:-1]:
        return GameOver(reason="self", head=new_head)

    if new_head == state.food:
        snake = (new_head,) + state.snake
        return dataclasses.replace(
            state,
            snake=snake,
            last_applied_direction=applied,
            score=award_food(state.score),
            speed=ramp_speed(state.speed),
            food=random_free_cell(snake, rng),
        )

    return dataclasses.replace(
        state,
        snake=(new_head,) + state.snake[:-1],
        last_applied_direction=applied,
    )


def is_growth(before: GameState, after: GameState) -> bool:
    return len(after.snake) > len(before.snake)
