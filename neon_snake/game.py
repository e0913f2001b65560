"""Game state machine and tick loop."""

import dataclasses
import logging
import random
from typing import Callable, Optional

from .constants import INITIAL_DIRECTION, INITIAL_SNAKE, INITIAL_SPEED, KEY_MAP, PAUSE_KEYS
from .directions import parse_direction, request_turn
from .engine import advance, is_growth
from .geometry import random_free_cell
from .models import Direction, GameOver, GameState, GameStatus, Point
from .scheduler import Scheduler, TimerHandle
from .scoring import record_high_score
from .store import KeyValueStore, load_high_score

logger = logging.getLogger(__name__)


def new_game_state(high_score: int = 0, status: GameStatus = GameStatus.IDLE, rng=random) -> GameState:
    snake = tuple(Point(x, y) for x, y in INITIAL_SNAKE)
    direction = Direction(INITIAL_DIRECTION)
    return GameState(
        snake=snake,
        food=random_free_cell(snake, rng),
        direction=direction,
        last_applied_direction=direction,
        status=status,
        score=0,
        speed=INITIAL_SPEED,
        high_score=high_score,
    )


def snapshot_dict(state: GameState) -> dict:
    return {
        "snake": [list(p) for p in state.snake],
        "food": list(state.food),
        "direction": state.direction.value,
        "status": state.status.value,
        "score": state.score,
        "high_score": state.high_score,
        "speed": state.speed,
    }


class GameController:
    """Owns the authoritative GameState and the single pending tick.

    Every handler returns the new state and notifies subscribers with it.
    """

    def __init__(self, scheduler: Scheduler, store: KeyValueStore, rng=random):
        self.scheduler = scheduler
        self.store = store
        self.rng = rng
        self._listeners: list[Callable[[GameState], None]] = []
        self._pending: Optional[TimerHandle] = None
        self._generation = 0
        self._state = new_game_state(high_score=load_high_score(store), rng=rng)
        self.last_game_over: Optional[GameOver] = None

    @property
    def state(self) -> GameState:
        return self._state

    def subscribe(self, listener: Callable[[GameState], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: GameState) -> GameState:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)
        return state

    # ── Scheduling ─────────────────────────────────────────────────

    def _cancel_pending(self):
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_tick(self):
        self._cancel_pending()
        generation = self._generation
        self._pending = self.scheduler.schedule_after(
            self._state.speed, lambda: self._on_timer(generation)
        )

    def _on_timer(self, generation: int):
        # A timer that was already queued when it got cancelled must not
        # touch the state of a later game.
        if generation != self._generation:
            return
        self._pending = None
        if self._state.status is not GameStatus.PLAYING:
            return
        self.tick()

    def stop(self):
        self._cancel_pending()

    # ── Transitions ────────────────────────────────────────────────

    def tick(self) -> GameState:
        before = self._state
        if before.status is not GameStatus.PLAYING:
            return before

        result = advance(before, self.rng)
        if isinstance(result, GameOver):
            self._cancel_pending()
            self.last_game_over = result
            logger.info(
                "Game over: %s collision at (%d, %d), score %d",
                result.reason, result.head.x, result.head.y, before.score,
            )
            return self._commit(dataclasses.replace(before, status=GameStatus.GAME_OVER))

        if is_growth(before, result):
            logger.debug("Food eaten, score %d, speed %d ms", result.score, result.speed)
            result = record_high_score(result, self.store)

        self._commit(result)
        self._schedule_tick()
        return result

    def handle_start(self) -> GameState:
        self._cancel_pending()
        self.last_game_over = None
        state = new_game_state(
            high_score=self._state.high_score, status=GameStatus.PLAYING, rng=self.rng
        )
        logger.info("Game started")
        self._commit(state)
        self._schedule_tick()
        return state

    def handle_pause_toggle(self) -> GameState:
        status = self._state.status
        if status is GameStatus.PLAYING:
            self._cancel_pending()
            logger.info("Game paused")
            return self._commit(dataclasses.replace(self._state, status=GameStatus.PAUSED))
        if status is GameStatus.PAUSED:
            logger.info("Game resumed")
            state = self._commit(dataclasses.replace(self._state, status=GameStatus.PLAYING))
            self._schedule_tick()
            return state
        return self._state

    def handle_direction_request(self, direction) -> GameState:
        requested = parse_direction(direction)
        state = self._state
        if requested is None:
            logger.debug("Ignoring unknown direction %r", direction)
            return state
        if state.status is GameStatus.GAME_OVER:
            return state

        buffered = request_turn(requested, state.last_applied_direction, state.direction)
        if state.status is GameStatus.IDLE:
            logger.info("Game started by directional input")
            state = self._commit(
                dataclasses.replace(state, direction=buffered, status=GameStatus.PLAYING)
            )
            self._schedule_tick()
            return state
        if buffered is state.direction:
            return state
        return self._commit(dataclasses.replace(state, direction=buffered))

    def handle_key(self, key: str) -> GameState:
        if key in KEY_MAP:
            return self.handle_direction_request(KEY_MAP[key])
        if key in PAUSE_KEYS:
            if self._state.status in (GameStatus.IDLE, GameStatus.GAME_OVER):
                return self.handle_start()
            return self.handle_pause_toggle()
        logger.debug("Ignoring unmapped key %r", key)
        return self._state
