from __future__ import annotations

import random

import pytest

from neon_snake.game import GameController
from neon_snake.store import MemoryStore

from helpers import ManualScheduler


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def controller(scheduler: ManualScheduler, store: MemoryStore) -> GameController:
    return GameController(scheduler, store, rng=random.Random(1234))
