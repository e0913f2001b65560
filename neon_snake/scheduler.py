"""Cancellable one-shot timers for the tick loop."""

import asyncio
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Runs callbacks on an asyncio event loop via ``call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_ms / 1000, callback)
