from __future__ import annotations

from typing import Callable


class FakeTimer:
    def __init__(self, due: int, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by a fake millisecond clock."""

    def __init__(self) -> None:
        self.now = 0
        self.timers: list[FakeTimer] = []

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, ms: int) -> None:
        end = self.now + ms
        while True:
            due = [t for t in self.live if t.due <= end]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            self.now = timer.due
            timer.callback()
        self.now = end


class FixedRng:
    """Returns queued values from randrange, then falls back to 0."""

    def __init__(self, *values: int) -> None:
        self.values = list(values)

    def randrange(self, stop: int) -> int:
        return self.values.pop(0) if self.values else 0
