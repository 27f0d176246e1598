"""Single-threaded timer queue driving staged turn sequences.

Tasks are ordered by due time on a heap. The clock is virtual: it only moves
when ``advance`` or ``run_until_idle`` is called, which keeps turn sequences
deterministic under test. With ``realtime=True`` the scheduler sleeps until
each task is due before running it.
"""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(order=True)
class ScheduledTask:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    label: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class TurnScheduler:
    def __init__(self, realtime: bool = False) -> None:
        self.realtime = realtime
        self.now = 0.0
        self._queue: List[ScheduledTask] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None], label: str = "") -> ScheduledTask:
        task = ScheduledTask(
            due=self.now + max(0.0, delay),
            seq=next(self._counter),
            callback=callback,
            label=label or getattr(callback, "__name__", "task"),
        )
        heapq.heappush(self._queue, task)
        return task

    def call_soon(self, callback: Callable[[], None], label: str = "") -> ScheduledTask:
        return self.call_later(0.0, callback, label)

    @property
    def pending(self) -> int:
        return sum(1 for task in self._queue if not task.cancelled)

    def next_due(self) -> Optional[float]:
        self._discard_cancelled()
        return self._queue[0].due if self._queue else None

    def advance(self, seconds: float) -> int:
        """Run every task due within the next ``seconds``. Returns tasks run."""

        deadline = self.now + seconds
        ran = 0
        while True:
            due = self.next_due()
            if due is None or due > deadline:
                break
            self._run_next()
            ran += 1
        self._move_clock(deadline)
        return ran

    def run_until_idle(self, max_time: float = 3600.0) -> int:
        """Drain the queue, stopping once the clock passes ``max_time`` from now."""

        limit = self.now + max_time
        ran = 0
        while True:
            due = self.next_due()
            if due is None or due > limit:
                break
            self._run_next()
            ran += 1
        return ran

    def _run_next(self) -> None:
        task = heapq.heappop(self._queue)
        self._move_clock(task.due)
        try:
            task.callback()
        except Exception:
            LOGGER.exception("Scheduled task '%s' failed", task.label)

    def _move_clock(self, target: float) -> None:
        if target <= self.now:
            return
        if self.realtime:
            time.sleep(target - self.now)
        self.now = target

    def _discard_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)
