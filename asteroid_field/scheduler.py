"""
Timer Scheduler
================
One-shot and periodic callbacks on a millisecond clock.

The clock only moves when ``advance`` is called, so the host loop feeds
it real elapsed time while tests can step it by hand. Timers run on the
same thread as the tick, between ticks.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional
import itertools
import logging


logger = logging.getLogger(__name__)


@dataclass
class ScheduledTask:
    """Handle for a scheduled callback. Doubles as its cancellation token."""
    due_ms: float
    callback: Callable[[], None]
    interval_ms: Optional[float] = None
    name: str = ''
    cancelled: bool = False
    fired: int = 0
    seq: int = field(default=0, compare=False)

    @property
    def repeating(self) -> bool:
        return self.interval_ms is not None

    @property
    def active(self) -> bool:
        """Still going to fire at some point."""
        if self.cancelled:
            return False
        return self.repeating or self.fired == 0

    def cancel(self) -> None:
        if not self.cancelled:
            logger.debug('cancelled timer %s', self.name or self.seq)
        self.cancelled = True


class Scheduler:
    """Millisecond timer queue."""

    def __init__(self, now_ms: float = 0.0):
        self.now_ms = now_ms
        self._tasks: List[ScheduledTask] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None],
                   name: str = '') -> ScheduledTask:
        """Run callback once, ``delay_ms`` from now."""
        if delay_ms < 0:
            raise ValueError(f'delay must not be negative, got {delay_ms}')
        return self._push(ScheduledTask(
            due_ms=self.now_ms + delay_ms, callback=callback, name=name
        ))

    def call_every(self, interval_ms: float, callback: Callable[[], None],
                   name: str = '') -> ScheduledTask:
        """Run callback every ``interval_ms``, first run one interval from now."""
        if interval_ms <= 0:
            raise ValueError(f'interval must be positive, got {interval_ms}')
        return self._push(ScheduledTask(
            due_ms=self.now_ms + interval_ms, callback=callback,
            interval_ms=interval_ms, name=name
        ))

    def _push(self, task: ScheduledTask) -> ScheduledTask:
        task.seq = next(self._seq)
        self._tasks.append(task)
        return task

    def advance(self, elapsed_ms: float) -> int:
        """
        Move the clock forward and fire everything that came due.

        Tasks fire in due-time order (ties in scheduling order). The
        clock is set to each task's due time while its callback runs,
        so timers scheduled from a callback are measured from the
        moment it was due. A periodic task fires at most once per call,
        so a stalled host does not get a burst of catch-up runs. Returns
        the number of callbacks fired.
        """
        if elapsed_ms < 0:
            raise ValueError(f'cannot move the clock backwards ({elapsed_ms})')

        target = self.now_ms + elapsed_ms
        fired = 0

        while True:
            due = [t for t in self._tasks if not t.cancelled and t.due_ms <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.due_ms, t.seq))

            self.now_ms = max(self.now_ms, task.due_ms)
            if task.repeating:
                # Periods missed during a long gap collapse into this run
                task.due_ms += task.interval_ms
                while task.due_ms <= target:
                    task.due_ms += task.interval_ms
            else:
                self._tasks.remove(task)

            task.fired += 1
            fired += 1
            task.callback()

        self.now_ms = target
        self._tasks = [t for t in self._tasks if not t.cancelled]
        return fired
