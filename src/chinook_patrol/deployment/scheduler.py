"""
Single-threaded tick scheduler.

Models the host's "next tick" facility: callbacks queued during a tick run
at the start of the following one, after the current tick's entity setup
has finished. Nothing blocks and nothing runs concurrently.
"""

import logging
from collections import deque
from typing import Callable, Deque

logger = logging.getLogger(__name__)


class TickScheduler:
    """
    FIFO queue of one-shot deferred tasks.

    Example:
        >>> scheduler = TickScheduler()
        >>> scheduler.next_tick(lambda: print("attached"))
        >>> scheduler.run_tick()
        attached
        1
    """

    def __init__(self):
        self._pending: Deque[Callable[[], None]] = deque()
        self.tick_count: int = 0

    @property
    def pending(self) -> int:
        """Number of tasks waiting for the next tick."""
        return len(self._pending)

    def next_tick(self, callback: Callable[[], None]) -> None:
        """Queue a callback to run once on the next tick."""
        self._pending.append(callback)

    def run_tick(self) -> int:
        """
        Run every task queued before this call.

        Tasks queued while the tick runs wait for the following tick. A task
        that raises is logged and does not stop the remaining tasks.

        Returns:
            Number of tasks executed
        """
        self.tick_count += 1
        batch = list(self._pending)
        self._pending.clear()

        for callback in batch:
            try:
                callback()
            except Exception as e:
                logger.error(f"Tick {self.tick_count}: deferred task failed: {e}", exc_info=True)

        return len(batch)
