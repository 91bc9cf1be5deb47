"""
Trailing-edge debouncing on the asyncio event loop.

Every call to a ``Debounced`` wrapper cancels the pending one and schedules
``action`` again ``delay_ms`` after the latest call, with the latest
arguments. Nothing runs on the leading edge.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set

logger = logging.getLogger(__name__)


class Debounced:
    def __init__(self, action: Callable[..., Any], delay_ms: int):
        self.action = action
        self.delay = delay_ms / 1000
        self._handle: Optional[asyncio.TimerHandle] = None
        # Keep strong references so running actions are not garbage collected
        self._tasks: Set[asyncio.Task] = set()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        """Reschedule ``action``. Must be called from within the running loop."""
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay, self._fire, args, kwargs)

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def cancel_all(self) -> None:
        """Drop the pending call and cancel actions that are still running."""
        self.cancel()
        for task in list(self._tasks):
            task.cancel()

    def _fire(self, args, kwargs) -> None:
        self._handle = None
        result = self.action(*args, **kwargs)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("[DEBOUNCE] action failed", exc_info=task.exception())


def debounce(action: Callable[..., Any], delay_ms: int) -> Debounced:
    return Debounced(action, delay_ms)
