"""
Debounced scheduling for the live search.

Keystrokes arrive faster than it is useful to re-filter the catalog, so
each one re-arms a single timer on the running asyncio loop. Only the
last timer survives; earlier ones are cancelled, never queued. The
callback takes no arguments and is expected to read whatever state is
current when it fires.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional


logger = logging.getLogger(__name__)


class Debouncer:
    """Run ``callback`` once ``delay`` seconds after the last ``schedule()``.

    If the callback returns a coroutine it is wrapped in a task on the
    same loop, chained behind the task of the previous fire so replies
    never interleave. At most one fire is ever pending.
    """

    def __init__(self, delay: float, callback: Callable[[], Any]) -> None:
        self.delay = max(0.0, float(delay))
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def flush(self) -> None:
        """Wait for every task started by a fire so far."""
        if self._task is not None:
            await asyncio.shield(self._task)

    def close(self) -> None:
        """Drop the pending fire and cancel a callback still running."""
        self.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _fire(self) -> None:
        self._handle = None
        result = self._callback()
        if asyncio.iscoroutine(result):
            previous = self._task
            self._task = asyncio.ensure_future(self._after(previous, result))
            self._task.add_done_callback(self._log_failure)

    @staticmethod
    async def _after(previous: Optional["asyncio.Task"], coro: Any) -> Any:
        # Fires run one at a time, in the order they were triggered
        try:
            if previous is not None and not previous.done():
                await previous
        except asyncio.CancelledError:
            coro.close()
            raise
        except Exception:
            pass  # already logged by _log_failure
        return await coro

    @staticmethod
    def _log_failure(task: "asyncio.Task") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced callback failed: %s", exc)
