"""
Debounced autosave for inline description editing.

Edits restart a quiet-period timer; only the latest value is saved once the
user pauses. Cancelling drops the pending edit without saving.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_AUTOSAVE_DELAY = 0.5

_NOTHING = object()


class CancelableTimer:
    """One-shot timer on the running event loop."""

    def __init__(self, delay: float, callback: Callable[[], Any]):
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _fire(self) -> None:
        self._handle = None
        self.callback()

    def start(self) -> None:
        if self._handle is None:
            loop = asyncio.get_running_loop()
            self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def reset(self) -> None:
        self.cancel()
        self.start()


class DebouncedAutosave:
    """
    Coalesce rapid edits into a single save of the last value.

    Args:
        save: Coroutine function persisting a value
        delay: Quiet period in seconds before saving
    """

    def __init__(self, save: Callable[[Any], Awaitable[Any]], delay: float = DEFAULT_AUTOSAVE_DELAY):
        self.save = save
        self.delay = delay
        self.last_error: Optional[Exception] = None
        self.save_count = 0
        self._pending = _NOTHING
        self._task: Optional[asyncio.Task] = None
        self._timer = CancelableTimer(delay, self._on_timer)

    @classmethod
    def from_settings(cls, save: Callable[[Any], Awaitable[Any]], settings) -> "DebouncedAutosave":
        return cls(save, delay=settings.autosave_delay)

    @property
    def has_pending(self) -> bool:
        return self._pending is not _NOTHING

    @property
    def saving(self) -> bool:
        return self._task is not None and not self._task.done()

    def update(self, value: Any) -> None:
        self._pending = value
        self._timer.reset()

    def cancel(self) -> None:
        self._timer.cancel()
        self._pending = _NOTHING

    def _take_pending(self) -> Any:
        value, self._pending = self._pending, _NOTHING
        return value

    def _start_save(self) -> asyncio.Task:
        # Saves run one at a time, in the order the edits were made
        previous = self._task
        self._task = asyncio.ensure_future(self._run_save(self._take_pending(), previous))
        return self._task

    def _on_timer(self) -> None:
        if self.has_pending:
            self._start_save()

    async def _run_save(self, value: Any, previous: Optional[asyncio.Task] = None) -> None:
        if previous is not None and not previous.done():
            await previous
        try:
            await self.save(value)
        except Exception as e:
            self.last_error = e
            logger.error(f"Autosave failed: {e}")
        else:
            self.last_error = None
            self.save_count += 1

    async def flush(self) -> None:
        """Save the pending value now instead of waiting for the timer."""
        self._timer.cancel()
        await self.wait()
        if self.has_pending:
            await self._start_save()

    async def wait(self) -> None:
        if self._task is not None:
            await self._task
