"""Scheduler helper that owns the debounce and polling timers of a view.

The runtime passes UI ``schedule``/``cancel`` callables (NiceGUI one-shot
timers in the web UI, a manual clock in tests) into this
class so timer state is tracked in one place and canceled deterministically
when a view deactivates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict

ScheduleFn = Callable[[int, Callable[[], None]], Any]
CancelFn = Callable[[Any], None]

LOGGER = logging.getLogger(__name__)


@dataclass
class TimerHandle:
    """Timer token associated with a single timer channel.

    Attributes:
        key: Channel key such as ``search.debounce`` or ``sync.interval``.
        token: Token returned by the UI scheduler implementation.
        seq: Monotonic id used to ignore callbacks of superseded timers.
    """
    key: str
    token: Any
    seq: int


class TimerScheduler:
    """Keyed one-shot timers; scheduling a key replaces its pending timer."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn) -> None:
        """Store schedule/cancel functions and initialize handle registry.

        Args:
            schedule: ``schedule(delay_ms, callback)`` returning a token.
            cancel: ``cancel(token)`` for a token returned by ``schedule``.
        """
        self._schedule = schedule
        self._cancel = cancel
        self._handles: Dict[str, TimerHandle] = {}
        self._seq = 0

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule or reschedule the timer for ``key``.

        Args:
            key: Timer channel key.
            delay_ms: Delay in milliseconds before callback execution.
            callback: Function to execute once the delay elapses.
        """
        delay = max(0, int(delay_ms))
        self.cancel(key)
        self._seq += 1
        seq = self._seq

        def _fire() -> None:
            handle = self._handles.get(key)
            # A canceled or replaced timer may still fire if the backend could not
            # cancel it in time; only the registered one runs.
            if handle is None or handle.seq != seq:
                return
            del self._handles[key]
            callback()

        token = self._schedule(delay, _fire)
        self._handles[key] = TimerHandle(key=key, token=token, seq=seq)

    def cancel(self, key: str) -> None:
        handle = self._handles.pop(key, None)
        if not handle:
            return
        try:
            self._cancel(handle.token)
        except Exception:
            # The callback is already disarmed by removing the handle.
            LOGGER.debug("Backend cancel failed for timer %s", key, exc_info=True)

    def cancel_all(self) -> None:
        """Cancel all pending timers across all channel keys."""
        for key in list(self._handles.keys()):
            self.cancel(key)


__all__ = ["TimerHandle", "TimerScheduler"]
