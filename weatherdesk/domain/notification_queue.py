"""Single-slot queue for transient success/error messages.

State is either empty or one visible :class:`Notification` with an expiry
timestamp taken from the injected clock. Expiry is evaluated lazily whenever
the queue is read, so a UI refresh timer that calls :meth:`poll` is enough to
drive the auto-dismiss.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from .entities import Notification, Severity

DEFAULT_DURATION_S = 6.0
IGNORED_DISMISS_REASONS = frozenset({"clickaway"})


class NotificationQueue:
    """Hold at most one visible notification; a new one replaces the old."""

    def __init__(
        self,
        *,
        duration_s: float = DEFAULT_DURATION_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Create an empty queue.

        Args:
            duration_s: Display time before a notification clears itself.
            clock: Monotonic time source in seconds.
        """
        self.duration_s = float(duration_s)
        self._clock = clock
        self._current: Optional[Notification] = None

    def show(self, message: str, severity: Severity | str) -> Notification:
        notification = Notification(
            message=str(message),
            severity=Severity(severity),
            expires_at=self._clock() + self.duration_s,
        )
        self._current = notification
        return notification

    def success(self, message: str) -> Notification:
        return self.show(message, Severity.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.show(message, Severity.ERROR)

    def dismiss(self, reason: Optional[str] = None) -> bool:
        """Clear the visible notification on explicit close.

        Args:
            reason: Origin of the dismissal; inert interactions such as
                ``"clickaway"`` are ignored.

        Returns:
            ``True`` when a notification was cleared.
        """
        if reason in IGNORED_DISMISS_REASONS:
            return False
        had_message = self._current is not None
        self._current = None
        return had_message

    def poll(self) -> Optional[Notification]:
        """Drop the notification once expired and return what is visible."""
        current = self._current
        if current is None:
            return None
        if current.expires_at is not None and self._clock() >= current.expires_at:
            self._current = None
            return None
        return current

    def current(self) -> Optional[Notification]:
        return self.poll()


__all__ = ["DEFAULT_DURATION_S", "NotificationQueue"]
