"""Background refresh of the saved-countries-with-weather list.

On activation the list is fetched once immediately and the interval timer is
armed; every tick re-arms before fetching so the period does not drift with
request latency. Manual refreshes (after a save) run out-of-band and leave
the interval untouched.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from weatherdesk.domain.entities import SavedCountry
from weatherdesk.domain.ports import UserId
from weatherdesk.domain.session_store import SessionStore

from .task_runner import TaskRunner
from .timer_scheduler import TimerScheduler

LOGGER = logging.getLogger(__name__)

FetchFn = Callable[[UserId], List[SavedCountry]]

DEFAULT_SYNC_INTERVAL_MS = 60_000


class SyncScheduler:
    """Poll the saved list while the weather view is active."""

    TIMER_KEY = "sync.interval"

    def __init__(
        self,
        *,
        fetch: FetchFn,
        session_store: SessionStore,
        scheduler: TimerScheduler,
        runner: TaskRunner,
        on_result: Callable[[List[SavedCountry]], None],
        interval_ms: int = DEFAULT_SYNC_INTERVAL_MS,
    ) -> None:
        self._fetch = fetch
        self._session_store = session_store
        self._scheduler = scheduler
        self._runner = runner
        self._on_result = on_result
        self.interval_ms = int(interval_ms)
        self._active = False
        # Bumped on every activation change; responses from an older epoch are dropped.
        self._epoch = 0

    @property
    def active(self) -> bool:
        return self._active

    def activate(self) -> None:
        if self._active:
            return
        self._active = True
        self._epoch += 1
        self.refresh_now()
        self._arm()

    def deactivate(self) -> None:
        self._active = False
        self._epoch += 1
        self._scheduler.cancel(self.TIMER_KEY)

    def refresh_now(self) -> bool:
        """Fetch the saved list once, independent of the interval.

        Returns:
            ``True`` when a request was issued.
        """
        if not self._active:
            return False
        session = self._session_store.current()
        if session is None:
            LOGGER.info("Skipping saved-country refresh: not signed in")
            return False
        epoch = self._epoch
        user_id = session.user_id
        self._runner.run(
            lambda: self._fetch(user_id),
            lambda countries: self._deliver(epoch, countries),
            lambda exc: self._failed(epoch, exc),
        )
        return True

    def _arm(self) -> None:
        self._scheduler.schedule(self.TIMER_KEY, self.interval_ms, self._tick)

    def _tick(self) -> None:
        if not self._active:
            return
        self._arm()
        self.refresh_now()

    def _deliver(self, epoch: int, countries: List[SavedCountry]) -> None:
        if not self._active or epoch != self._epoch:
            LOGGER.debug("Discarding saved-country response from a previous activation")
            return
        self._on_result(list(countries))

    def _failed(self, epoch: int, exc: Exception) -> None:
        if not self._active or epoch != self._epoch:
            return
        # Keep whatever list is on screen.
        LOGGER.warning("Saved-country refresh failed: %s", exc)


__all__ = ["DEFAULT_SYNC_INTERVAL_MS", "SyncScheduler"]
