"""Debounced, race-free country lookup behind the weather view's search box.

Call context:
    ``WeatherVM.set_query`` forwards every keystroke here. The controller
    mutates the ``SearchState`` owned by the view model and reports changes
    through ``on_change``.

Ordering:
    Each issued lookup gets a generation token. Any keystroke that changes the
    query, and any teardown, bumps the generation, so responses for older
    queries are discarded without touching ``suggestions`` or ``loading``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from weatherdesk.domain.entities import Country

from .task_runner import TaskRunner
from .timer_scheduler import TimerScheduler

LOGGER = logging.getLogger(__name__)

SearchFn = Callable[[str], List[Country]]

DEFAULT_DEBOUNCE_MS = 500
DEFAULT_MIN_QUERY_LENGTH = 3


@dataclass
class SearchState:
    """Search box state rendered by the weather view."""

    query: str = ""
    suggestions: List[Country] = field(default_factory=list)
    loading: bool = False


class SearchController:
    """Turn keystrokes into at most one lookup per quiet period."""

    TIMER_KEY = "search.debounce"

    def __init__(
        self,
        *,
        state: SearchState,
        search: SearchFn,
        scheduler: TimerScheduler,
        runner: TaskRunner,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.state = state
        self._search = search
        self._scheduler = scheduler
        self._runner = runner
        self.debounce_ms = int(debounce_ms)
        self.min_query_length = int(min_query_length)
        self._on_change = on_change or (lambda: None)
        self._generation = 0
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def set_query(self, text: Optional[str]) -> None:
        """Record a keystroke and (re)arm the debounce timer.

        Short queries clear the suggestions immediately and never reach the
        network.
        """
        if not self._active:
            return
        query = "" if text is None else str(text)
        if query == self.state.query:
            return
        self.state.query = query
        self._invalidate_pending()
        if len(query.strip()) < self.min_query_length:
            self.state.suggestions = []
        else:
            self._scheduler.schedule(self.TIMER_KEY, self.debounce_ms, lambda: self._issue(query))
        self._on_change()

    def reset(self) -> None:
        """Clear the query field and any suggestions."""
        self._invalidate_pending()
        self.state.query = ""
        self.state.suggestions = []
        self._on_change()

    def activate(self) -> None:
        self._active = True

    def deactivate(self) -> None:
        """Cancel the pending lookup and ignore any response still in flight."""
        self._active = False
        self._invalidate_pending()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _invalidate_pending(self) -> None:
        self._scheduler.cancel(self.TIMER_KEY)
        self._generation += 1
        self.state.loading = False

    def _issue(self, query: str) -> None:
        if not self._active or query != self.state.query:
            return
        self._generation += 1
        token = self._generation
        self.state.loading = True
        self._on_change()
        lookup = query.strip()
        LOGGER.debug("Searching countries for %r (generation %s)", lookup, token)
        self._runner.run(
            lambda: self._search(lookup),
            lambda countries: self._apply(token, countries),
            lambda exc: self._fail(token, lookup, exc),
        )

    def _is_current(self, token: int) -> bool:
        return self._active and token == self._generation

    def _apply(self, token: int, countries: List[Country]) -> None:
        if not self._is_current(token):
            LOGGER.debug("Discarding stale search response (generation %s)", token)
            return
        self.state.suggestions = list(countries)
        self.state.loading = False
        self._on_change()

    def _fail(self, token: int, query: str, exc: Exception) -> None:
        if not self._is_current(token):
            LOGGER.debug("Discarding stale search failure (generation %s)", token)
            return
        LOGGER.warning("Country search for %r failed: %s", query, exc)
        self.state.suggestions = []
        self.state.loading = False
        self._on_change()


__all__ = ["DEFAULT_DEBOUNCE_MS", "DEFAULT_MIN_QUERY_LENGTH", "SearchController", "SearchState"]
