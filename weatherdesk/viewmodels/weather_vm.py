"""View model behind the weather view.

Owns the search state and the saved list, composes the search controller,
save workflow, and sync scheduler, and exposes display rows plus the shared
notification for rendering.

Call context:
    ``weatherdesk.web_ui.runtime.WebRuntime`` builds one instance per browser
    client. It calls ``activate`` on sign-in and on reconnect, and
    ``deactivate`` on sign-out and disconnect. Everything stays inert until
    ``activate``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from weatherdesk.app.save_workflow import SaveFn, SaveWorkflow
from weatherdesk.app.search_controller import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_MIN_QUERY_LENGTH,
    SearchController,
    SearchFn,
    SearchState,
)
from weatherdesk.app.sync_scheduler import DEFAULT_SYNC_INTERVAL_MS, FetchFn, SyncScheduler
from weatherdesk.app.task_runner import TaskRunner
from weatherdesk.app.timer_scheduler import TimerScheduler
from weatherdesk.domain.entities import Country, Notification, SavedCountry
from weatherdesk.domain.errors import AuthorizationMissing
from weatherdesk.domain.notification_queue import NotificationQueue
from weatherdesk.domain.session_store import SessionStore

LOGGER = logging.getLogger(__name__)


@dataclass
class SavedCountryRow:
    """Display row for one saved country card."""
    name: str
    temperature: str
    description: str


def to_title_case(text: str) -> str:
    """Capitalize the first letter of every space-separated word."""
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))


def _format_temperature(value: float) -> str:
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}°C"


class WeatherVM:
    """Composition root for search, save, and saved-list refresh."""

    def __init__(
        self,
        *,
        session_store: SessionStore,
        notifications: NotificationQueue,
        search: SearchFn,
        save: SaveFn,
        fetch_saved: FetchFn,
        scheduler: TimerScheduler,
        runner: TaskRunner,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
        sync_interval_ms: int = DEFAULT_SYNC_INTERVAL_MS,
        on_changed: Optional[Callable[[], None]] = None,
        on_logged_out: Optional[Callable[[], None]] = None,
        on_auth_required: Optional[Callable[[AuthorizationMissing], None]] = None,
    ) -> None:
        self.session_store = session_store
        self.notifications = notifications
        self._scheduler = scheduler
        self.on_changed = on_changed or (lambda: None)
        self.on_logged_out = on_logged_out or (lambda: None)
        self.on_auth_required = on_auth_required or (lambda _exc: None)

        self.search_state = SearchState()
        self.saved_countries: List[SavedCountry] = []

        self.search = SearchController(
            state=self.search_state,
            search=search,
            scheduler=scheduler,
            runner=runner,
            debounce_ms=debounce_ms,
            min_query_length=min_query_length,
            on_change=self._changed,
        )
        self.sync = SyncScheduler(
            fetch=fetch_saved,
            session_store=session_store,
            scheduler=scheduler,
            runner=runner,
            on_result=self._apply_saved,
            interval_ms=sync_interval_ms,
        )
        self.save = SaveWorkflow(
            save=save,
            session_store=session_store,
            notifications=notifications,
            runner=runner,
            refresh=self.sync.refresh_now,
            clear_query=self.search.reset,
        )

    # ------------------------------------------------------------------
    # Rendering surface
    # ------------------------------------------------------------------
    @property
    def query(self) -> str:
        return self.search_state.query

    @property
    def suggestions(self) -> List[Country]:
        return list(self.search_state.suggestions)

    @property
    def loading(self) -> bool:
        return self.search_state.loading

    @property
    def active(self) -> bool:
        return self.sync.active

    def saved_rows(self) -> List[SavedCountryRow]:
        return [
            SavedCountryRow(
                name=country.name,
                temperature=_format_temperature(country.temperature_celsius),
                description=to_title_case(country.description),
            )
            for country in self.saved_countries
        ]

    def notification(self) -> Optional[Notification]:
        return self.notifications.poll()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def activate(self) -> None:
        """Start the view: immediate saved-list fetch plus the poll interval."""
        self.search.activate()
        self.save.activate()
        self.sync.activate()

    def deactivate(self) -> None:
        """Cancel pending lookups, the poll interval, and in-flight results."""
        self.search.deactivate()
        self.save.deactivate()
        self.sync.deactivate()
        self._scheduler.cancel_all()

    def set_query(self, text: Optional[str]) -> None:
        self.search.set_query(text)

    def select_suggestion(self, country: Country) -> bool:
        """Save ``country`` to the user's list.

        Returns:
            ``False`` when nothing was sent: the view is inactive, or no
            session is active, in which case ``on_auth_required`` is invoked.
        """
        try:
            return self.save.submit(country)
        except AuthorizationMissing as exc:
            LOGGER.warning("Cannot save %s: %s", country.name, exc.message)
            self.on_auth_required(exc)
            return False

    def dismiss_notification(self, reason: Optional[str] = None) -> None:
        if self.notifications.dismiss(reason):
            self._changed()

    def logout(self) -> None:
        """Tear the view down, clear the session, and return to login."""
        self.deactivate()
        self.session_store.logout()
        self.saved_countries = []
        self.search_state.query = ""
        self.search_state.suggestions = []
        self.on_logged_out()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _apply_saved(self, countries: List[SavedCountry]) -> None:
        self.saved_countries = countries
        self._changed()

    def _changed(self) -> None:
        self.on_changed()


__all__ = ["SavedCountryRow", "WeatherVM", "to_title_case"]
