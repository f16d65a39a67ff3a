"""Create-then-refresh workflow for a selected country suggestion.

The selected country is never inserted into the displayed list directly; the
list changes only through the refresh that follows a confirmed create, so it
always mirrors the server.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from weatherdesk.domain.entities import Country, Session
from weatherdesk.domain.errors import PersistenceFailure
from weatherdesk.domain.notification_queue import NotificationQueue
from weatherdesk.domain.session_store import SessionStore

from .task_runner import TaskRunner

LOGGER = logging.getLogger(__name__)

SaveFn = Callable[[Country, Optional[Session]], Country]


def saved_message(country: Country) -> str:
    return f"Country {country.name} has been saved successfully."


class SaveWorkflow:
    """Persist a country, then notify, refresh, and clear the search field."""

    def __init__(
        self,
        *,
        save: SaveFn,
        session_store: SessionStore,
        notifications: NotificationQueue,
        runner: TaskRunner,
        refresh: Callable[[], object],
        clear_query: Callable[[], None],
    ) -> None:
        self._save = save
        self._session_store = session_store
        self._notifications = notifications
        self._runner = runner
        self._refresh = refresh
        self._clear_query = clear_query
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def submit(self, country: Country) -> bool:
        """Start saving ``country`` for the current session.

        Returns:
            ``False`` without sending anything while the workflow is inactive,
            since its result would be discarded.

        Raises:
            AuthorizationMissing: When no session is active. Raised before any
                request is made.
        """
        if not self._active:
            LOGGER.info("Ignoring save of %s: weather view is not active", country.name)
            return False
        session = self._session_store.require()
        LOGGER.info("Saving country %s for user %s", country.name, session.user_id)
        # Overlapping submits of the same country are sent as-is.
        self._runner.run(
            lambda: self._save(country, session),
            self._succeeded,
            lambda exc: self._failed(country, exc),
        )
        return True

    def activate(self) -> None:
        self._active = True

    def deactivate(self) -> None:
        self._active = False

    def _succeeded(self, country: Country) -> None:
        if not self._active:
            LOGGER.debug("Save of %s completed after teardown; ignoring", country.name)
            return
        self._notifications.success(saved_message(country))
        self._refresh()
        self._clear_query()

    def _failed(self, country: Country, exc: Exception) -> None:
        if not self._active:
            LOGGER.debug("Save of %s failed after teardown; ignoring", country.name)
            return
        LOGGER.error("Saving country %s failed: %s", country.name, exc)
        message = exc.message if isinstance(exc, PersistenceFailure) else PersistenceFailure().message
        self._notifications.error(message)


__all__ = ["SaveWorkflow", "saved_message"]
