from __future__ import annotations

import logging
from typing import Callable

from weatherdesk.app.task_runner import TaskRunner
from weatherdesk.domain.entities import Session
from weatherdesk.domain.errors import AuthenticationFailure
from weatherdesk.domain.notification_queue import NotificationQueue
from weatherdesk.domain.session_store import SessionStore

LOGGER = logging.getLogger(__name__)

LoginFn = Callable[[str, str], Session]


class LoginVM:
    """Login form state; the only writer of a new session.

    Views react to sign-in through ``SessionStore.subscribe``.
    """

    def __init__(
        self,
        *,
        login: LoginFn,
        session_store: SessionStore,
        notifications: NotificationQueue,
        runner: TaskRunner,
    ) -> None:
        self._login = login
        self._session_store = session_store
        self._notifications = notifications
        self._runner = runner
        self.email: str = ""
        self.password: str = ""
        self.busy: bool = False

    def submit(self) -> bool:
        """Send the credentials; returns ``False`` while a login is in flight."""
        if self.busy:
            return False
        self.busy = True
        email, password = self.email, self.password
        self._runner.run(lambda: self._login(email, password), self._succeeded, self._failed)
        return True

    def _succeeded(self, session: Session) -> None:
        self.busy = False
        self.password = ""
        self._session_store.login(session.token, session.user_id)

    def _failed(self, exc: Exception) -> None:
        self.busy = False
        LOGGER.warning("Login failed: %s", exc)
        # Same text for every cause so nothing about the account leaks.
        self._notifications.error(AuthenticationFailure().message)


__all__ = ["LoginVM"]
