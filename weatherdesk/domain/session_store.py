"""Holder for the authenticated session shared by the weather view.

The store is passed explicitly to every collaborator that needs a token or
user id. Readers call :meth:`SessionStore.current` (or ``require``) on every
operation; nothing downstream caches an authorization decision.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .entities import Session
from .errors import AuthorizationMissing

SessionListener = Callable[[Optional[Session]], None]

LOGGER = logging.getLogger(__name__)


class SessionStore:
    """Single ``Session`` slot written only by the login/logout boundary."""

    def __init__(self) -> None:
        self._session: Optional[Session] = None
        self._listeners: List[SessionListener] = []

    def login(self, token: str, user_id: int) -> Session:
        """Replace the current session with ``(token, user_id)``.

        Raises:
            ValueError: If the token is blank or the user id is missing.
        """
        token_text = str(token or "").strip()
        if not token_text:
            raise ValueError("Session token must be non-empty.")
        if user_id is None:
            raise ValueError("Session user id is required.")
        # Both fields land in one immutable object, so readers never observe half a session.
        self._session = Session(token=token_text, user_id=int(user_id))
        LOGGER.info("Session started for user %s", self._session.user_id)
        self._notify()
        return self._session

    def logout(self) -> None:
        if self._session is None:
            return
        LOGGER.info("Session ended for user %s", self._session.user_id)
        self._session = None
        self._notify()

    def current(self) -> Optional[Session]:
        """Return the active session, or ``None`` when unauthenticated."""
        return self._session

    def require(self) -> Session:
        """Return the active session or raise ``AuthorizationMissing``."""
        session = self._session
        if session is None:
            raise AuthorizationMissing()
        return session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def subscribe(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)


__all__ = ["SessionListener", "SessionStore"]
