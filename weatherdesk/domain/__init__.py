"""Domain package exports for value objects and shared state holders."""

from .entities import Country, Notification, SavedCountry, Session, Severity
from .errors import (
    AuthenticationFailure,
    AuthorizationMissing,
    PersistenceFailure,
    SyncFailure,
    TransientLookupFailure,
)
from .notification_queue import NotificationQueue
from .ports import UseCaseError
from .session_store import SessionStore

__all__ = [
    "AuthenticationFailure",
    "AuthorizationMissing",
    "Country",
    "Notification",
    "NotificationQueue",
    "PersistenceFailure",
    "SavedCountry",
    "Session",
    "SessionStore",
    "Severity",
    "SyncFailure",
    "TransientLookupFailure",
    "UseCaseError",
]
