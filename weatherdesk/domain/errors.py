"""Domain-level error types for use-case and adapter mapping.

Each class is one branch of the failure taxonomy. Coordinators catch them at
their own boundary; only ``AuthenticationFailure`` and ``PersistenceFailure``
are ever turned into user-visible notifications.
"""

from __future__ import annotations

from .ports import UseCaseError


class AuthenticationFailure(UseCaseError):
    """Login was rejected or its response could not be turned into a session."""

    def __init__(self, message: str = "Login failed. Please try again.") -> None:
        super().__init__("AUTH_FAILED", message)


class AuthorizationMissing(UseCaseError):
    """An action that needs a session was attempted without one."""

    def __init__(self, message: str = "Not signed in.") -> None:
        super().__init__("AUTH_MISSING", message)


class TransientLookupFailure(UseCaseError):
    def __init__(self, message: str) -> None:
        super().__init__("SEARCH_FAILED", message)


class PersistenceFailure(UseCaseError):
    def __init__(self, message: str = "Error saving country. Please try again.") -> None:
        super().__init__("SAVE_FAILED", message)


class SyncFailure(UseCaseError):
    def __init__(self, message: str) -> None:
        super().__init__("SYNC_FAILED", message)


__all__ = [
    "AuthenticationFailure",
    "AuthorizationMissing",
    "PersistenceFailure",
    "SyncFailure",
    "TransientLookupFailure",
]
