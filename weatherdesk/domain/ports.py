from __future__ import annotations
from typing import Any, Dict, List, Protocol

UserId = int


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class AuthPort(Protocol):
    """Credential exchange against the user service."""

    def login(self, email: str, encrypted_password: str) -> Dict[str, Any]: ...  # {"token": {"accessToken": ...}}


class CountryPort(Protocol):
    """Lookup, persistence, and weather listing against the country service."""

    def search(self, query: str) -> List[Dict[str, Any]]: ...
    def create(self, payload: Dict[str, Any], *, token: str) -> Any: ...
    def list_weather(self, user_id: UserId) -> List[Dict[str, Any]]: ...


class PasswordCipher(Protocol):
    """Client-side password encryption before transmission."""

    def encrypt(self, plaintext: str) -> str: ...
