"""Use case for exchanging email/password for a session token and user id.

The user service answers ``{"token": {"accessToken": ...}}``. The user id is
taken from the response body when the service includes it, otherwise from
the access token's JWT claims (decoded without verification; the client only
needs the id to query its own list).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from jose import JWTError, jwt

from weatherdesk.domain.entities import Session
from weatherdesk.domain.errors import AuthenticationFailure
from weatherdesk.domain.ports import AuthPort, PasswordCipher
from weatherdesk.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

_BODY_USER_ID_PATHS = (
    ("user", "id"),
    ("userId",),
    ("user_id",),
    ("id",),
    ("token", "userId"),
)
_CLAIM_USER_ID_KEYS = ("userId", "user_id", "id", "sub")


@dataclass
class LoginUser:
    """Use-case callable producing a :class:`Session` for valid credentials."""

    auth_port: AuthPort
    cipher: PasswordCipher

    def __call__(self, email: str, password: str) -> Session:
        """Encrypt the password, log in, and build the session.

        Raises:
            AuthenticationFailure: For rejected credentials, transport errors,
                or a response without a token or user id. The message stays
                generic; details are logged only.
        """
        email_text = str(email or "").strip()
        if not email_text or not password:
            raise AuthenticationFailure()
        try:
            payload = self.auth_port.login(email_text, self.cipher.encrypt(password))
        except Exception as exc:
            mapped = map_api_error(exc, default_code="AUTH_FAILED")
            LOGGER.warning("Login for %s failed: [%s] %s", email_text, mapped.code, mapped.message)
            raise AuthenticationFailure() from exc

        token = _extract_token(payload)
        if not token:
            LOGGER.warning("Login response for %s carried no access token", email_text)
            raise AuthenticationFailure()
        user_id = _user_id_from_body(payload)
        if user_id is None:
            user_id = _user_id_from_jwt(token)
        if user_id is None:
            LOGGER.warning("Login response for %s carried no user id", email_text)
            raise AuthenticationFailure()
        return Session(token=token, user_id=user_id)


def _extract_token(payload: Mapping[str, Any]) -> Optional[str]:
    token = payload.get("token")
    if isinstance(token, Mapping):
        token = token.get("accessToken")
    if isinstance(token, str) and token.strip():
        return token.strip()
    return None


def _as_user_id(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _user_id_from_body(payload: Mapping[str, Any]) -> Optional[int]:
    for path in _BODY_USER_ID_PATHS:
        node: Any = payload
        for key in path:
            node = node.get(key) if isinstance(node, Mapping) else None
        user_id = _as_user_id(node)
        if user_id is not None:
            return user_id
    return None


def _user_id_from_jwt(token: str) -> Optional[int]:
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        LOGGER.debug("Access token is not a decodable JWT")
        return None
    for key in _CLAIM_USER_ID_KEYS:
        user_id = _as_user_id(claims.get(key))
        if user_id is not None:
            return user_id
    return None


__all__ = ["LoginUser"]
