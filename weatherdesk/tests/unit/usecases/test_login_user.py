from __future__ import annotations

from typing import Any, Dict, List

import pytest
from jose import jwt

from weatherdesk.adapters.api_errors import ApiClientError, ApiTimeoutError
from weatherdesk.domain.entities import Session
from weatherdesk.domain.errors import AuthenticationFailure
from weatherdesk.usecases.login_user import LoginUser


class _ReverseCipher:
    def encrypt(self, plaintext: str) -> str:
        return plaintext[::-1]


class _AuthPortStub:
    def __init__(self, response: Any) -> None:
        self._response = response
        self.calls: List[Dict[str, str]] = []

    def login(self, email: str, encrypted_password: str) -> Dict[str, Any]:
        self.calls.append({"email": email, "password": encrypted_password})
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def _jwt(claims: Dict[str, Any]) -> str:
    # Signed with a secret the client never sees; only the claims are read.
    return jwt.encode(claims, "server-side-secret", algorithm="HS256")


def test_login_encrypts_password_and_reads_user_id_from_body() -> None:
    port = _AuthPortStub({"token": {"accessToken": "tok-1"}, "user": {"id": 12}})

    session = LoginUser(port, _ReverseCipher())(" ada@example.com ", "secret")

    assert session == Session(token="tok-1", user_id=12)
    assert port.calls == [{"email": "ada@example.com", "password": "terces"}]


def test_login_falls_back_to_jwt_claims_for_user_id() -> None:
    token = _jwt({"userId": 31, "email": "ada@example.com"})
    port = _AuthPortStub({"token": {"accessToken": token}})

    session = LoginUser(port, _ReverseCipher())("ada@example.com", "secret")

    assert session.user_id == 31
    assert session.token == token


def test_login_uses_subject_claim_when_no_other_id() -> None:
    port = _AuthPortStub({"token": {"accessToken": _jwt({"sub": "8"})}})

    assert LoginUser(port, _ReverseCipher())("ada@example.com", "secret").user_id == 8


def test_login_without_user_id_fails() -> None:
    port = _AuthPortStub({"token": {"accessToken": "opaque-token"}})

    with pytest.raises(AuthenticationFailure):
        LoginUser(port, _ReverseCipher())("ada@example.com", "secret")


def test_login_without_token_fails() -> None:
    port = _AuthPortStub({"user": {"id": 3}})

    with pytest.raises(AuthenticationFailure):
        LoginUser(port, _ReverseCipher())("ada@example.com", "secret")


@pytest.mark.parametrize(
    "error",
    [
        ApiClientError("login: Invalid credentials (HTTP 401)", status=401),
        ApiTimeoutError("Timeout contacting http://users"),
    ],
)
def test_login_failures_surface_generic_message(error) -> None:
    port = _AuthPortStub(error)

    with pytest.raises(AuthenticationFailure) as excinfo:
        LoginUser(port, _ReverseCipher())("ada@example.com", "secret")

    assert excinfo.value.code == "AUTH_FAILED"
    assert excinfo.value.message == "Login failed. Please try again."


def test_blank_credentials_never_reach_the_service() -> None:
    port = _AuthPortStub({"token": {"accessToken": "tok"}, "userId": 1})

    with pytest.raises(AuthenticationFailure):
        LoginUser(port, _ReverseCipher())("", "secret")

    assert port.calls == []


def test_login_with_malformed_jwt_and_no_body_id_fails() -> None:
    port = _AuthPortStub({"token": {"accessToken": "not.a-valid.jwt"}})

    with pytest.raises(AuthenticationFailure):
        LoginUser(port, _ReverseCipher())("ada@example.com", "secret")
