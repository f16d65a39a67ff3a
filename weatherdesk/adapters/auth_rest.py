from __future__ import annotations

from typing import Any, Dict

from weatherdesk.domain.ports import AuthPort

from .api_errors import ApiPayloadError
from .http_client import ApiSession, HttpConfig, ensure_ok, read_json


class AuthRestAdapter(AuthPort):
    """REST adapter for the user service login endpoint."""

    def __init__(self, base_url: str, *, request_timeout_s: int = 10) -> None:
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=0)
        self.session = ApiSession(base_url, self.cfg)

    @property
    def base_url(self) -> str:
        return self.session.base_url

    def login(self, email: str, encrypted_password: str) -> Dict[str, Any]:
        ctx = "login"
        resp = self.session.post(
            "/user/login",
            json_body={"email": email, "password": encrypted_password},
        )
        ensure_ok(resp, ctx)
        data = read_json(resp, ctx)
        if not isinstance(data, dict):
            raise ApiPayloadError(f"{ctx}: expected object response", payload=data, context=ctx)
        return data


__all__ = ["AuthRestAdapter"]
