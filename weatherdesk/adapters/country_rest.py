from __future__ import annotations

from typing import Any, Dict, List, Optional

from weatherdesk.domain.ports import CountryPort, UserId

from .api_errors import ApiPayloadError
from .http_client import ApiSession, HttpConfig, ensure_ok, read_json


class CountryRestAdapter(CountryPort):
    """REST adapter for the country service (search, create, weather listing)."""

    def __init__(
        self,
        base_url: str,
        *,
        request_timeout_s: int = 10,
        retries: int = 0,
    ) -> None:
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = ApiSession(base_url, self.cfg)

    @property
    def base_url(self) -> str:
        return self.session.base_url

    def search(self, query: str) -> List[Dict[str, Any]]:
        ctx = f"search[{query}]"
        resp = self.session.get("/country/search", params={"q": query})
        ensure_ok(resp, ctx)
        data = read_json(resp, ctx)
        if not isinstance(data, list):
            raise ApiPayloadError(f"{ctx}: expected list response", payload=data, context=ctx)
        return [entry for entry in data if isinstance(entry, dict)]

    def create(self, payload: Dict[str, Any], *, token: str) -> Any:
        ctx = f"create[{payload.get('name')}]"
        resp = self.session.post("/country/create", json_body=dict(payload), bearer=token)
        ensure_ok(resp, ctx)
        # Acknowledgement bodies vary; an empty body is still a success.
        if not (getattr(resp, "text", "") or "").strip():
            return None
        return read_json(resp, ctx)

    def list_weather(self, user_id: UserId) -> List[Dict[str, Any]]:
        ctx = f"weather[user={user_id}]"
        resp = self.session.get("/country/weather", params={"userId": user_id})
        ensure_ok(resp, ctx)
        envelope = read_json(resp, ctx)
        return self._unwrap_envelope(envelope, ctx=ctx)

    @staticmethod
    def _unwrap_envelope(envelope: Any, *, ctx: str) -> List[Dict[str, Any]]:
        if not isinstance(envelope, dict):
            raise ApiPayloadError(f"{ctx}: expected object response", payload=envelope, context=ctx)
        if not envelope.get("success"):
            raise ApiPayloadError(f"{ctx}: service reported failure", payload=envelope, context=ctx)
        data: Optional[Any] = envelope.get("data")
        if not isinstance(data, list):
            raise ApiPayloadError(f"{ctx}: expected list in 'data'", payload=envelope, context=ctx)
        return [entry for entry in data if isinstance(entry, dict)]


__all__ = ["CountryRestAdapter"]
