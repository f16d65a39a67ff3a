"""Shared HTTP transport utilities for REST adapters.

This module provides a thin wrapper around ``requests.Session`` so adapter
implementations share timeout policy, bearer-header construction, and the
mapping of non-2xx responses to typed :mod:`weatherdesk.adapters.api_errors`.

Dependencies:
    - ``requests`` for network I/O.

Call context:
    - Constructed by ``AuthRestAdapter`` and ``CountryRestAdapter``.
    - Used only inside adapter methods; use cases interact through ports.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from weatherdesk.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiPayloadError,
    ApiServerError,
    ApiTimeoutError,
    describe_error,
    error_body,
    error_code,
    error_hint,
)

LOGGER = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for JSON API calls.
        retries: Extra attempts after the first one. Every user action is a
            single attempt, so this stays at ``0`` unless a caller opts in.
    """
    request_timeout_s: int = 10
    retries: int = 0


class ApiSession:
    """Requests wrapper that adds JSON/bearer headers and typed transport errors.

    This class is transport-only. Callers provide endpoint URLs and decide how
    response payloads map into domain objects.
    """

    def __init__(self, base_url: str, cfg: Optional[HttpConfig] = None) -> None:
        """Create a session bound to one service base URL.

        Args:
            base_url: Service root such as ``http://localhost:3001``.
            cfg: Shared timeout and retry settings.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        cleaned = str(base_url or "").strip()
        if not cleaned:
            raise ValueError("ApiSession requires a base URL")
        self.base_url = cleaned.rstrip("/")
        self.cfg = cfg or HttpConfig()
        self.session = requests.Session()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, *, bearer: Optional[str] = None, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        bearer: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a GET request.

        Raises:
            ApiTimeoutError: If every attempt fails with a timeout/connection error.
            ApiError: For any other ``requests`` failure.
        """
        url = self.url(path)
        return self._send(
            f"GET {url}",
            lambda: self.session.get(
                url,
                params=params,
                headers=self._headers(bearer=bearer),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def post(
        self,
        path: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        bearer: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a JSON POST request.

        Side Effects:
            Serializes ``json_body`` with ``json.dumps`` before sending.
        """
        url = self.url(path)
        data = None if json_body is None else json.dumps(json_body)
        return self._send(
            f"POST {url}",
            lambda: self.session.post(
                url,
                data=data,
                headers=self._headers(bearer=bearer, json_body=json_body is not None),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def _send(self, context: str, call) -> requests.Response:
        last_err: Optional[ApiError] = None
        for _ in range(self.cfg.retries + 1):
            try:
                return call()
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {self.base_url}", context=context)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
            LOGGER.debug("%s failed: %s", context, last_err)
        raise last_err


def ensure_ok(resp: requests.Response, ctx: str) -> None:
    """Raise a typed ``ApiError`` for any non-2xx response."""
    if 200 <= resp.status_code < 300:
        return
    status = resp.status_code
    payload = error_body(resp)
    message = describe_error(ctx, status, payload)
    if 400 <= status < 500:
        raise ApiClientError(
            message,
            status=status,
            code=error_code(payload),
            hint=error_hint(payload),
            payload=payload,
            context=ctx,
        )
    if 500 <= status < 600:
        raise ApiServerError(message, status=status, payload=payload, context=ctx)
    raise ApiError(message, status=status, payload=payload, context=ctx)


def read_json(resp: requests.Response, ctx: str) -> Any:
    """Decode a response body, raising ``ApiPayloadError`` for non-JSON text."""
    try:
        return resp.json()
    except ValueError as exc:
        snippet = (getattr(resp, "text", "") or "")[:400]
        raise ApiPayloadError(f"{ctx}: invalid JSON response: {snippet}", context=ctx) from exc


__all__ = ["ApiSession", "HttpConfig", "ensure_ok", "read_json"]
