"""Typed failures raised by the REST adapters.

Both services answer errors with a small JSON object such as
``{"statusCode": 401, "message": "Invalid credentials", "error": "Unauthorized"}``
where ``message`` may also be a list of validation strings. The helpers at
the bottom read that shape; anything else is reduced to a short text snippet.
Use cases translate these exceptions through
``weatherdesk.usecases.error_mapping.map_api_error``.
"""

from __future__ import annotations

from typing import Any, Optional

_SNIPPET_LIMIT = 200


class ApiError(RuntimeError):
    """Base class for REST adapter failures.

    Attributes:
        status: HTTP status when a response was received.
        code: Machine-readable error name from the body (``error``).
        hint: Human-readable detail from the body (``message``).
        payload: Decoded error body or a text snippet.
        context: Adapter call label such as ``search[Fra]``.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx: rejected credentials, missing token, bad request."""


class ApiServerError(ApiError):
    """HTTP 5xx from the user or country service."""


class ApiTimeoutError(ApiError):
    """No response: timeout, refused connection, DNS failure."""


class ApiPayloadError(ApiError):
    """2xx response whose body does not have the expected shape.

    Covers ``{"success": false}`` envelopes from the weather listing as well as
    bodies that are not JSON at all.
    """


def error_body(resp: Any) -> Any:
    """Decoded JSON error body, else a text snippet, else ``None``."""
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:_SNIPPET_LIMIT] or None


def error_code(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    value = body.get("error")
    if value is None:
        value = body.get("code")
    return None if value is None else str(value)


def error_hint(body: Any) -> Optional[str]:
    """Detail text for the user-facing error message."""
    if isinstance(body, dict):
        return _join_text(body.get("message"))
    return _join_text(body)


def describe_error(ctx: str, status: int, body: Any) -> str:
    hint = error_hint(body)
    if hint:
        return f"{ctx}: {hint} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def _join_text(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        parts = [part for part in (_join_text(item) for item in value) if part]
        text = "; ".join(parts)
    elif value is None or isinstance(value, dict):
        return None
    else:
        text = str(value).strip()
    return text[:_SNIPPET_LIMIT] or None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiPayloadError",
    "ApiServerError",
    "ApiTimeoutError",
    "describe_error",
    "error_body",
    "error_code",
    "error_hint",
]
