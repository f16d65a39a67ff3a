"""Translate adapter errors into UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from weatherdesk.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiPayloadError,
    ApiServerError,
    ApiTimeoutError,
    error_hint,
)
from weatherdesk.domain.ports import UseCaseError

# 4xx statuses with a dedicated code; other client errors become REQUEST_FAILED.
_CLIENT_STATUS_CODES = {
    401: ("AUTH_REJECTED", "Not authorized"),
    403: ("AUTH_REJECTED", "Not authorized"),
    404: ("NOT_FOUND", "Not found"),
}


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by an adapter or port implementation.
        default_code: Code used when ``exc`` is not an adapter error.
        default_message: Message used when ``exc`` carries no text.

    Returns:
        UseCaseError: ``exc`` itself when already a use-case error, otherwise a
        new error whose message is suitable for logs.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        return _map_client_error(exc)
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", f"Service error (HTTP {exc.status}), try again.")
    if isinstance(exc, ApiPayloadError):
        return UseCaseError("BAD_RESPONSE", str(exc))
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))
    return UseCaseError(default_code, default_message or str(exc) or "Unexpected error.")


def _map_client_error(exc: ApiClientError) -> UseCaseError:
    status = exc.status or 0
    if status in _CLIENT_STATUS_CODES:
        code, label = _CLIENT_STATUS_CODES[status]
    else:
        code = "REQUEST_FAILED"
        label = f"Request failed (HTTP {status})" if status else "Request failed"
    hint = (exc.hint or error_hint(exc.payload) or "").strip()
    return UseCaseError(code, f"{label}: {hint}" if hint else f"{label}.")


__all__ = ["map_api_error"]
