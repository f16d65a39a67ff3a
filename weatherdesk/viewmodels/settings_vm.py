from __future__ import annotations

import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping, Optional

from ..utils.logging import env_debug_enabled

ENV_OVERRIDES = {
    "user_api_base_url": "WEATHERDESK_USER_API_URL",
    "country_api_base_url": "WEATHERDESK_COUNTRY_API_URL",
    "request_timeout_s": "WEATHERDESK_REQUEST_TIMEOUT_S",
}
PASSWORD_KEY_ENV = "WEATHERDESK_PASSWORD_KEY"

_INT_FIELDS = {
    "request_timeout_s",
    "search_debounce_ms",
    "min_query_length",
    "sync_interval_ms",
    "notification_duration_ms",
}
_URL_FIELDS = {"user_api_base_url", "country_api_base_url"}


@dataclass
class SettingsConfig:
    """Typed runtime settings for the weather client."""

    user_api_base_url: str = "http://localhost:3000"
    country_api_base_url: str = "http://localhost:3001"
    request_timeout_s: int = 10
    search_debounce_ms: int = 500
    min_query_length: int = 3
    sync_interval_ms: int = 60_000
    notification_duration_ms: int = 6_000


class SettingsVM:
    """Keeps app settings state and validation, no I/O here.

    ``password_key`` is the pre-shared passphrase for login password
    encryption. It is never included in :meth:`to_dict`.
    """

    def __init__(self, *, config: Optional[SettingsConfig] = None, password_key: str = "") -> None:
        self.config = config or SettingsConfig()
        self.password_key: str = password_key
        self.debug_logging: bool = env_debug_enabled()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SettingsVM":
        """Build settings from defaults plus ``WEATHERDESK_*`` overrides."""
        env = os.environ if environ is None else environ
        vm = cls(password_key=str(env.get(PASSWORD_KEY_ENV) or ""))
        payload = {key: env[var] for key, var in ENV_OVERRIDES.items() if env.get(var)}
        if payload:
            vm.apply_dict(payload)
        return vm

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def user_api_base_url(self) -> str:
        return self.config.user_api_base_url

    @user_api_base_url.setter
    def user_api_base_url(self, value: str) -> None:
        self.config = replace(self.config, user_api_base_url=self._coerce_url("user_api_base_url", value))

    @property
    def country_api_base_url(self) -> str:
        return self.config.country_api_base_url

    @country_api_base_url.setter
    def country_api_base_url(self, value: str) -> None:
        self.config = replace(self.config, country_api_base_url=self._coerce_url("country_api_base_url", value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @property
    def search_debounce_ms(self) -> int:
        return self.config.search_debounce_ms

    @property
    def min_query_length(self) -> int:
        return self.config.min_query_length

    @property
    def sync_interval_ms(self) -> int:
        return self.config.sync_interval_ms

    @property
    def notification_duration_s(self) -> float:
        return self.config.notification_duration_ms / 1000.0

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        if not self.user_api_base_url or not self.country_api_base_url:
            return False
        if self.request_timeout_s <= 0 or self.sync_interval_ms <= 0:
            return False
        return True

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply a flat settings mapping to the view-model."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {*SettingsConfig.__annotations__.keys(), "debug_logging"}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates = {
            key: self._coerce_config_value(key, payload[key])
            for key in SettingsConfig.__annotations__.keys()
            if key in payload
        }
        if updates:
            self.config = replace(self.config, **updates)

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key in _URL_FIELDS:
            return self._coerce_url(key, raw)
        if key in _INT_FIELDS:
            return self._coerce_int(key, raw, allow_negative=False)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_url(name: str, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{name} must be a non-empty URL string.")
        return value.strip().rstrip("/")

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, allow_negative: bool = True) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except ValueError as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if not allow_negative and coerced < 0:
            raise ValueError(f"{name} must be non-negative.")
        return coerced


__all__ = ["ENV_OVERRIDES", "PASSWORD_KEY_ENV", "SettingsConfig", "SettingsVM"]
