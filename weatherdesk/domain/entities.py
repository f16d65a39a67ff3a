"""Domain value objects shared by use cases, coordinators, and view models.

Payload parsing is tolerant of the field spellings used by the country
service (``lat``/``long``/``temperature``) as well as the long-form names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


def _first_present(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _as_float(value: Any, *, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be numeric, got {value!r}") from exc


@dataclass(frozen=True)
class Country:
    """Search candidate returned by the country lookup endpoint.

    Attributes:
        name: Display name, unique within one suggestion list.
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
    """

    name: str
    latitude: float
    longitude: float

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Country":
        """Build a country from one search result object."""
        if not isinstance(payload, Mapping):
            raise ValueError("Country payload must be an object.")
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValueError("Country payload is missing a name.")
        return cls(
            name=name,
            latitude=_as_float(_first_present(payload, "latitude", "lat"), field_name="latitude"),
            longitude=_as_float(
                _first_present(payload, "longitude", "long", "lng", "lon"),
                field_name="longitude",
            ),
        )

    def to_create_payload(self) -> dict:
        """Request body for ``POST /country/create``."""
        return {
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class SavedCountry:
    """Saved country with the server-side cached weather reading."""

    name: str
    latitude: float
    longitude: float
    temperature_celsius: float
    description: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SavedCountry":
        country = Country.from_payload(payload)
        temperature = _first_present(
            payload, "temperatureCelsius", "temperature_celsius", "temperature"
        )
        return cls(
            name=country.name,
            latitude=country.latitude,
            longitude=country.longitude,
            temperature_celsius=_as_float(temperature, field_name="temperature"),
            description=str(payload.get("description") or ""),
        )


@dataclass(frozen=True)
class Session:
    """Authenticated identity attached to authorized requests."""

    token: str
    user_id: int


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """Transient user feedback message.

    Attributes:
        message: Text shown to the user.
        severity: ``success`` or ``error``.
        expires_at: Clock reading after which the message is no longer shown.
    """

    message: str
    severity: Severity
    expires_at: Optional[float] = None


__all__ = ["Country", "Notification", "SavedCountry", "Session", "Severity"]
