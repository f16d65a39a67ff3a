from __future__ import annotations

from dataclasses import dataclass
from typing import List

from weatherdesk.domain.entities import SavedCountry
from weatherdesk.domain.errors import SyncFailure
from weatherdesk.domain.ports import CountryPort, UserId
from weatherdesk.usecases.error_mapping import map_api_error


@dataclass
class FetchSavedCountries:
    """Use-case callable returning the user's saved countries with weather."""

    country_port: CountryPort

    def __call__(self, user_id: UserId) -> List[SavedCountry]:
        try:
            payload = self.country_port.list_weather(user_id)
            return [SavedCountry.from_payload(entry) for entry in payload]
        except Exception as exc:
            mapped = map_api_error(exc, default_code="SYNC_FAILED")
            raise SyncFailure(mapped.message) from exc


__all__ = ["FetchSavedCountries"]
