from __future__ import annotations

from dataclasses import dataclass
from typing import List

from weatherdesk.domain.entities import Country
from weatherdesk.domain.errors import TransientLookupFailure
from weatherdesk.domain.ports import CountryPort
from weatherdesk.usecases.error_mapping import map_api_error


@dataclass
class SearchCountries:
    """Use-case callable returning country candidates for a query."""

    country_port: CountryPort

    def __call__(self, query: str) -> List[Country]:
        """Look up countries whose name matches ``query``.

        Returns:
            Candidates in server-provided order.

        Raises:
            TransientLookupFailure: On any transport or payload failure.
        """
        try:
            payload = self.country_port.search(query)
            return [Country.from_payload(entry) for entry in payload]
        except Exception as exc:
            mapped = map_api_error(exc, default_code="SEARCH_FAILED")
            raise TransientLookupFailure(mapped.message) from exc


__all__ = ["SearchCountries"]
