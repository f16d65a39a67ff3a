"""Use case for persisting a selected country to the user's list."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from weatherdesk.domain.entities import Country, Session
from weatherdesk.domain.errors import AuthorizationMissing, PersistenceFailure
from weatherdesk.domain.ports import CountryPort
from weatherdesk.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass
class SaveCountry:
    """Use-case callable for ``POST /country/create`` with a bearer token."""

    country_port: CountryPort

    def __call__(self, country: Country, session: Session | None) -> Country:
        if session is None or not session.token:
            raise AuthorizationMissing("Sign in before saving a country.")
        try:
            self.country_port.create(country.to_create_payload(), token=session.token)
        except Exception as exc:
            mapped = map_api_error(exc, default_code="SAVE_FAILED")
            LOGGER.warning("Saving %s failed: [%s] %s", country.name, mapped.code, mapped.message)
            raise PersistenceFailure() from exc
        return country


__all__ = ["SaveCountry"]
