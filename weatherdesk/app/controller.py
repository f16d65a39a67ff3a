"""Adapter and use-case wiring for the client runtime.

This module owns lazy construction of the concrete REST adapters and the
use-case objects that depend on values in
:class:`weatherdesk.viewmodels.settings_vm.SettingsVM`.
"""

from __future__ import annotations

from typing import Optional

from ..adapters.auth_rest import AuthRestAdapter
from ..adapters.country_rest import CountryRestAdapter
from ..adapters.password_cipher import CryptoJsAesCipher
from ..usecases.fetch_saved_countries import FetchSavedCountries
from ..usecases.login_user import LoginUser
from ..usecases.save_country import SaveCountry
from ..usecases.search_countries import SearchCountries
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache runtime adapters/use-cases from settings state.

    Call chain:
        ``weatherdesk.web_ui.runtime.WebRuntime`` creates one instance per
        browser client and calls ``ensure_ready`` before building the login
        and weather view models.
    """

    def __init__(self, settings_vm: SettingsVM) -> None:
        self.settings_vm = settings_vm
        self.auth_adapter: Optional[AuthRestAdapter] = None
        self.country_adapter: Optional[CountryRestAdapter] = None
        self.uc_login: Optional[LoginUser] = None
        self.uc_search: Optional[SearchCountries] = None
        self.uc_save: Optional[SaveCountry] = None
        self.uc_fetch_saved: Optional[FetchSavedCountries] = None

    def ensure_ready(self) -> bool:
        """Ensure adapters/use-cases are available for network operations.

        Returns:
            ``True`` when dependencies are available, ``False`` when settings
            are invalid or the password key is missing.
        """
        if self.auth_adapter and self.country_adapter and self.uc_login:
            return True
        if not self.settings_vm.is_valid() or not self.settings_vm.password_key:
            return False

        timeout = self.settings_vm.request_timeout_s
        if self.country_adapter is None:
            self.country_adapter = CountryRestAdapter(
                self.settings_vm.country_api_base_url,
                request_timeout_s=timeout,
            )
            self.uc_search = SearchCountries(self.country_adapter)
            self.uc_save = SaveCountry(self.country_adapter)
            self.uc_fetch_saved = FetchSavedCountries(self.country_adapter)

        if self.auth_adapter is None:
            self.auth_adapter = AuthRestAdapter(
                self.settings_vm.user_api_base_url,
                request_timeout_s=timeout,
            )
        self.uc_login = LoginUser(
            self.auth_adapter,
            CryptoJsAesCipher(self.settings_vm.password_key),
        )
        return True


__all__ = ["AppController"]
