from __future__ import annotations

from weatherdesk.adapters.api_errors import ApiPayloadError, ApiServerError
from weatherdesk.app.task_runner import InlineRunner
from weatherdesk.domain.entities import Country, Severity
from weatherdesk.domain.notification_queue import NotificationQueue
from weatherdesk.domain.session_store import SessionStore
from weatherdesk.tests.unit.fakes import FRANCE, CountryPortStub, FakeClock, make_scheduler
from weatherdesk.usecases.fetch_saved_countries import FetchSavedCountries
from weatherdesk.usecases.save_country import SaveCountry
from weatherdesk.usecases.search_countries import SearchCountries
from weatherdesk.viewmodels.weather_vm import SavedCountryRow, WeatherVM, to_title_case

FRANCE_WEATHER = {**FRANCE, "temperature": 17.3, "description": "clear sky"}


def _build(port: CountryPortStub, *, logged_in: bool = True):
    store = SessionStore()
    if logged_in:
        store.login("tok", 1)
    clock = FakeClock()
    notes = NotificationQueue(clock=clock)
    scheduler, timers = make_scheduler()
    hooks = {"changed": 0, "logged_out": 0, "auth_required": []}

    def _changed() -> None:
        hooks["changed"] += 1

    def _logged_out() -> None:
        hooks["logged_out"] += 1

    vm = WeatherVM(
        session_store=store,
        notifications=notes,
        search=SearchCountries(port),
        save=SaveCountry(port),
        fetch_saved=FetchSavedCountries(port),
        scheduler=scheduler,
        runner=InlineRunner(),
        on_changed=_changed,
        on_logged_out=_logged_out,
        on_auth_required=hooks["auth_required"].append,
    )
    return vm, timers, clock, hooks


def test_search_select_save_refresh_scenario() -> None:
    port = CountryPortStub(search_results={"Fra": [FRANCE]}, weather=[])
    vm, timers, _, _ = _build(port)
    vm.activate()
    assert port.weather_calls == [1]

    vm.set_query("Fra")
    timers.advance(500)
    assert vm.suggestions == [Country(name="France", latitude=46.2, longitude=2.2)]

    port.weather = [FRANCE_WEATHER]
    assert vm.select_suggestion(vm.suggestions[0]) is True

    note = vm.notification()
    assert note.message == "Country France has been saved successfully."
    assert note.severity is Severity.SUCCESS
    assert port.create_calls == [
        {"payload": {"name": "France", "latitude": 46.2, "longitude": 2.2}, "token": "tok"}
    ]
    assert port.weather_calls == [1, 1]
    assert vm.query == ""
    assert vm.suggestions == []
    assert [row.name for row in vm.saved_rows()] == ["France"]


def test_select_without_session_sends_nothing() -> None:
    port = CountryPortStub(search_results={"Fra": [FRANCE]})
    vm, timers, _, hooks = _build(port, logged_in=False)
    vm.activate()
    vm.set_query("Fra")
    timers.advance(500)

    assert vm.select_suggestion(vm.suggestions[0]) is False

    assert port.create_calls == []
    assert len(hooks["auth_required"]) == 1
    assert vm.notification() is None


def test_save_failure_shows_error_and_keeps_list() -> None:
    port = CountryPortStub(weather=[FRANCE_WEATHER])
    port.create_error = ApiServerError("create: HTTP 500", status=500)
    vm, _, _, _ = _build(port)
    vm.activate()

    vm.select_suggestion(Country(name="Peru", latitude=-9.2, longitude=-75.0))

    note = vm.notification()
    assert note.severity is Severity.ERROR
    assert note.message == "Error saving country. Please try again."
    assert port.weather_calls == [1]
    assert [row.name for row in vm.saved_rows()] == ["France"]


def test_failed_poll_keeps_displayed_list() -> None:
    port = CountryPortStub(weather=[FRANCE_WEATHER])
    vm, timers, _, _ = _build(port)
    vm.activate()

    port.weather_error = ApiPayloadError("weather[user=1]: service reported failure")
    timers.advance(60_000)

    assert port.weather_calls == [1, 1]
    assert [row.name for row in vm.saved_rows()] == ["France"]
    assert vm.notification() is None


def test_saved_rows_format_temperature_and_description() -> None:
    port = CountryPortStub(weather=[{**FRANCE, "temperature": 21, "description": "LIGHT rain"}])
    vm, _, _, _ = _build(port)
    vm.activate()

    assert vm.saved_rows() == [SavedCountryRow(name="France", temperature="21°C", description="Light Rain")]


def test_to_title_case_handles_mixed_case() -> None:
    assert to_title_case("broken CLOUDS") == "Broken Clouds"
    assert to_title_case("") == ""


def test_notification_expires_after_duration() -> None:
    port = CountryPortStub()
    vm, _, clock, _ = _build(port)
    vm.activate()
    vm.select_suggestion(Country(name="France", latitude=46.2, longitude=2.2))

    clock.advance(5.9)
    assert vm.notification() is not None
    clock.advance(0.2)

    assert vm.notification() is None


def test_clickaway_does_not_dismiss_notification() -> None:
    port = CountryPortStub()
    vm, _, _, _ = _build(port)
    vm.activate()
    vm.select_suggestion(Country(name="France", latitude=46.2, longitude=2.2))

    vm.dismiss_notification("clickaway")
    assert vm.notification() is not None
    vm.dismiss_notification("close")

    assert vm.notification() is None


def test_logout_tears_down_and_clears_state() -> None:
    port = CountryPortStub(search_results={"Fra": [FRANCE]}, weather=[FRANCE_WEATHER])
    vm, timers, _, hooks = _build(port)
    vm.activate()
    vm.set_query("Fra")
    timers.advance(500)

    vm.logout()
    timers.advance(600_000)

    assert vm.session_store.current() is None
    assert vm.saved_rows() == []
    assert vm.query == ""
    assert vm.suggestions == []
    assert vm.active is False
    assert port.weather_calls == [1]
    assert hooks["logged_out"] == 1
    assert timers.pending_count == 0


def test_deactivate_cancels_pending_search() -> None:
    port = CountryPortStub(search_results={"Fra": [FRANCE]})
    vm, timers, _, _ = _build(port)
    vm.activate()

    vm.set_query("Fra")
    vm.deactivate()
    timers.advance(1000)

    assert port.search_calls == []


def test_select_while_inactive_sends_nothing() -> None:
    port = CountryPortStub()
    vm, _, _, hooks = _build(port)
    vm.activate()
    vm.deactivate()

    assert vm.select_suggestion(Country(name="France", latitude=46.2, longitude=2.2)) is False

    assert port.create_calls == []
    assert hooks["auth_required"] == []


def test_reactivation_restores_search_save_and_polling() -> None:
    port = CountryPortStub(search_results={"Fra": [FRANCE]})
    vm, timers, _, _ = _build(port)
    vm.activate()
    vm.deactivate()

    vm.activate()
    vm.set_query("Fra")
    timers.advance(500)
    assert vm.query == "Fra"
    assert vm.select_suggestion(vm.suggestions[0]) is True

    assert vm.notification().message == "Country France has been saved successfully."
    assert port.weather_calls == [1, 1, 1]
    timers.advance(60_000)
    assert len(port.weather_calls) == 4


def test_temperature_keeps_server_precision() -> None:
    port = CountryPortStub(
        weather=[
            {**FRANCE, "temperature": 1234567.5, "description": "hot"},
            {**FRANCE, "name": "Chad", "temperature": 40.0, "description": "hot"},
            {**FRANCE, "name": "Peru", "temperature": -3.25, "description": "cold"},
        ]
    )
    vm, _, _, _ = _build(port)
    vm.activate()

    assert [row.temperature for row in vm.saved_rows()] == ["1234567.5°C", "40°C", "-3.25°C"]
