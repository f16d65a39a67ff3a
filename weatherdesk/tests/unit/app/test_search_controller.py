from __future__ import annotations

from typing import List

from weatherdesk.app.search_controller import SearchController, SearchState
from weatherdesk.app.task_runner import InlineRunner
from weatherdesk.domain.entities import Country
from weatherdesk.domain.errors import TransientLookupFailure
from weatherdesk.tests.unit.fakes import DeferredRunner, make_scheduler

FRANCE = Country(name="France", latitude=46.2, longitude=2.2)
FRENCH_GUIANA = Country(name="French Guiana", latitude=4.0, longitude=-53.0)


class _SearchSpy:
    def __init__(self, results=None, error=None) -> None:
        self.results = results or {}
        self.error = error
        self.calls: List[str] = []

    def __call__(self, query: str) -> List[Country]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return list(self.results.get(query, []))


def _controller(search, runner=None):
    scheduler, timers = make_scheduler()
    changes = []
    controller = SearchController(
        state=SearchState(),
        search=search,
        scheduler=scheduler,
        runner=runner or InlineRunner(),
        on_change=lambda: changes.append(True),
    )
    controller.activate()
    return controller, timers, changes


def test_short_query_clears_suggestions_without_request() -> None:
    search = _SearchSpy({"Fra": [FRANCE]})
    controller, timers, _ = _controller(search)
    controller.set_query("Fra")
    timers.advance(500)
    assert controller.state.suggestions == [FRANCE]

    controller.set_query("Fr")
    timers.advance(5000)

    assert controller.state.suggestions == []
    assert search.calls == ["Fra"]


def test_whitespace_does_not_count_toward_minimum_length() -> None:
    search = _SearchSpy()
    controller, timers, _ = _controller(search)

    controller.set_query("  a ")
    timers.advance(1000)

    assert search.calls == []


def test_burst_of_keystrokes_issues_one_request_after_quiet_period() -> None:
    search = _SearchSpy({"Fran": [FRANCE]})
    controller, timers, _ = _controller(search)

    for text in ("Fra", "Fran"):
        controller.set_query(text)
        timers.advance(200)
    assert search.calls == []
    timers.advance(299)
    assert search.calls == []
    timers.advance(1)

    assert search.calls == ["Fran"]
    assert controller.state.suggestions == [FRANCE]


def test_identical_text_does_not_rearm_timer() -> None:
    search = _SearchSpy()
    controller, timers, _ = _controller(search)

    controller.set_query("Fra")
    timers.advance(400)
    controller.set_query("Fra")
    timers.advance(100)

    assert search.calls == ["Fra"]


def test_lookup_uses_trimmed_query() -> None:
    search = _SearchSpy()
    controller, timers, _ = _controller(search)

    controller.set_query(" Fra ")
    timers.advance(500)

    assert search.calls == ["Fra"]


def test_stale_response_is_discarded() -> None:
    runner = DeferredRunner()
    search = _SearchSpy({"Fra": [FRANCE], "Fre": [FRENCH_GUIANA]})
    controller, timers, _ = _controller(search, runner)

    controller.set_query("Fra")
    timers.advance(500)
    controller.set_query("Fre")
    timers.advance(500)
    assert controller.state.loading is True

    runner.complete(1)
    assert controller.state.suggestions == [FRENCH_GUIANA]
    runner.complete(0)

    assert controller.state.suggestions == [FRENCH_GUIANA]
    assert controller.state.loading is False


def test_response_arriving_after_edit_does_not_touch_state() -> None:
    runner = DeferredRunner()
    search = _SearchSpy({"Fra": [FRANCE]})
    controller, timers, _ = _controller(search, runner)

    controller.set_query("Fra")
    timers.advance(500)
    controller.set_query("Fr")
    runner.complete_all()

    assert controller.state.suggestions == []
    assert controller.state.loading is False


def test_loading_flag_tracks_in_flight_lookup() -> None:
    runner = DeferredRunner()
    controller, timers, _ = _controller(_SearchSpy({"Fra": [FRANCE]}), runner)

    controller.set_query("Fra")
    assert controller.state.loading is False
    timers.advance(500)
    assert controller.state.loading is True
    runner.complete()

    assert controller.state.loading is False


def test_failure_clears_suggestions_silently() -> None:
    search = _SearchSpy({"Fra": [FRANCE]})
    controller, timers, _ = _controller(search)
    controller.set_query("Fra")
    timers.advance(500)

    search.error = TransientLookupFailure("Service error (HTTP 500), try again.")
    controller.set_query("Fran")
    timers.advance(500)

    assert controller.state.suggestions == []
    assert controller.state.loading is False


def test_deactivate_cancels_pending_lookup_and_drops_in_flight() -> None:
    runner = DeferredRunner()
    search = _SearchSpy({"Fra": [FRANCE], "Fran": [FRANCE]})
    controller, timers, _ = _controller(search, runner)

    controller.set_query("Fra")
    timers.advance(500)
    controller.set_query("Fran")
    controller.deactivate()
    timers.advance(1000)
    runner.complete_all()

    assert search.calls == ["Fra"]
    assert controller.state.suggestions == []
    assert timers.pending_count == 0


def test_reset_clears_query_and_suggestions() -> None:
    search = _SearchSpy({"Fra": [FRANCE]})
    controller, timers, changes = _controller(search)
    controller.set_query("Fra")
    timers.advance(500)

    controller.reset()

    assert controller.state.query == ""
    assert controller.state.suggestions == []
    assert changes


def test_controller_ignores_keystrokes_until_activated() -> None:
    scheduler, timers = make_scheduler()
    search = _SearchSpy({"Fra": [FRANCE]})
    controller = SearchController(
        state=SearchState(), search=search, scheduler=scheduler, runner=InlineRunner()
    )

    controller.set_query("Fra")
    timers.advance(1000)
    assert controller.active is False
    assert search.calls == []

    controller.activate()
    controller.set_query("Fra")
    timers.advance(500)

    assert search.calls == ["Fra"]
