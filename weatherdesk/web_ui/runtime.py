"""NiceGUI runtime orchestration for the weather client.

One :class:`WebRuntime` exists per browser client. It owns that client's
session, notification queue, timers, and view models, so nothing is shared
between tabs or users.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

from nicegui import background_tasks, run, ui

from weatherdesk.app.controller import AppController
from weatherdesk.app.task_runner import TaskRunner
from weatherdesk.app.timer_scheduler import TimerScheduler
from weatherdesk.domain.entities import Session
from weatherdesk.domain.errors import AuthorizationMissing
from weatherdesk.domain.notification_queue import NotificationQueue
from weatherdesk.domain.session_store import SessionStore
from weatherdesk.utils.logging import apply_debug_preference
from weatherdesk.viewmodels.login_vm import LoginVM
from weatherdesk.viewmodels.settings_vm import PASSWORD_KEY_ENV, SettingsVM
from weatherdesk.viewmodels.weather_vm import WeatherVM

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

VIEW_LOGIN = "login"
VIEW_WEATHER = "weather"


class NiceGuiTimers:
    """One-shot ``ui.timer`` instances created inside a fixed page container."""

    def __init__(self, container: ui.element) -> None:
        self._container = container

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ui.timer:
        # Timers need a parent slot; callbacks may arrive from background tasks
        # that have none, so always enter the page container.
        with self._container:
            return ui.timer(max(delay_ms, 1) / 1000.0, callback, once=True)

    @staticmethod
    def cancel(timer: Any) -> None:
        timer.cancel()


class NiceGuiRunner:
    """Run blocking port calls in a worker thread, complete on the event loop."""

    def __init__(self, on_settled: Optional[Callable[[], None]] = None) -> None:
        self._on_settled = on_settled or (lambda: None)

    def run(
        self,
        work: Callable[[], T],
        on_done: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        background_tasks.create(self._run(work, on_done, on_error), name="weatherdesk-io")

    async def _run(
        self,
        work: Callable[[], T],
        on_done: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        try:
            result = await run.io_bound(work)
        except Exception as exc:
            on_error(exc)
        else:
            on_done(result)
        finally:
            self._on_settled()


class WebRuntime:
    """Per-client state used by the NiceGUI page.

    The page wires ``resume`` to ``client.on_connect`` and ``suspend`` to
    ``client.on_disconnect``. A browser that drops its socket and reconnects
    keeps the same runtime, so suspending is never final.
    """

    def __init__(
        self,
        container: ui.element,
        settings_vm: Optional[SettingsVM] = None,
        *,
        controller: Optional[AppController] = None,
        timers: Optional[Any] = None,
        runner: Optional[TaskRunner] = None,
    ) -> None:
        self.settings_vm = settings_vm or SettingsVM.from_env()
        apply_debug_preference(self.settings_vm.debug_logging)
        self.controller = controller or AppController(self.settings_vm)
        self.session_store = SessionStore()
        self.notifications = NotificationQueue(duration_s=self.settings_vm.notification_duration_s)
        self.revision = 0

        backend = timers or NiceGuiTimers(container)
        self.scheduler = TimerScheduler(backend.schedule, backend.cancel)
        self.runner = runner or NiceGuiRunner(on_settled=self.mark_changed)

        self.status_message = "Ready."
        self.login_vm: Optional[LoginVM] = None
        self.weather_vm: Optional[WeatherVM] = None
        if not self.controller.ensure_ready():
            self.status_message = (
                f"Client is not configured: set {PASSWORD_KEY_ENV} and valid service URLs."
            )
            LOGGER.error(self.status_message)
            return

        self.login_vm = LoginVM(
            login=self.controller.uc_login,
            session_store=self.session_store,
            notifications=self.notifications,
            runner=self.runner,
        )
        self.weather_vm = WeatherVM(
            session_store=self.session_store,
            notifications=self.notifications,
            search=self.controller.uc_search,
            save=self.controller.uc_save,
            fetch_saved=self.controller.uc_fetch_saved,
            scheduler=self.scheduler,
            runner=self.runner,
            debounce_ms=self.settings_vm.search_debounce_ms,
            min_query_length=self.settings_vm.min_query_length,
            sync_interval_ms=self.settings_vm.sync_interval_ms,
            on_changed=self.mark_changed,
            on_logged_out=self.mark_changed,
            on_auth_required=self._on_auth_required,
        )
        self.session_store.subscribe(self._on_session_changed)

    @property
    def ready(self) -> bool:
        return self.weather_vm is not None

    @property
    def view(self) -> str:
        return VIEW_WEATHER if self.session_store.is_authenticated else VIEW_LOGIN

    def mark_changed(self) -> None:
        self.revision += 1

    def resume(self) -> None:
        """Restart the weather view after a (re)connect while signed in."""
        vm = self.weather_vm
        if vm is None or vm.active or not self.session_store.is_authenticated:
            return
        LOGGER.info("Client connected; resuming weather view")
        vm.activate()
        self.mark_changed()

    def suspend(self) -> None:
        """Stop timers and drop in-flight results while the client is away."""
        if self.weather_vm is not None:
            self.weather_vm.deactivate()
        self.scheduler.cancel_all()

    def _on_session_changed(self, session: Optional[Session]) -> None:
        if self.weather_vm is None:
            return
        if session is None:
            self.weather_vm.deactivate()
        else:
            self.weather_vm.activate()
        self.mark_changed()

    def _on_auth_required(self, exc: AuthorizationMissing) -> None:
        # The page falls back to the login panel once the session is gone.
        if self.weather_vm is not None:
            self.weather_vm.deactivate()
        self.mark_changed()


__all__ = ["NiceGuiRunner", "NiceGuiTimers", "VIEW_LOGIN", "VIEW_WEATHER", "WebRuntime"]
