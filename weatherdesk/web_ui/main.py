"""NiceGUI entrypoint for the weather client."""

from __future__ import annotations

import argparse
from typing import Any, Dict

from nicegui import ui

from weatherdesk.domain.entities import Country, Severity
from weatherdesk.utils import logging as logging_utils
from weatherdesk.viewmodels.settings_vm import SettingsVM
from weatherdesk.web_ui.runtime import VIEW_LOGIN, WebRuntime

VIEW_REFRESH_S = 0.2


def _install_theme() -> None:
    """Install global CSS tokens for the web runtime."""
    ui.add_head_html(
        """
<style>
body { background: #f9fafb; }
.wd-page { max-width: 640px; margin: 0 auto; padding: 48px 16px; }
.wd-card { width: 24rem; }
.wd-suggestion { cursor: pointer; }
.wd-suggestion:hover { background: #f3f4f6; }
.wd-logout { position: absolute; top: 16px; right: 16px; cursor: pointer; color: #ef4444; }
</style>
        """
    )


def _build_ui() -> None:
    """Register the NiceGUI page."""

    @ui.page("/")
    def index() -> None:
        _install_theme()
        timer_host = ui.element("div")
        runtime = WebRuntime(timer_host)
        # A dropped socket may reconnect to this same page and runtime.
        ui.context.client.on_connect(runtime.resume)
        ui.context.client.on_disconnect(runtime.suspend)
        if not runtime.ready:
            ui.label(runtime.status_message).classes("text-negative q-pa-md")
            return
        login_vm = runtime.login_vm
        weather_vm = runtime.weather_vm
        seen: Dict[str, Any] = {"view": None, "revision": -1, "note": None}

        def on_select(country: Country) -> None:
            weather_vm.select_suggestion(country)
            runtime.mark_changed()

        @ui.refreshable
        def render_results() -> None:
            if weather_vm.loading:
                ui.label("Loading...").classes("text-caption text-grey-7")
            if weather_vm.suggestions:
                with ui.list().props("bordered separator").classes("wd-card"):
                    for country in weather_vm.suggestions:
                        with ui.item(on_click=lambda _, c=country: on_select(c)).classes("wd-suggestion"):
                            ui.item_label(country.name)
            ui.label("Saved Countries and Weather").classes("text-h5 q-mt-lg")
            for row in weather_vm.saved_rows():
                with ui.card().classes("wd-card"):
                    ui.label(row.name).classes("text-h6")
                    ui.label(f"Temperature: {row.temperature}")
                    ui.label(f"Description: {row.description}")

        def render_login() -> None:
            with ui.card().classes("wd-card q-pa-lg"):
                ui.label("Login").classes("text-h5 self-center")
                ui.input(
                    "Email",
                    value=login_vm.email,
                    on_change=lambda e: setattr(login_vm, "email", str(e.value or "")),
                ).props("type=email outlined").classes("w-full")
                ui.input(
                    "Password",
                    value=login_vm.password,
                    password=True,
                    on_change=lambda e: setattr(login_vm, "password", str(e.value or "")),
                ).props("outlined").classes("w-full").on("keydown.enter", lambda: login_vm.submit())
                ui.button("Login", on_click=login_vm.submit).classes("w-full")

        def render_weather() -> None:
            ui.label("Logout").classes("wd-logout").on("click", lambda: weather_vm.logout())
            ui.label("Country Search").classes("text-h4 q-mb-md")
            search_input = ui.input(
                placeholder="Enter 3 letters for search",
                value=weather_vm.query,
                on_change=lambda e: weather_vm.set_query(e.value),
            ).props("outlined").classes("wd-card")
            seen["search_input"] = search_input
            render_results()

        @ui.refreshable
        def render_body() -> None:
            with ui.column().classes("wd-page items-center"):
                if runtime.view == VIEW_LOGIN:
                    render_login()
                else:
                    render_weather()

        @ui.refreshable
        def render_notification() -> None:
            note = weather_vm.notification()
            if note is None:
                return
            color = "positive" if note.severity is Severity.SUCCESS else "negative"
            with ui.row().classes("fixed-bottom justify-center q-pa-md"):
                with ui.card().classes(f"bg-{color} text-white row items-center no-wrap"):
                    ui.label(note.message)
                    ui.button(
                        icon="close",
                        on_click=lambda: weather_vm.dismiss_notification("close"),
                    ).props("flat round dense color=white")

        def sync_view() -> None:
            note = weather_vm.notification()
            if runtime.view != seen["view"]:
                seen["view"] = runtime.view
                render_body.refresh()
            elif runtime.revision != seen["revision"]:
                search_input = seen.get("search_input")
                # Clearing the field after a save happens in the view model.
                if search_input is not None and search_input.value != weather_vm.query:
                    search_input.value = weather_vm.query
                render_results.refresh()
            seen["revision"] = runtime.revision
            if note != seen["note"]:
                seen["note"] = note
                render_notification.refresh()

        render_body()
        render_notification()
        ui.timer(VIEW_REFRESH_S, sync_view)


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the weatherdesk NiceGUI web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    level = logging_utils.configure_root()
    if args.smoke_test:
        settings = SettingsVM.from_env()
        print("web-smoke-ok", logging_utils.level_name(level), sorted(settings.to_dict().keys()))
        return
    _build_ui()
    ui.run(
        host=args.host,
        port=args.port,
        title="Country Weather",
        reload=args.reload,
        show=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
