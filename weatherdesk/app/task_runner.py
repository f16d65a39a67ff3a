"""Seam between coordinators and wherever blocking port calls execute.

Coordinators hand a zero-argument ``work`` callable plus completion callbacks
to a runner. Runners must invoke the callbacks on the UI thread/event loop;
coordinators rely on that to mutate view state without locks.
"""

from __future__ import annotations

from typing import Callable, Protocol, TypeVar

T = TypeVar("T")


class TaskRunner(Protocol):
    def run(
        self,
        work: Callable[[], T],
        on_done: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None: ...


class InlineRunner:
    """Run work on the caller's thread and complete immediately."""

    def run(
        self,
        work: Callable[[], T],
        on_done: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        try:
            result = work()
        except Exception as exc:
            on_error(exc)
            return
        on_done(result)


__all__ = ["InlineRunner", "TaskRunner"]
