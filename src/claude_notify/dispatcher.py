"""Route an "open" action to the right window, tab or project.

The fallback chain is a small state machine::

    ENTRY -> TTY_FOCUS -> ACTIVATE -> PROJECT_OPEN -> TERMINATE

``TTY_FOCUS`` is only entered for terminal-class targets that were given a
tty, and a successful focus goes straight to ``TERMINATE``. ``ACTIVATE``
never looks at its own outcome. ``PROJECT_OPEN`` runs after a short delay so
the launch lands after the application has come forward.
"""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from claude_notify.targets import CommandLineLaunch, Target, UrlSchemeLaunch

logger = py_logging.getLogger(__name__)

LAUNCH_DELAY_SECONDS = 0.3
NO_TTY = "none"
_TTY_PREFIX = "/dev/"


class DispatchState(str, Enum):
    ENTRY = "entry"
    TTY_FOCUS = "tty-focus"
    ACTIVATE = "activate"
    PROJECT_OPEN = "project-open"
    TERMINATE = "terminate"


class Automation(Protocol):
    def activate(self, app_name: str) -> bool: ...

    def focus_tty(self, app_name: str, tty_key: str) -> bool: ...

    def launch(self, command: str, path: str) -> bool: ...

    def open_url(self, url: str) -> bool: ...


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


@dataclass
class DispatchTrace:
    target_id: str
    states: list[DispatchState] = field(default_factory=list)
    tty_focused: bool = False
    launched: str = ""

    @property
    def finished(self) -> bool:
        return bool(self.states) and self.states[-1] is DispatchState.TERMINATE


def strip_tty_prefix(tty_id: str | None) -> str:
    if not tty_id:
        return ""
    value = tty_id.strip()
    if value.lower() == NO_TTY:
        return ""
    if value.startswith(_TTY_PREFIX):
        value = value[len(_TTY_PREFIX) :]
    return value


class WindowFocusDispatcher:
    def __init__(
        self,
        automation: Automation,
        scheduler: Scheduler,
        terminate: Callable[[], None],
        *,
        launch_delay: float = LAUNCH_DELAY_SECONDS,
    ) -> None:
        self.automation = automation
        self.scheduler = scheduler
        self.launch_delay = launch_delay
        self._terminate_process = terminate
        self._pending: ScheduledCall | None = None

    @property
    def has_pending_launch(self) -> bool:
        return self._pending is not None

    def open(self, target: Target, project_path: str = "", tty_id: str | None = None) -> DispatchTrace:
        trace = DispatchTrace(target_id=target.id)
        tty_key = strip_tty_prefix(tty_id)
        state = DispatchState.ENTRY
        while True:
            trace.states.append(state)
            if state is DispatchState.ENTRY:
                if target.is_terminal_class and tty_key:
                    state = DispatchState.TTY_FOCUS
                else:
                    state = DispatchState.ACTIVATE
            elif state is DispatchState.TTY_FOCUS:
                trace.tty_focused = self._attempt(
                    "tty-focus", self.automation.focus_tty, target.host_application_name, tty_key
                )
                state = DispatchState.TERMINATE if trace.tty_focused else DispatchState.ACTIVATE
            elif state is DispatchState.ACTIVATE:
                self._attempt("activate", self.automation.activate, target.host_application_name)
                if project_path and target.opens_project_path:
                    state = DispatchState.PROJECT_OPEN
                else:
                    state = DispatchState.TERMINATE
            elif state is DispatchState.PROJECT_OPEN:
                logger.debug(
                    "dispatch project-open-scheduled target=%s delay=%s", target.id, self.launch_delay
                )
                try:
                    self._pending = self.scheduler.call_later(
                        self.launch_delay,
                        lambda: self._open_project(target, project_path, trace),
                    )
                except Exception:
                    logger.warning("dispatch schedule-failed target=%s", target.id, exc_info=True)
                    state = DispatchState.TERMINATE
                    continue
                return trace
            else:
                self._terminate(trace)
                return trace

    def cancel_pending(self) -> None:
        if self._pending is None:
            return
        self._pending.cancel()
        self._pending = None
        logger.debug("dispatch project-open-cancelled")

    def _open_project(self, target: Target, project_path: str, trace: DispatchTrace) -> None:
        self._pending = None
        strategy = target.activation_strategy
        try:
            if isinstance(strategy, CommandLineLaunch):
                trace.launched = "command"
                self._attempt("launch", self.automation.launch, strategy.command, project_path)
            elif isinstance(strategy, UrlSchemeLaunch):
                trace.launched = "url"
                self._attempt("open-url", self.automation.open_url, strategy.build_url(project_path))
        finally:
            trace.states.append(DispatchState.TERMINATE)
            self._terminate(trace)

    def _attempt(self, step: str, action: Callable[..., bool], *args: str) -> bool:
        try:
            return bool(action(*args))
        except Exception:
            logger.warning("dispatch step-failed step=%s", step, exc_info=True)
            return False

    def _terminate(self, trace: DispatchTrace) -> None:
        logger.info(
            "dispatch complete target=%s path=%s",
            trace.target_id,
            "->".join(state.value for state in trace.states),
        )
        try:
            self._terminate_process()
        except Exception:
            logger.warning("dispatch terminate-failed", exc_info=True)
