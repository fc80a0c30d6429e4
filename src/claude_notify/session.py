"""Alert lifecycle: slot claim, timeout, open and dismiss."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from claude_notify.dispatcher import DispatchTrace, ScheduledCall, Scheduler, WindowFocusDispatcher
from claude_notify.slots import FALLBACK_SLOT, SlotAllocator, slot_offset
from claude_notify.targets import Target, resolve

logger = py_logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0
PANEL_WIDTH = 320
BASE_PANEL_HEIGHT = 230
BUTTON_ROW_HEIGHT = 44
BUTTONS_PER_ROW = 3
PANEL_GAP = 8
PERMISSION_MODE = "permission"


class AlertMode(str, Enum):
    COMPLETION = "completion"
    PERMISSION = "permission"


class SessionState(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    OPENED = "opened"
    DISMISSED = "dismissed"
    TIMED_OUT = "timed-out"


@dataclass(frozen=True)
class AlertRequest:
    runtime: str = "Claude"
    project_name: str = "Project"
    project_path: str = ""
    tty_id: str = ""
    mode: AlertMode = AlertMode.COMPLETION
    targets: tuple[Target, ...] = field(default_factory=lambda: (resolve("Terminal"),))

    @property
    def is_permission(self) -> bool:
        return self.mode is AlertMode.PERMISSION


@dataclass(frozen=True)
class AlertContent:
    header: str
    subtitle: str
    button_rows: tuple[tuple[Target, ...], ...]
    single_target: bool
    panel_width: int
    panel_height: int


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    return [list(items[index : index + size]) for index in range(0, len(items), size)]


def panel_height(target_count: int) -> int:
    extra_rows = (target_count - 1) // BUTTONS_PER_ROW + 1 if target_count > 1 else 0
    return BASE_PANEL_HEIGHT + extra_rows * BUTTON_ROW_HEIGHT


def build_alert_content(request: AlertRequest) -> AlertContent:
    if request.is_permission:
        header = f"{request.runtime} Needs Approval"
        subtitle = "Permission required to continue"
    else:
        header = f"{request.runtime} Complete"
        subtitle = "Ready for your input"
    rows = tuple(tuple(row) for row in chunked(request.targets, BUTTONS_PER_ROW))
    return AlertContent(
        header=header,
        subtitle=subtitle,
        button_rows=rows,
        single_target=len(request.targets) == 1,
        panel_width=PANEL_WIDTH,
        panel_height=panel_height(len(request.targets)),
    )


class AlertSession:
    """Owns the slot and the timeout for one alert process.

    Exactly one terminal action happens per session: the first of ``open``,
    ``dismiss`` or the timeout wins and the others become no-ops.
    """

    def __init__(
        self,
        request: AlertRequest,
        *,
        allocator: SlotAllocator,
        dispatcher: WindowFocusDispatcher,
        scheduler: Scheduler,
        terminate: Callable[[], None],
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        hide: Callable[[], None] | None = None,
    ) -> None:
        self.request = request
        self.allocator = allocator
        self.dispatcher = dispatcher
        self.scheduler = scheduler
        self.timeout_seconds = timeout_seconds
        self.state = SessionState.PENDING
        self.slot = FALLBACK_SLOT
        self._terminate_process = terminate
        self._hide = hide
        self._timeout: ScheduledCall | None = None
        self._slot_held = False

    @property
    def content(self) -> AlertContent:
        return build_alert_content(self.request)

    @property
    def vertical_offset(self) -> float:
        return slot_offset(self.slot, self.content.panel_height, PANEL_GAP)

    def start(self) -> int:
        if self.state is not SessionState.PENDING:
            return self.slot
        self.slot = self.allocator.claim()
        self._slot_held = True
        self._timeout = self.scheduler.call_later(self.timeout_seconds, self._on_timeout)
        self.state = SessionState.ACTIVE
        logger.info(
            "alert start slot=%s mode=%s targets=%s timeout=%s",
            self.slot,
            self.request.mode.value,
            ",".join(target.id for target in self.request.targets),
            self.timeout_seconds,
        )
        return self.slot

    def open(self, target: Target | None = None) -> DispatchTrace | None:
        if not self._finish(SessionState.OPENED):
            return None
        selected = target or self.request.targets[0]
        logger.info("alert open target=%s slot=%s", selected.id, self.slot)
        return self.dispatcher.open(selected, self.request.project_path, self.request.tty_id)

    def dismiss(self) -> bool:
        if not self._finish(SessionState.DISMISSED):
            return False
        logger.info("alert dismiss slot=%s", self.slot)
        self._terminate_process()
        return True

    def shutdown(self) -> None:
        """Release everything when the event loop exits underneath us."""
        self._cancel_timeout()
        self.dispatcher.cancel_pending()
        self._release_slot()

    def _on_timeout(self) -> None:
        self._timeout = None
        if not self._finish(SessionState.TIMED_OUT):
            return
        logger.info("alert timeout slot=%s", self.slot)
        self._terminate_process()

    def _finish(self, state: SessionState) -> bool:
        if self.state is not SessionState.ACTIVE:
            logger.debug("alert action-ignored state=%s requested=%s", self.state.value, state.value)
            return False
        self.state = state
        self._cancel_timeout()
        # The panel must be off screen before another alert can take its slot.
        self._hide_panel()
        self._release_slot()
        return True

    def _hide_panel(self) -> None:
        if self._hide is None:
            return
        try:
            self._hide()
        except Exception:
            logger.warning("alert hide-failed slot=%s", self.slot, exc_info=True)

    def _cancel_timeout(self) -> None:
        if self._timeout is not None:
            self._timeout.cancel()
            self._timeout = None

    def _release_slot(self) -> None:
        if self._slot_held:
            self._slot_held = False
            self.allocator.release(self.slot)
