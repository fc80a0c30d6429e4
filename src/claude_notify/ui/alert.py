"""PySide6 alert panel wired to an AlertSession."""

from __future__ import annotations

import logging as py_logging
import sys
from collections.abc import Callable

from claude_notify.automation import MacAutomation
from claude_notify.config import NotifySettings
from claude_notify.dispatcher import WindowFocusDispatcher
from claude_notify.errors import ExitCode, NotifyError
from claude_notify.session import PANEL_GAP, AlertRequest, AlertSession
from claude_notify.slots import SlotAllocator
from claude_notify.targets import Target

logger = py_logging.getLogger(__name__)

SCREEN_MARGIN = 12
_ACCENT = "#FF731A"


def _button_style(color: str, *, primary: bool) -> str:
    if primary:
        return (
            f"QPushButton {{ background: {color}; color: white; border-radius: 10px;"
            " padding: 9px; font-weight: 600; }"
        )
    return (
        "QPushButton { background: rgba(255,255,255,0.08); color: #8C807A;"
        " border: 1px solid rgba(255,255,255,0.12); border-radius: 10px; padding: 9px; }"
    )


def show_alert(request: AlertRequest, settings: NotifySettings, *, platform_name: str | None = None) -> int:
    runtime_platform = platform_name or sys.platform
    if runtime_platform != "darwin":
        raise NotifyError(
            f"Unsupported platform: {runtime_platform}",
            code=ExitCode.UNSUPPORTED_PLATFORM,
            hint="claude-notify drives macOS applications and only runs on macOS.",
        )

    try:
        from PySide6.QtCore import Qt, QTimer
        from PySide6.QtWidgets import (
            QApplication,
            QHBoxLayout,
            QLabel,
            QPushButton,
            QVBoxLayout,
            QWidget,
        )
    except ImportError as exc:
        raise NotifyError(
            "PySide6 is not installed; the alert window cannot be shown.",
            code=ExitCode.RUNTIME_ERROR,
            hint="Run `pip install PySide6` and retry.",
        ) from exc

    class QtCall:  # pragma: no cover
        def __init__(self, delay: float, callback: Callable[[], None]) -> None:
            self._timer = QTimer()
            self._timer.setSingleShot(True)
            self._timer.timeout.connect(callback)
            self._timer.start(int(delay * 1000))

        def cancel(self) -> None:
            self._timer.stop()

    class QtScheduler:  # pragma: no cover
        def call_later(self, delay: float, callback: Callable[[], None]) -> QtCall:
            return QtCall(delay, callback)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setQuitOnLastWindowClosed(False)
    automation = MacAutomation()
    scheduler = QtScheduler()

    window = QWidget()

    def terminate() -> None:
        window.close()
        app.quit()

    dispatcher = WindowFocusDispatcher(automation, scheduler, terminate)
    session = AlertSession(
        request,
        allocator=SlotAllocator(),
        dispatcher=dispatcher,
        scheduler=scheduler,
        terminate=terminate,
        timeout_seconds=settings.timeout_seconds,
        hide=window.hide,
    )
    app.aboutToQuit.connect(session.shutdown)
    content = session.content

    window.setWindowFlags(
        Qt.WindowType.FramelessWindowHint
        | Qt.WindowType.WindowStaysOnTopHint
        | Qt.WindowType.Tool
        | Qt.WindowType.WindowDoesNotAcceptFocus
    )
    window.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
    window.setFixedSize(content.panel_width, content.panel_height)
    window.setStyleSheet("QWidget { background: #141010; color: #F2ECE8; border-radius: 18px; }")

    layout = QVBoxLayout(window)
    layout.setContentsMargins(18, 16, 18, 12)
    header = QLabel(content.header)
    header.setStyleSheet(f"font-size: 15px; font-weight: 600; color: {_ACCENT};")
    layout.addWidget(header)
    project = QLabel(request.project_name)
    project.setStyleSheet("font-size: 14px; font-weight: 500;")
    layout.addWidget(project)
    subtitle = QLabel(content.subtitle)
    subtitle.setStyleSheet("font-size: 11px; color: #8C807A;")
    layout.addWidget(subtitle)
    layout.addStretch(1)

    def open_button(label: str, target: Target) -> QPushButton:
        button = QPushButton(label)
        button.setStyleSheet(_button_style(target.brand_color or _ACCENT, primary=True))
        button.clicked.connect(lambda: session.open(target))
        return button

    dismiss_button = QPushButton("Dismiss")
    dismiss_button.setStyleSheet(_button_style(_ACCENT, primary=False))
    dismiss_button.clicked.connect(session.dismiss)

    if content.single_target:
        row = QHBoxLayout()
        row.addWidget(dismiss_button)
        row.addWidget(open_button("Open Project", request.targets[0]))
        layout.addLayout(row)
    else:
        for targets in content.button_rows:
            row = QHBoxLayout()
            for target in targets:
                row.addWidget(open_button(target.display_name, target))
            layout.addLayout(row)
        layout.addWidget(dismiss_button)

    slot = session.start()
    screen = app.primaryScreen()
    if screen is not None:
        frame = screen.availableGeometry()
        x = frame.right() - content.panel_width - SCREEN_MARGIN
        y = frame.top() + SCREEN_MARGIN + int(session.vertical_offset)
        window.move(x, y)
    logger.debug("alert window slot=%s gap=%s", slot, PANEL_GAP)

    window.show()
    window.raise_()
    automation.play_sound(permission=request.is_permission)
    app.exec()
    return int(ExitCode.SUCCESS)
