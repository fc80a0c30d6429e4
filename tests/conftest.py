from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

_FILESYSTEM_TEST_FILES = {
    "test_slots.py",
    "test_config.py",
    "test_session.py",
}


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if "property" in path.parts:
            item.add_marker(pytest.mark.property)
        if path.name in _FILESYSTEM_TEST_FILES:
            item.add_marker(pytest.mark.filesystem)


@dataclass
class FakeCall:
    delay: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeScheduler:
    calls: list[FakeCall] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeCall:
        call = FakeCall(delay=delay, callback=callback)
        self.calls.append(call)
        return call

    @property
    def pending(self) -> list[FakeCall]:
        return [call for call in self.calls if not call.cancelled and not call.fired]

    def fire(self, call: FakeCall) -> None:
        call.fired = True
        call.callback()

    def run_pending(self) -> None:
        for call in sorted(self.pending, key=lambda item: item.delay):
            if not call.cancelled and not call.fired:
                self.fire(call)


@dataclass
class RecordingAutomation:
    focus_result: bool = False
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def activate(self, app_name: str) -> bool:
        self.calls.append(("activate", app_name))
        return True

    def focus_tty(self, app_name: str, tty_key: str) -> bool:
        self.calls.append(("focus_tty", app_name, tty_key))
        return self.focus_result

    def launch(self, command: str, path: str) -> bool:
        self.calls.append(("launch", command, path))
        return True

    def open_url(self, url: str) -> bool:
        self.calls.append(("open_url", url))
        return True

    @property
    def kinds(self) -> list[str]:
        return [call[0] for call in self.calls]


@dataclass
class Terminator:
    count: int = 0

    def __call__(self) -> None:
        self.count += 1


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def automation() -> RecordingAutomation:
    return RecordingAutomation()


@pytest.fixture
def terminate() -> Terminator:
    return Terminator()
