"""Static catalog of known editors and terminals."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import CommandLineLaunch, Target, TerminalWindowFocus, UrlSchemeLaunch

DEFAULT_EDITOR_ID = "zed"
FALLBACK_TARGET_ID = "terminal"

TARGETS: tuple[Target, ...] = (
    Target(
        id="zed",
        display_name="Zed",
        host_application_name="Zed",
        activation_strategy=CommandLineLaunch("zed"),
        brand_color="#084CCF",
    ),
    Target(
        id="vscode",
        display_name="VS Code",
        host_application_name="Visual Studio Code",
        activation_strategy=CommandLineLaunch("code"),
        brand_color="#007ACC",
        aliases=("code", "visual studio code"),
    ),
    Target(
        id="cursor",
        display_name="Cursor",
        host_application_name="Cursor",
        activation_strategy=CommandLineLaunch("cursor"),
        brand_color="#1E1E1E",
    ),
    Target(
        id="windsurf",
        display_name="Windsurf",
        host_application_name="Windsurf",
        activation_strategy=CommandLineLaunch("windsurf"),
        brand_color="#09B6A2",
    ),
    Target(
        id="void",
        display_name="Void",
        host_application_name="Void",
        activation_strategy=CommandLineLaunch("void"),
        brand_color="#4B4BFF",
    ),
    Target(
        id="sublime",
        display_name="Sublime",
        host_application_name="Sublime Text",
        activation_strategy=CommandLineLaunch("subl"),
        brand_color="#FF9800",
        aliases=("sublime text", "subl"),
    ),
    Target(
        id="fleet",
        display_name="Fleet",
        host_application_name="Fleet",
        activation_strategy=CommandLineLaunch("fleet"),
        brand_color="#7B61FF",
    ),
    Target(
        id="nova",
        display_name="Nova",
        host_application_name="Nova",
        activation_strategy=CommandLineLaunch("nova"),
        brand_color="#5E3BE1",
    ),
    Target(
        id="warp",
        display_name="Warp",
        host_application_name="Warp",
        activation_strategy=UrlSchemeLaunch("warp://action/new_tab?path="),
        brand_color="#01A4FF",
    ),
    Target(
        id="terminal",
        display_name="Terminal",
        host_application_name="Terminal",
        activation_strategy=TerminalWindowFocus(),
        is_terminal_class=True,
        brand_color="#3C3C3C",
        aliases=("terminal.app", "apple_terminal"),
    ),
    Target(
        id="iterm",
        display_name="iTerm2",
        host_application_name="iTerm2",
        activation_strategy=TerminalWindowFocus(),
        is_terminal_class=True,
        brand_color="#2BB24C",
        aliases=("iterm.app",),
    ),
    Target(
        id="ghostty",
        display_name="Ghostty",
        host_application_name="Ghostty",
        activation_strategy=TerminalWindowFocus(),
        is_terminal_class=True,
        brand_color="#3551F3",
    ),
)


class TargetRegistry:
    """Exact-key index over a fixed set of targets."""

    def __init__(self, targets: Iterable[Target]) -> None:
        self._targets: dict[str, Target] = {}
        self._keys: dict[str, Target] = {}
        for target in targets:
            if target.id in self._targets:
                raise ValueError(f"Duplicate target id: {target.id}")
            self._targets[target.id] = target
            for key in target.lookup_keys:
                owner = self._keys.get(key)
                if owner is not None and owner.id != target.id:
                    raise ValueError(f"Lookup key {key!r} claimed by {owner.id} and {target.id}")
                self._keys[key] = target

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets.values())

    def __len__(self) -> int:
        return len(self._targets)

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._targets

    def get(self, target_id: str) -> Target:
        return self._targets[target_id]

    def lookup(self, key: str) -> Target | None:
        return self._keys.get(key.strip().lower())


DEFAULT_REGISTRY = TargetRegistry(TARGETS)
