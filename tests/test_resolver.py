from __future__ import annotations

import pytest

from claude_notify.targets import (
    DEFAULT_REGISTRY,
    CommandLineLaunch,
    Target,
    TargetRegistry,
    TargetResolver,
    TerminalWindowFocus,
    normalize_identifier,
    resolve,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("zed", "zed"),
        ("Zed", "zed"),
        ("  ZED  ", "zed"),
        ("vscode", "vscode"),
        ("code", "vscode"),
        ("VS Code", "vscode"),
        ("Visual Studio Code", "vscode"),
        ("cursor", "cursor"),
        ("windsurf", "windsurf"),
        ("Sublime Text", "sublime"),
        ("warp", "warp"),
        ("Terminal", "terminal"),
        ("Apple_Terminal", "terminal"),
        ("iTerm.app", "iterm"),
        ("iTerm2", "iterm"),
        ("ghostty", "ghostty"),
    ],
)
def test_resolve_canonical_identifiers(raw: str, expected: str) -> None:
    assert resolve(raw).id == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Visual Studio Code - Insiders", "vscode"),
        ("code-insiders", "vscode"),
        ("Cursor Nightly", "cursor"),
        ("zed-preview", "zed"),
        ("Windsurf Next", "windsurf"),
        ("iterm-beta", "iterm"),
        ("com.mitchellh.ghostty", "ghostty"),
    ],
)
def test_resolve_falls_back_to_substring_rules(raw: str, expected: str) -> None:
    assert resolve(raw).id == expected


def test_substring_rules_follow_priority_order_not_alphabetical() -> None:
    # Contains both "cursor" and "zed"; cursor is checked first.
    assert resolve("zed-cursor-bridge").id == "cursor"
    # "code" outranks every later rule.
    assert resolve("ghostty-code").id == "vscode"


@pytest.mark.parametrize("raw", ["", "   ", None, "bogus", "alacritty", "emacs"])
def test_unknown_identifiers_resolve_to_terminal_fallback(raw: str | None) -> None:
    target = resolve(raw)
    assert target.id == "terminal"
    assert target.is_terminal_class is True


def test_exact_match_wins_over_overlapping_substring_rule() -> None:
    xcode_terminal = Target(
        id="xcode-term",
        display_name="Xcode Terminal",
        host_application_name="Xcode Terminal",
        activation_strategy=TerminalWindowFocus(),
        is_terminal_class=True,
    )
    registry = TargetRegistry([*DEFAULT_REGISTRY, xcode_terminal])
    resolver = TargetResolver(registry)

    assert resolver.resolve("Xcode Terminal") is xcode_terminal
    assert resolver.resolve("xcode-term") is xcode_terminal
    assert resolver.resolve("xcode").id == "vscode"


def test_resolver_skips_rules_for_unregistered_targets() -> None:
    terminal = DEFAULT_REGISTRY.get("terminal")
    registry = TargetRegistry([terminal])
    resolver = TargetResolver(registry)

    assert resolver.resolve("cursor") is terminal
    assert resolver.rules == ()


def test_resolver_requires_registered_fallback() -> None:
    zed = DEFAULT_REGISTRY.get("zed")
    with pytest.raises(ValueError, match="Fallback"):
        TargetResolver(TargetRegistry([zed]))


def test_registry_rejects_keys_claimed_twice() -> None:
    first = Target("a", "Shared", "A", CommandLineLaunch("a"))
    second = Target("b", "shared", "B", CommandLineLaunch("b"))
    with pytest.raises(ValueError, match="shared"):
        TargetRegistry([first, second])


def test_normalize_identifier_collapses_whitespace() -> None:
    assert normalize_identifier("  Visual   Studio\tCode ") == "visual studio code"
    assert normalize_identifier(None) == ""
