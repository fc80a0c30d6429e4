from __future__ import annotations

from claude_notify.targets import (
    DEFAULT_EDITOR_ID,
    DEFAULT_REGISTRY,
    FALLBACK_TARGET_ID,
    CommandLineLaunch,
    TerminalWindowFocus,
    UrlSchemeLaunch,
)


def test_registry_contains_editor_and_terminal_catalog() -> None:
    ids = [target.id for target in DEFAULT_REGISTRY]
    assert ids == [
        "zed",
        "vscode",
        "cursor",
        "windsurf",
        "void",
        "sublime",
        "fleet",
        "nova",
        "warp",
        "terminal",
        "iterm",
        "ghostty",
    ]
    assert DEFAULT_EDITOR_ID in DEFAULT_REGISTRY
    assert FALLBACK_TARGET_ID in DEFAULT_REGISTRY


def test_terminal_class_targets_use_window_focus() -> None:
    for target in DEFAULT_REGISTRY:
        if target.is_terminal_class:
            assert isinstance(target.activation_strategy, TerminalWindowFocus)
            assert target.opens_project_path is False
        else:
            assert target.opens_project_path is True


def test_editor_commands_match_their_cli_tools() -> None:
    commands = {
        target.id: target.activation_strategy.command
        for target in DEFAULT_REGISTRY
        if isinstance(target.activation_strategy, CommandLineLaunch)
    }
    assert commands["vscode"] == "code"
    assert commands["sublime"] == "subl"
    assert commands["zed"] == "zed"


def test_host_application_names_address_macos_apps() -> None:
    assert DEFAULT_REGISTRY.get("vscode").host_application_name == "Visual Studio Code"
    assert DEFAULT_REGISTRY.get("sublime").host_application_name == "Sublime Text"
    assert DEFAULT_REGISTRY.get("iterm").host_application_name == "iTerm2"


def test_url_scheme_percent_encodes_project_path() -> None:
    strategy = DEFAULT_REGISTRY.get("warp").activation_strategy
    assert isinstance(strategy, UrlSchemeLaunch)
    url = strategy.build_url("/Users/x/My Projects/app#1")
    assert url == "warp://action/new_tab?path=/Users/x/My%20Projects/app%231"


def test_lookup_is_exact_and_case_insensitive() -> None:
    assert DEFAULT_REGISTRY.lookup(" VS Code ").id == "vscode"
    assert DEFAULT_REGISTRY.lookup("code").id == "vscode"
    assert DEFAULT_REGISTRY.lookup("code-insiders") is None
