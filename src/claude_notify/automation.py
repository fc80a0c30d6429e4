"""macOS automation helpers: osascript, /usr/bin/open and CLI launches."""

from __future__ import annotations

import logging as py_logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass

logger = py_logging.getLogger(__name__)

OSASCRIPT = "/usr/bin/osascript"
OPEN = "/usr/bin/open"
ENV = "/usr/bin/env"
AFPLAY = "/usr/bin/afplay"
PERMISSION_SOUND = "/System/Library/Sounds/Ping.aiff"
COMPLETION_SOUND = "/System/Library/Sounds/Glass.aiff"
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    returncode: int
    stdout: str = ""
    error: str = ""


def run_command(
    argv: Sequence[str],
    *,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> CommandResult:
    """Run ``argv`` to completion and capture stdout; never raises."""
    command = list(argv)
    try:
        completed = runner(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        logger.debug("automation command-not-found command=%s", command[0])
        return CommandResult(ok=False, returncode=127, error=f"command not found: {command[0]}")
    except subprocess.TimeoutExpired:
        logger.warning("automation command-timeout timeout=%s command=%s", timeout, command[0])
        return CommandResult(ok=False, returncode=124, error="command timed out")
    except OSError as exc:
        logger.debug("automation command-failed command=%s", command[0], exc_info=True)
        return CommandResult(ok=False, returncode=126, error=str(exc))

    stdout = (completed.stdout or "").strip()
    if completed.returncode != 0:
        error = (completed.stderr or "").strip() or f"exit code {completed.returncode}"
        logger.debug(
            "automation command-exit code=%s command=%s error=%s",
            completed.returncode,
            command[0],
            error,
        )
        return CommandResult(ok=False, returncode=completed.returncode, stdout=stdout, error=error)
    return CommandResult(ok=True, returncode=0, stdout=stdout)


def applescript_quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def build_activate_script(app_name: str) -> str:
    return f"tell application {applescript_quote(app_name)} to activate"


def _iterm_tty_script(tty_key: str) -> str:
    return f"""
tell application "iTerm2"
    repeat with w in windows
        repeat with t in tabs of w
            repeat with s in sessions of t
                if tty of s contains {applescript_quote(tty_key)} then
                    tell t to select
                    tell s to select
                    set index of w to 1
                    activate
                    return "true"
                end if
            end repeat
        end repeat
    end repeat
end tell
return "false"
"""


def _terminal_tty_script(tty_key: str) -> str:
    return f"""
tell application "Terminal"
    repeat with w in windows
        repeat with t in tabs of w
            if tty of t contains {applescript_quote(tty_key)} then
                set selected tab of w to t
                set index of w to 1
                activate
                return "true"
            end if
        end repeat
    end repeat
end tell
return "false"
"""


# Host applications whose scripting dictionary exposes a per-tab tty.
_TTY_SCRIPT_BUILDERS: dict[str, Callable[[str], str]] = {
    "iTerm2": _iterm_tty_script,
    "Terminal": _terminal_tty_script,
}


def build_tty_focus_script(app_name: str, tty_key: str) -> str | None:
    builder = _TTY_SCRIPT_BUILDERS.get(app_name)
    if builder is None:
        return None
    return builder(tty_key)


class MacAutomation:
    """Blocking adapters over the OS automation interfaces."""

    def __init__(
        self,
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        popen: Callable[..., object] = subprocess.Popen,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._runner = runner
        self._popen = popen
        self.timeout = timeout

    def _osascript(self, script: str) -> CommandResult:
        return run_command([OSASCRIPT, "-e", script], runner=self._runner, timeout=self.timeout)

    def activate(self, app_name: str) -> bool:
        result = self._osascript(build_activate_script(app_name))
        logger.debug("automation activate app=%s ok=%s", app_name, result.ok)
        return result.ok

    def focus_tty(self, app_name: str, tty_key: str) -> bool:
        script = build_tty_focus_script(app_name, tty_key)
        if script is None:
            logger.debug("automation tty-focus-unsupported app=%s", app_name)
            return False
        result = self._osascript(script)
        focused = result.ok and result.stdout == "true"
        logger.debug("automation tty-focus app=%s tty=%s focused=%s", app_name, tty_key, focused)
        return focused

    def launch(self, command: str, path: str) -> bool:
        result = run_command([ENV, command, path], runner=self._runner, timeout=self.timeout)
        logger.debug("automation launch command=%s ok=%s", command, result.ok)
        return result.ok

    def open_url(self, url: str) -> bool:
        result = run_command([OPEN, url], runner=self._runner, timeout=self.timeout)
        logger.debug("automation open-url ok=%s", result.ok)
        return result.ok

    def play_sound(self, *, permission: bool) -> None:
        sound = PERMISSION_SOUND if permission else COMPLETION_SOUND
        try:
            self._popen(
                [AFPLAY, sound],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            logger.debug("automation sound-failed sound=%s", sound, exc_info=True)
