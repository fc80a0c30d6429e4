"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import NotifySettings, load_settings
from .errors import ExitCode, NotifyError, user_facing_error
from .logging import configure_logging, default_log_path, normalize_level
from .session import PERMISSION_MODE, AlertMode, AlertRequest
from .targets import Target, resolve

DEFAULT_RUNTIME = "Claude"
DEFAULT_PROJECT_NAME = "Project"
DEFAULT_TARGET = "Terminal"
_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

AlertLauncher = Callable[[AlertRequest, NotifySettings], int | None]


def _log_level_type(value: str) -> str:
    normalized = normalize_level(value)
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-notify",
        description="Show a stacked desktop alert with an open-project action.",
    )
    parser.add_argument("runtime", nargs="?", default=DEFAULT_RUNTIME)
    parser.add_argument("project_name", nargs="?", default=DEFAULT_PROJECT_NAME)
    parser.add_argument("project_path", nargs="?", default="")
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Editor or terminal to open (default: configured editors, else Terminal)",
    )
    parser.add_argument("tty", nargs="?", default="none", help="TTY device path, or 'none'")
    parser.add_argument("mode", nargs="?", default="", help="'permission' for approval alerts")
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def _extract_mode(namespace: argparse.Namespace) -> AlertMode:
    # Older hooks pass "permission" right after the project path.
    is_permission = False
    if (namespace.mode or "").strip().lower() == PERMISSION_MODE:
        is_permission = True
    if (namespace.tty or "").strip().lower() == PERMISSION_MODE:
        namespace.tty = "none"
        is_permission = True
    if (namespace.target or "").strip().lower() == PERMISSION_MODE:
        namespace.target = None
        is_permission = True
    return AlertMode.PERMISSION if is_permission else AlertMode.COMPLETION


def select_targets(identifier: str | None, settings: NotifySettings) -> tuple[Target, ...]:
    if identifier is not None and identifier.strip():
        return (resolve(identifier),)
    if settings.editors:
        return tuple(settings.editor_targets())
    return (resolve(DEFAULT_TARGET),)


def build_request(namespace: argparse.Namespace, settings: NotifySettings) -> AlertRequest:
    mode = _extract_mode(namespace)
    return AlertRequest(
        runtime=namespace.runtime,
        project_name=namespace.project_name,
        project_path=namespace.project_path,
        tty_id=namespace.tty,
        mode=mode,
        targets=select_targets(namespace.target, settings),
    )


def launch_alert(request: AlertRequest, settings: NotifySettings) -> int:
    from claude_notify.ui.alert import show_alert

    return show_alert(request, settings)


def main(
    argv: Sequence[str] | None = None,
    *,
    alert_launcher: AlertLauncher | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    settings = load_settings(namespace.config)
    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level or settings.log_level, log_file=log_path)

    try:
        request = build_request(namespace, settings)
        logger.debug(
            "Starting alert runtime=%s project=%s targets=%s tty=%s mode=%s",
            request.runtime,
            request.project_name,
            ",".join(target.id for target in request.targets),
            request.tty_id,
            request.mode.value,
        )
        launcher = alert_launcher or launch_alert
        result = launcher(request, settings)
        if isinstance(result, int):
            return result
        return int(ExitCode.SUCCESS)
    except NotifyError as exc:
        logger.error(
            "Handled NotifyError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        try:
            hint = f"Inspect logs: {log_path}"
            print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        except Exception:
            pass
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
