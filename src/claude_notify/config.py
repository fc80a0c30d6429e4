"""Per-user ``KEY=value`` config loading."""

from __future__ import annotations

import logging as py_logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

from claude_notify.targets import DEFAULT_EDITOR_ID, DEFAULT_REGISTRY, Target, TargetRegistry

logger = py_logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/claude-notify/config")
CONFIG_PATH_ENV = "CLAUDE_NOTIFY_CONFIG"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL: Literal["DEBUG", "INFO", "WARN", "ERROR"] = "INFO"
MAX_TIMEOUT_SECONDS = 3600.0

_MULTI_EDITOR_KEY = "EDITORS"
_SINGLE_EDITOR_KEY = "EDITOR"
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARN", "ERROR"}


class NotifySettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    editors: list[str] = Field(default_factory=list)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, le=MAX_TIMEOUT_SECONDS)
    log_level: Literal["DEBUG", "INFO", "WARN", "ERROR"] = DEFAULT_LOG_LEVEL

    @field_validator("editors")
    @classmethod
    def _validate_editors(cls, value: list[str]) -> list[str]:
        unknown = [item for item in value if item not in DEFAULT_REGISTRY]
        if unknown:
            raise ValueError(f"Unknown editor ids: {', '.join(unknown)}")
        return value

    def editor_targets(self, registry: TargetRegistry = DEFAULT_REGISTRY) -> list[Target]:
        if not self.editors:
            return [registry.get(DEFAULT_EDITOR_ID)]
        return [registry.get(target_id) for target_id in self.editors]


def get_config_path(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Path:
    if path is not None:
        return Path(path).expanduser()
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def _split_line(line: str) -> tuple[str, str] | None:
    trimmed = line.strip()
    if not trimmed or trimmed.startswith("#") or "=" not in trimmed:
        return None
    key, _, value = trimmed.partition("=")
    return key.strip().upper(), value.strip()


def parse_editor_targets(
    text: str,
    registry: TargetRegistry = DEFAULT_REGISTRY,
) -> list[Target] | None:
    """Return the targets named by the first usable EDITORS/EDITOR line.

    ``EDITORS`` holds a comma separated list and keeps every known entry in
    order; ``EDITOR`` is the older single-value form. Lines whose identifiers
    are all unknown are skipped so a later line can still apply.
    """
    for line in text.splitlines():
        parsed = _split_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if key == _MULTI_EDITOR_KEY:
            targets: list[Target] = []
            for item in value.split(","):
                target = registry.lookup(item)
                if target is None:
                    if item.strip():
                        logger.debug("config unknown-editor value=%r", item.strip())
                    continue
                if target not in targets:
                    targets.append(target)
            if targets:
                return targets
        elif key == _SINGLE_EDITOR_KEY:
            target = registry.lookup(value)
            if target is not None:
                return [target]
            logger.debug("config unknown-editor value=%r", value)
    return None


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError):
        logger.warning("config read-failed path=%s", path, exc_info=True)
        return None


def _sanitize(text: str) -> NotifySettings:
    cfg = NotifySettings()

    targets = parse_editor_targets(text)
    if targets:
        cfg.editors = [target.id for target in targets]

    for line in text.splitlines():
        parsed = _split_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if key == "TIMEOUT":
            try:
                timeout = float(value)
            except ValueError:
                logger.debug("config invalid-timeout value=%r", value)
                continue
            if 0 < timeout <= MAX_TIMEOUT_SECONDS:
                cfg.timeout_seconds = timeout
        elif key == "LOG_LEVEL":
            level = value.upper()
            if level == "WARNING":
                level = "WARN"
            if level in _VALID_LOG_LEVELS:
                cfg.log_level = cast(Literal["DEBUG", "INFO", "WARN", "ERROR"], level)

    return cfg


def load_settings(path: str | Path | None = None) -> NotifySettings:
    text = _read_text(get_config_path(path))
    if text is None:
        return NotifySettings()
    return _sanitize(text)
