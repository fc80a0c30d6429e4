"""Editor and terminal target catalog."""

from .models import (
    ActivationStrategy,
    CommandLineLaunch,
    Target,
    TerminalWindowFocus,
    UrlSchemeLaunch,
)
from .registry import DEFAULT_EDITOR_ID, DEFAULT_REGISTRY, FALLBACK_TARGET_ID, TargetRegistry
from .resolver import SUBSTRING_RULES, TargetResolver, normalize_identifier, resolve

__all__ = [
    "ActivationStrategy",
    "CommandLineLaunch",
    "DEFAULT_EDITOR_ID",
    "DEFAULT_REGISTRY",
    "FALLBACK_TARGET_ID",
    "normalize_identifier",
    "resolve",
    "SUBSTRING_RULES",
    "Target",
    "TargetRegistry",
    "TargetResolver",
    "TerminalWindowFocus",
    "UrlSchemeLaunch",
]
