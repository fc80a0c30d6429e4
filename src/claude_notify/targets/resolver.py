"""Map free-form editor/terminal identifiers to registry targets.

Callers hand us whatever they found in argv or the environment: ``"Zed"``,
``"iTerm.app"``, ``"Visual Studio Code - Insiders"``. Resolution is total.
An exact key match is tried first, then the ordered substring rules, and
anything left over becomes the generic terminal.
"""

from __future__ import annotations

import logging as py_logging

from .models import Target
from .registry import DEFAULT_REGISTRY, FALLBACK_TARGET_ID, TargetRegistry

logger = py_logging.getLogger(__name__)

# Checked in order; the first needle contained in the identifier wins.
SUBSTRING_RULES: tuple[tuple[str, str], ...] = (
    ("visual studio", "vscode"),
    ("vscode", "vscode"),
    ("vs code", "vscode"),
    ("code", "vscode"),
    ("cursor", "cursor"),
    ("zed", "zed"),
    ("windsurf", "windsurf"),
    ("iterm", "iterm"),
    ("ghostty", "ghostty"),
)


def normalize_identifier(raw: str | None) -> str:
    if not raw:
        return ""
    return " ".join(raw.split()).lower()


class TargetResolver:
    def __init__(
        self,
        registry: TargetRegistry = DEFAULT_REGISTRY,
        *,
        rules: tuple[tuple[str, str], ...] = SUBSTRING_RULES,
        fallback_id: str = FALLBACK_TARGET_ID,
    ) -> None:
        if fallback_id not in registry:
            raise ValueError(f"Fallback target is not registered: {fallback_id}")
        self.registry = registry
        self.rules = tuple((needle, target_id) for needle, target_id in rules if target_id in registry)
        self.fallback = registry.get(fallback_id)

    def resolve(self, raw: str | None) -> Target:
        normalized = normalize_identifier(raw)
        if not normalized:
            logger.debug("resolve empty-identifier target=%s", self.fallback.id)
            return self.fallback

        exact = self.registry.lookup(normalized)
        if exact is not None:
            logger.debug("resolve exact raw=%r target=%s", raw, exact.id)
            return exact

        for needle, target_id in self.rules:
            if needle in normalized:
                logger.debug("resolve substring raw=%r needle=%s target=%s", raw, needle, target_id)
                return self.registry.get(target_id)

        logger.debug("resolve fallback raw=%r target=%s", raw, self.fallback.id)
        return self.fallback


_DEFAULT_RESOLVER = TargetResolver()


def resolve(raw: str | None) -> Target:
    return _DEFAULT_RESOLVER.resolve(raw)
