"""Target descriptors and activation strategies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
from urllib.parse import quote

# Mirrors the URL path allowed character set used by macOS launch services.
_URL_PATH_SAFE = "/:@!$&'()*+,;="


@dataclass(frozen=True)
class CommandLineLaunch:
    command: str


@dataclass(frozen=True)
class UrlSchemeLaunch:
    scheme: str

    def build_url(self, path: str) -> str:
        return self.scheme + quote(path, safe=_URL_PATH_SAFE)


@dataclass(frozen=True)
class TerminalWindowFocus:
    pass


ActivationStrategy = Union[CommandLineLaunch, UrlSchemeLaunch, TerminalWindowFocus]


@dataclass(frozen=True)
class Target:
    id: str
    display_name: str
    host_application_name: str
    activation_strategy: ActivationStrategy
    is_terminal_class: bool = False
    brand_color: str = ""
    aliases: tuple[str, ...] = ()

    @property
    def lookup_keys(self) -> tuple[str, ...]:
        keys: list[str] = []
        for value in (self.id, self.display_name, *self.aliases):
            key = value.strip().lower()
            if key and key not in keys:
                keys.append(key)
        return tuple(keys)

    @property
    def opens_project_path(self) -> bool:
        return isinstance(self.activation_strategy, (CommandLineLaunch, UrlSchemeLaunch))
