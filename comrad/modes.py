"""UI mode values for the interactive session.

Exactly one mode is active at a time because ``AppState.mode`` holds a single
value of the ``UIMode`` union. Overlay modes carry the content they display,
so switching modes also switches (or drops) that content.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union


@dataclass(frozen=True)
class Browse:
    """Plain list navigation."""


@dataclass(frozen=True)
class FilterEdit:
    """Live editing of the filter query."""


@dataclass(frozen=True)
class AppHelp:
    """Key-binding reference for comrad itself."""


@dataclass(frozen=True)
class TextOverlay:
    """Base for overlays that show fetched text for one command."""

    command: str
    text: str
    scroll: int = 0

    label = "text"

    def scrolled(self, scroll: int) -> TextOverlay:
        return replace(self, scroll=max(0, scroll))


@dataclass(frozen=True)
class CommandHelpOverlay(TextOverlay):
    label = "--help"


@dataclass(frozen=True)
class ManOverlay(TextOverlay):
    label = "man"


@dataclass(frozen=True)
class TldrOverlay(TextOverlay):
    label = "tldr"


@dataclass(frozen=True)
class TldrConfirm:
    """Prompt asking whether to fetch a missing tldr page."""

    command: str


@dataclass(frozen=True)
class ManEnter:
    """The external manual pager owns the terminal."""

    command: str


UIMode = Union[
    Browse,
    FilterEdit,
    AppHelp,
    CommandHelpOverlay,
    ManOverlay,
    TldrOverlay,
    TldrConfirm,
    ManEnter,
]

BROWSE = Browse()
FILTER_EDIT = FilterEdit()
APP_HELP = AppHelp()


def is_overlay(mode: UIMode) -> bool:
    """Return whether ``mode`` draws something above the base list."""
    return not isinstance(mode, (Browse, ManEnter))


__all__ = [
    "APP_HELP",
    "AppHelp",
    "BROWSE",
    "Browse",
    "CommandHelpOverlay",
    "FILTER_EDIT",
    "FilterEdit",
    "ManEnter",
    "ManOverlay",
    "TextOverlay",
    "TldrConfirm",
    "TldrOverlay",
    "UIMode",
    "is_overlay",
]
