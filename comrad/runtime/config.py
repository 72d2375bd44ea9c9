"""Runtime settings resolved from command-line flags.

comrad keeps no configuration files; everything adjustable arrives through
the CLI and is frozen into ``AppConfig`` for the lifetime of one run.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..highlight import DEFAULT_STYLE, normalize_style
from ..ui_theme import UITheme, normalize_theme_name, resolve_theme

DEFAULT_POLL_TIMEOUT_MS = 200


@dataclass(frozen=True)
class AppConfig:
    theme_name: str = "default"
    style: str = DEFAULT_STYLE
    no_color: bool = False
    poll_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS

    @classmethod
    def from_options(cls, theme: str | None, style: str | None, no_color: bool) -> AppConfig:
        """Build a config, replacing unknown theme/style names with defaults."""
        return cls(
            theme_name=normalize_theme_name(theme),
            style=normalize_style(style),
            no_color=bool(no_color),
        )

    @property
    def theme(self) -> UITheme:
        return resolve_theme(self.theme_name, no_color=self.no_color)

    @property
    def highlight(self) -> bool:
        return not self.no_color
