"""Key-binding text for the footer row and the application help overlay.

The vertical keys follow the usual pager convention: ``j``/Down moves to the
next command and ``k``/Up to the previous one. Everything that describes a
binding to the user reads from this module so the texts cannot drift apart.
Each footer fits an 80-column terminal without clipping.
"""

from __future__ import annotations

from ..modes import AppHelp, FilterEdit, TextOverlay, TldrConfirm, UIMode
from ..ui_theme import UITheme

BROWSE_FOOTER: tuple[tuple[str, str], ...] = (
    ("Move", "j/k"),
    ("Help", "H"),
    ("--help", "h"),
    ("man", "m/M"),
    ("tldr", "t"),
    ("Filter", "/"),
    ("Quit", "q"),
)

FILTER_FOOTER: tuple[tuple[str, str], ...] = (
    ("Exit filter", "Esc/Enter"),
    ("Clear", "Ctrl+U"),
)

TEXT_OVERLAY_FOOTER: tuple[tuple[str, str], ...] = (
    ("Scroll", "j/k"),
    ("Page", "PgUp/PgDn"),
    ("Top/Bottom", "g/G"),
    ("Close", "Esc"),
)

CONFIRM_FOOTER: tuple[tuple[str, str], ...] = (
    ("Fetch page", "y"),
    ("Cancel", "any other key"),
)

APP_HELP_FOOTER: tuple[tuple[str, str], ...] = (("Close", "Esc"),)

APP_HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Navigation",
        (
            ("j / Down", "move down to the next command"),
            ("k / Up", "move up to the previous command"),
            ("g / Home", "go to the first command"),
            ("G / End", "go to the last command"),
            ("PgDn / PgUp", "move one page (also Ctrl+D / Ctrl+U)"),
        ),
    ),
    (
        "Filter",
        (
            ("/", "edit the filter query"),
            ("Enter / Esc", "leave the filter and select the first match"),
            ("Ctrl+U", "clear the query while editing"),
        ),
    ),
    (
        "Lookups",
        (
            ("h", "show the --help output of the command"),
            ("m", "show the man page of the command"),
            ("M", "open the man page in the man pager"),
            ("t", "show the tldr page (offers to fetch it when missing)"),
            ("j / k, g / G", "scroll an open page"),
        ),
    ),
    (
        "General",
        (
            ("H / ?", "show this help"),
            ("Esc", "close the open pane"),
            ("q", "quit comrad"),
        ),
    ),
)


def footer_bindings(mode: UIMode) -> tuple[tuple[str, str], ...]:
    """Return the (label, key) pairs relevant to ``mode``."""
    if isinstance(mode, FilterEdit):
        return FILTER_FOOTER
    if isinstance(mode, TextOverlay):
        return TEXT_OVERLAY_FOOTER
    if isinstance(mode, TldrConfirm):
        return CONFIRM_FOOTER
    if isinstance(mode, AppHelp):
        return APP_HELP_FOOTER
    return BROWSE_FOOTER


def format_footer(bindings: tuple[tuple[str, str], ...], theme: UITheme) -> str:
    parts = [
        f"{theme.footer_text} {label} {theme.reset}{theme.footer_key}<{key}>{theme.reset}"
        for label, key in bindings
    ]
    return " ".join(parts)


def app_help_lines(theme: UITheme) -> list[str]:
    """Return styled body lines for the application help overlay.

    Sections are packed without spacer rows so the whole reference fits the
    inner height of a 24-row terminal.
    """
    key_width = max(len(keys) for _title, rows in APP_HELP_SECTIONS for keys, _desc in rows)
    lines: list[str] = []
    for title, rows in APP_HELP_SECTIONS:
        lines.append(f"{theme.help_heading}{title}{theme.reset}")
        for keys, description in rows:
            lines.append(f"  {theme.help_key}{keys.ljust(key_width)}{theme.reset}  {description}")
    return lines
