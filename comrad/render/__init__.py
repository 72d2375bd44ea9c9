"""Frame composition for the command list and its overlays.

``build_frame`` turns a ``RenderContext`` snapshot into one ANSI string:
the title row, the filtered command rows, the footer, then at most one
overlay picked by the UI mode. ``render_frame`` only writes that string.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass

from ..ansi import center_ansi_line, fit_ansi_line
from ..highlight import DEFAULT_STYLE, highlight_help_text, sanitize_inline_text
from ..modes import AppHelp, FilterEdit, TextOverlay, TldrConfirm, UIMode
from ..ui_theme import DEFAULT_THEME, UITheme
from .help import app_help_lines, footer_bindings, format_footer
from .overlay import (
    app_help_box,
    confirm_box,
    draw_box,
    filter_box,
    text_overlay_box,
)

SELECTION_MARKER = ">> "
NO_CONTENT_MESSAGE = "No content available"
EMPTY_CATALOG_MESSAGE = "No commands found on PATH"
NO_MATCHES_MESSAGE = "No commands match the filter"
APP_HELP_CLOSE_HINT = " Press Esc to close "
CONFIRM_LINES = (
    "The command is not in the TLDR cache.",
    "Press Y to add it to the cache (it might take a while)",
)


@dataclass(frozen=True)
class RenderContext:
    width: int
    height: int
    commands: list[str]
    catalog_size: int
    selected: int
    list_start: int
    query: str
    mode: UIMode
    status_message: str = ""
    theme: UITheme = DEFAULT_THEME
    style: str = DEFAULT_STYLE
    highlight: bool = True


def list_view_rows(height: int) -> int:
    """Rows available for commands between the title and footer rows."""
    return max(1, height - 2)


def text_overlay_body_rows(width: int, height: int) -> int:
    return max(1, text_overlay_box(width, height).inner_height)


def text_overlay_body_width(width: int, height: int) -> int:
    return max(1, text_overlay_box(width, height).inner_width)


@functools.lru_cache(maxsize=16)
def _overlay_lines(text: str, style: str, enabled: bool) -> tuple[str, ...]:
    return tuple(highlight_help_text(text, style=style, enabled=enabled))


def _title_row(context: RenderContext) -> str:
    theme = context.theme
    title = f"{theme.title} COMRAD {theme.reset}"
    if context.query:
        count = len(context.commands)
        title += f"{theme.footer_text}· {count}/{context.catalog_size} ·{theme.reset}"
    return center_ansi_line(title, context.width)


def _list_rows(context: RenderContext) -> list[str]:
    theme = context.theme
    rows = list_view_rows(context.height)
    if not context.commands:
        message = EMPTY_CATALOG_MESSAGE if context.catalog_size == 0 else NO_MATCHES_MESSAGE
        lines = [f"{theme.help_dim}{' ' * len(SELECTION_MARKER)}{message}{theme.reset}"]
        return [fit_ansi_line(line, context.width) for line in lines] + [" " * context.width] * (rows - 1)

    out: list[str] = []
    for offset in range(rows):
        idx = context.list_start + offset
        if idx >= len(context.commands):
            out.append(" " * context.width)
            continue
        name = sanitize_inline_text(context.commands[idx])
        if idx == context.selected:
            text = fit_ansi_line(f"{SELECTION_MARKER}{name}", context.width)
            out.append(f"{theme.list_selected}{text}{theme.reset}")
        else:
            text = fit_ansi_line(f"{' ' * len(SELECTION_MARKER)}{name}", context.width)
            out.append(f"{theme.list_item}{text}{theme.reset}")
    return out


def _footer_row(context: RenderContext) -> str:
    theme = context.theme
    if context.status_message:
        line = f"{theme.status_error} {sanitize_inline_text(context.status_message)}{theme.reset}"
        return fit_ansi_line(line, context.width)
    return center_ansi_line(format_footer(footer_bindings(context.mode), theme), context.width)


def _filter_overlay(context: RenderContext) -> str:
    theme = context.theme
    box = filter_box(context.width, context.height)
    cursor = "\033[7m \033[0m"
    body = [f"{theme.filter_query}{context.query}{theme.reset}{cursor}"]
    return draw_box(box, body, theme, title=" Filter ")


def _text_overlay(context: RenderContext, overlay: TextOverlay) -> str:
    theme = context.theme
    box = text_overlay_box(context.width, context.height)
    text = overlay.text if overlay.text.strip() else NO_CONTENT_MESSAGE
    lines = _overlay_lines(text, context.style, context.highlight)
    visible = max(1, box.inner_height)
    scroll = max(0, min(overlay.scroll, max(0, len(lines) - visible)))
    body = list(lines[scroll : scroll + visible])
    footer = ""
    if len(lines) > visible:
        footer = f" {scroll + 1}-{min(len(lines), scroll + visible)}/{len(lines)} "
    return draw_box(box, body, theme, title=f" {sanitize_inline_text(overlay.command)} ", footer=footer)


def _confirm_overlay(context: RenderContext) -> str:
    theme = context.theme
    box = confirm_box(context.width, context.height)
    body = [""] + [f"{theme.confirm_text}{line}{theme.reset}" for line in CONFIRM_LINES]
    return draw_box(box, body, theme, title=" Warning ", center_body=True)


def _app_help_overlay(context: RenderContext) -> str:
    theme = context.theme
    body = app_help_lines(theme)
    box = app_help_box(context.width, context.height, len(body))
    return draw_box(box, body, theme, title=" Comrad Help ", footer=APP_HELP_CLOSE_HINT)


def overlay_for_mode(context: RenderContext) -> str:
    """Return overlay output for the active mode, or ``""`` for none."""
    mode = context.mode
    if isinstance(mode, FilterEdit):
        return _filter_overlay(context)
    if isinstance(mode, TextOverlay):
        return _text_overlay(context, mode)
    if isinstance(mode, TldrConfirm):
        return _confirm_overlay(context)
    if isinstance(mode, AppHelp):
        return _app_help_overlay(context)
    return ""


def build_frame(context: RenderContext) -> str:
    """Compose the full screen for ``context``."""
    rows = [_title_row(context), *_list_rows(context), _footer_row(context)]
    out: list[str] = ["\033[H"]
    for row_idx, row in enumerate(rows[: max(1, context.height)]):
        out.append(f"\033[{row_idx + 1};1H")
        out.append(row)
        out.append("\033[0m")
    out.append(overlay_for_mode(context))
    return "".join(out)


def render_frame(context: RenderContext, fd: int) -> None:
    """Write one composed frame to ``fd``."""
    os.write(fd, build_frame(context).encode("utf-8", errors="replace"))


__all__ = [
    "APP_HELP_CLOSE_HINT",
    "CONFIRM_LINES",
    "EMPTY_CATALOG_MESSAGE",
    "NO_CONTENT_MESSAGE",
    "NO_MATCHES_MESSAGE",
    "RenderContext",
    "SELECTION_MARKER",
    "build_frame",
    "list_view_rows",
    "overlay_for_mode",
    "render_frame",
    "text_overlay_body_rows",
    "text_overlay_body_width",
]
