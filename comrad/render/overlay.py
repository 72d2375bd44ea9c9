"""Centered boxed panes drawn over the command list.

Each box clears the cells it covers before drawing its frame and body, so
whatever the base list put there never shows through.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import center_ansi_line, display_width, fit_ansi_line
from ..ui_theme import UITheme

TEXT_OVERLAY_MARGIN_X = 2
TEXT_OVERLAY_MARGIN_Y = 1
FILTER_BOX_MIN_WIDTH = 20
CONFIRM_BOX_MAX_WIDTH = 62
APP_HELP_MAX_WIDTH = 72


@dataclass(frozen=True)
class Box:
    """Zero-based screen rectangle including its border."""

    x: int
    y: int
    width: int
    height: int

    @property
    def inner_width(self) -> int:
        return max(0, self.width - 2)

    @property
    def inner_height(self) -> int:
        return max(0, self.height - 2)


def centered_box(screen_width: int, screen_height: int, width: int, height: int) -> Box:
    """Return a box of at most the requested size centered on the screen."""
    width = max(2, min(width, screen_width))
    height = max(2, min(height, screen_height))
    x = max(0, (screen_width - width) // 2)
    y = max(0, (screen_height - height) // 2)
    return Box(x, y, width, height)


def text_overlay_box(screen_width: int, screen_height: int) -> Box:
    return centered_box(
        screen_width,
        screen_height,
        screen_width - 2 * TEXT_OVERLAY_MARGIN_X,
        screen_height - 2 * TEXT_OVERLAY_MARGIN_Y,
    )


def filter_box(screen_width: int, screen_height: int) -> Box:
    width = max(FILTER_BOX_MIN_WIDTH, screen_width * 30 // 100)
    return centered_box(screen_width, screen_height, width, 3)


def confirm_box(screen_width: int, screen_height: int) -> Box:
    return centered_box(screen_width, screen_height, min(CONFIRM_BOX_MAX_WIDTH, screen_width - 2), 6)


def app_help_box(screen_width: int, screen_height: int, body_rows: int) -> Box:
    return centered_box(
        screen_width,
        screen_height,
        min(APP_HELP_MAX_WIDTH, screen_width - 4),
        min(body_rows + 2, screen_height - 2),
    )


def _border_row(left: str, fill: str, right: str, width: int, label: str, theme: UITheme) -> str:
    inner = max(0, width - 2)
    if label and display_width(label) + 2 <= inner:
        pad = inner - display_width(label)
        before = pad // 2
        middle = (
            f"{fill * before}{theme.reset}{theme.overlay_title}{label}{theme.reset}"
            f"{theme.overlay_border}{fill * (pad - before)}"
        )
    else:
        middle = fill * inner
    return f"{theme.overlay_border}{left}{middle}{right}{theme.reset}"


def draw_box(
    box: Box,
    body: list[str],
    theme: UITheme,
    *,
    title: str = "",
    footer: str = "",
    center_body: bool = False,
) -> str:
    """Return positioned ANSI output that clears ``box`` and draws ``body`` inside it."""
    out: list[str] = []
    inner = box.inner_width
    out.append(f"\033[{box.y + 1};{box.x + 1}H")
    out.append(_border_row("╭", "─", "╮", box.width, title, theme))
    for row in range(box.inner_height):
        line = body[row] if row < len(body) else ""
        cell = center_ansi_line(line, inner) if center_body else fit_ansi_line(line, inner)
        out.append(f"\033[{box.y + 2 + row};{box.x + 1}H")
        out.append(f"{theme.overlay_border}│{theme.reset}")
        out.append(cell)
        out.append(f"\033[0m{theme.overlay_border}│{theme.reset}")
    out.append(f"\033[{box.y + box.height};{box.x + 1}H")
    out.append(_border_row("╰", "─", "╯", box.width, footer, theme))
    return "".join(out)
