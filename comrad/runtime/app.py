"""Session bootstrap: catalog, state, lookups, router, and terminal wiring.

Builds everything the loop needs and runs it. When stdout is not a terminal
the catalog is printed one name per line instead, so ``comrad | grep`` works.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import termios

from ..catalog import build_catalog
from ..input import ModalKeyRouter, RouterContext
from ..lookup import CommandLookup
from ..render import list_view_rows, text_overlay_body_rows, text_overlay_body_width
from ..state import AppState
from ..terminal import TerminalController
from .config import AppConfig
from .loop import run_main_loop

logger = logging.getLogger(__name__)


class TerminalSetupError(RuntimeError):
    """The controlling terminal cannot be put into interactive mode."""


def build_router(state: AppState, lookup: CommandLookup) -> ModalKeyRouter:
    """Bind ``lookup`` operations and screen geometry into a modal router."""

    def screen_size() -> os.terminal_size:
        return shutil.get_terminal_size((80, 24))

    def fetch_manual(command: str) -> str:
        size = screen_size()
        return lookup.manual(command, width=text_overlay_body_width(size.columns, size.lines))

    return ModalKeyRouter(
        RouterContext(
            state=state,
            fetch_command_help=lookup.command_help,
            fetch_manual=fetch_manual,
            fetch_tldr=lookup.tldr_page,
            open_manual_pager=lookup.open_manual_pager,
            populate_tldr_cache=lookup.populate_tldr_cache,
            list_page_rows=lambda: list_view_rows(screen_size().lines),
            overlay_page_rows=lambda: text_overlay_body_rows(*screen_size()),
        )
    )


def print_catalog(catalog: tuple[str, ...]) -> None:
    """Write one name per line; a reader that closes the pipe early ends the listing."""
    try:
        for name in catalog:
            sys.stdout.write(f"{name}\n")
        sys.stdout.flush()
    except BrokenPipeError:
        logger.debug("stdout closed while printing the catalog")
        # Point stdout at devnull so the interpreter's exit flush stays quiet.
        devnull = os.open(os.devnull, os.O_WRONLY)
        try:
            os.dup2(devnull, sys.stdout.fileno())
        finally:
            os.close(devnull)


def run_app(config: AppConfig, catalog: tuple[str, ...] | None = None) -> int:
    """Initialize session state, wire subsystems, and run the event loop."""
    if catalog is None:
        catalog = build_catalog()

    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdout_fd):
        print_catalog(catalog)
        return 0

    stdin_fd = sys.stdin.fileno()
    if not os.isatty(stdin_fd):
        raise TerminalSetupError("stdin is not a terminal")
    try:
        terminal = TerminalController(stdin_fd, stdout_fd)
    except termios.error as exc:
        raise TerminalSetupError(f"cannot read terminal attributes: {exc}") from exc

    state = AppState(catalog=catalog)
    lookup = CommandLookup(handover=terminal.suspended)
    router = build_router(state, lookup)
    logger.debug("starting session with %d commands", len(catalog))
    run_main_loop(state, terminal, router, config)
    return 0
