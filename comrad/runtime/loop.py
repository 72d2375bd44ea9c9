"""Main interactive event loop for the terminal UI.

One iteration: fit the list viewport to the terminal, render when something
changed, then wait for a key and hand it to the modal router.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable

from ..input import ModalKeyRouter, read_key
from ..render import RenderContext, list_view_rows, render_frame
from ..state import AppState
from ..terminal import TerminalController
from .config import AppConfig

logger = logging.getLogger(__name__)

TerminalSize = Callable[..., os.terminal_size]


def build_render_context(state: AppState, config: AppConfig, size: os.terminal_size) -> RenderContext:
    """Snapshot ``state`` into the read-only view the renderer consumes."""
    return RenderContext(
        width=size.columns,
        height=size.lines,
        commands=state.filtered_commands(),
        catalog_size=len(state.catalog),
        selected=state.selected,
        list_start=state.list_start,
        query=state.query,
        mode=state.mode,
        status_message=state.status_message,
        theme=config.theme,
        style=config.style,
        highlight=config.highlight,
    )


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    router: ModalKeyRouter,
    config: AppConfig,
    terminal_size: TerminalSize = shutil.get_terminal_size,
) -> None:
    """Run the interactive loop until the router sets the exit flag."""
    last_size: os.terminal_size | None = None
    with terminal.raw_mode():
        while not state.exit_requested:
            size = terminal_size((80, 24))
            if size != last_size:
                last_size = size
                state.dirty = True
            state.clamp_selection()
            state.sync_list_viewport(list_view_rows(size.lines))

            if state.dirty:
                render_frame(build_render_context(state, config, size), terminal.stdout_fd)
                state.dirty = False

            try:
                key = read_key(terminal.stdin_fd, timeout_ms=config.poll_timeout_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            logger.debug("key %r in %s", key, type(state.mode).__name__)
            router.handle_key(key)
