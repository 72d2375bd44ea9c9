"""Modal key routing: one dispatch table per UI mode.

The router looks at ``state.mode`` before every key and hands the key to that
mode's table only, so a key can never act on a mode that is not showing.
Lookups and terminal handovers are injected callables; the router itself only
decides transitions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..modes import (
    APP_HELP,
    BROWSE,
    FILTER_EDIT,
    AppHelp,
    Browse,
    CommandHelpOverlay,
    FilterEdit,
    ManEnter,
    ManOverlay,
    TextOverlay,
    TldrConfirm,
    TldrOverlay,
)
from ..state import AppState
from .key_registry import KeyBinding, KeyRegistry

logger = logging.getLogger(__name__)

NEXT_KEYS = ("j", "DOWN")
PREVIOUS_KEYS = ("k", "UP")


@dataclass(frozen=True)
class RouterContext:
    """State and bound operations required by the modal router."""

    state: AppState
    fetch_command_help: Callable[[str], str]
    fetch_manual: Callable[[str], str]
    fetch_tldr: Callable[[str], str | None]
    open_manual_pager: Callable[[str], str | None]
    populate_tldr_cache: Callable[[str], str | None]
    list_page_rows: Callable[[], int]
    overlay_page_rows: Callable[[], int]


class ModalKeyRouter:
    """Dispatch decoded key tokens according to the active UI mode."""

    def __init__(self, context: RouterContext) -> None:
        self.context = context
        self.state = context.state
        self._tables: dict[type, KeyRegistry] = {
            Browse: self._browse_table(),
            FilterEdit: self._filter_table(),
            AppHelp: self._app_help_table(),
            TextOverlay: self._text_overlay_table(),
            TldrConfirm: self._tldr_confirm_table(),
        }

    def handle_key(self, key: str) -> bool:
        """Apply one key to the session; return whether it was handled."""
        state = self.state
        if state.status_message:
            state.status_message = ""
            state.dirty = True
        if key == "CTRL_C":
            state.request_exit()
            return True
        table = self._table_for(state.mode)
        if table is None:
            return False
        return table.dispatch(key)

    def _table_for(self, mode) -> KeyRegistry | None:
        for cls in type(mode).__mro__:
            table = self._tables.get(cls)
            if table is not None:
                return table
        return None

    # Browse

    def _browse_table(self) -> KeyRegistry:
        state = self.state
        page = self.context.list_page_rows
        return KeyRegistry().bind(
            KeyBinding(("q",), lambda _key: state.request_exit()),
            KeyBinding(NEXT_KEYS, lambda _key: state.move_next()),
            KeyBinding(PREVIOUS_KEYS, lambda _key: state.move_previous()),
            KeyBinding(("g", "HOME"), lambda _key: state.move_first()),
            KeyBinding(("G", "END"), lambda _key: state.move_last()),
            KeyBinding(("PAGE_DOWN", "CTRL_D"), lambda _key: state.move_by(page())),
            KeyBinding(("PAGE_UP", "CTRL_U"), lambda _key: state.move_by(-page())),
            KeyBinding(("/",), lambda _key: state.set_mode(FILTER_EDIT)),
            KeyBinding(("H", "?"), lambda _key: state.set_mode(APP_HELP)),
            KeyBinding(("h",), lambda _key: self._with_command(self._open_command_help)),
            KeyBinding(("m",), lambda _key: self._with_command(self._open_manual)),
            KeyBinding(("M",), lambda _key: self._with_command(self._enter_manual_pager)),
            KeyBinding(("t",), lambda _key: self._with_command(self._open_tldr)),
        )

    def _with_command(self, action: Callable[[str], None]) -> None:
        if not self.state.has_selection():
            logger.debug("ignoring command action: filtered view is empty")
            return
        action(self.state.current_command())

    def _open_command_help(self, command: str) -> None:
        text = self.context.fetch_command_help(command)
        self.state.set_mode(CommandHelpOverlay(command, text))

    def _open_manual(self, command: str) -> None:
        text = self.context.fetch_manual(command)
        self.state.set_mode(ManOverlay(command, text))

    def _enter_manual_pager(self, command: str) -> None:
        self.state.set_mode(ManEnter(command))
        try:
            error = self.context.open_manual_pager(command)
        finally:
            self.state.set_mode(BROWSE)
        if error:
            self.state.status_message = error

    def _open_tldr(self, command: str) -> None:
        text = self.context.fetch_tldr(command)
        if text is None:
            self.state.set_mode(TldrConfirm(command))
            return
        self.state.set_mode(TldrOverlay(command, text))

    # Filter editing

    def _filter_table(self) -> KeyRegistry:
        return KeyRegistry(fallback=self._filter_insert).bind(
            KeyBinding(("ENTER", "ESC"), self._filter_finish),
            KeyBinding(("BACKSPACE",), self._filter_backspace),
            KeyBinding(("CTRL_U",), self._filter_clear),
        )

    def _filter_insert(self, key: str) -> None:
        if len(key) != 1 or not key.isprintable():
            return
        self.state.query += key
        self._filter_changed()

    def _filter_backspace(self, _key: str) -> None:
        if not self.state.query:
            return
        self.state.query = self.state.query[:-1]
        self._filter_changed()

    def _filter_clear(self, _key: str) -> None:
        if not self.state.query:
            return
        self.state.query = ""
        self._filter_changed()

    def _filter_changed(self) -> None:
        self.state.clamp_selection()
        self.state.dirty = True

    def _filter_finish(self, _key: str) -> None:
        self.state.set_mode(BROWSE)
        self.state.reset_selection()

    # Overlays

    def _app_help_table(self) -> KeyRegistry:
        return KeyRegistry().bind(
            KeyBinding(("ESC", "q", "H", "?"), lambda _key: self.state.set_mode(BROWSE)),
        )

    def _text_overlay_table(self) -> KeyRegistry:
        page = self.context.overlay_page_rows
        return KeyRegistry().bind(
            KeyBinding(("ESC",), lambda _key: self.state.set_mode(BROWSE)),
            KeyBinding(NEXT_KEYS, lambda _key: self._scroll_overlay(1)),
            KeyBinding(PREVIOUS_KEYS, lambda _key: self._scroll_overlay(-1)),
            KeyBinding(("PAGE_DOWN", "CTRL_D", " "), lambda _key: self._scroll_overlay(page())),
            KeyBinding(("PAGE_UP", "CTRL_U"), lambda _key: self._scroll_overlay(-page())),
            KeyBinding(("g", "HOME"), lambda _key: self._scroll_overlay_to(0)),
            KeyBinding(("G", "END"), lambda _key: self._scroll_overlay_to(None)),
        )

    def _max_overlay_scroll(self, overlay: TextOverlay) -> int:
        line_count = max(1, len(overlay.text.splitlines()))
        return max(0, line_count - max(1, self.context.overlay_page_rows()))

    def _scroll_overlay(self, delta: int) -> None:
        overlay = self.state.mode
        if not isinstance(overlay, TextOverlay):
            return
        self._scroll_overlay_to(overlay.scroll + delta)

    def _scroll_overlay_to(self, target: int | None) -> None:
        overlay = self.state.mode
        if not isinstance(overlay, TextOverlay):
            return
        max_scroll = self._max_overlay_scroll(overlay)
        scroll = max_scroll if target is None else max(0, min(target, max_scroll))
        if scroll != overlay.scroll:
            self.state.set_mode(overlay.scrolled(scroll))

    def _tldr_confirm_table(self) -> KeyRegistry:
        return KeyRegistry(fallback=lambda _key: self.state.set_mode(BROWSE)).bind(
            KeyBinding(("y", "Y"), self._confirm_tldr_population),
        )

    def _confirm_tldr_population(self, _key: str) -> None:
        mode = self.state.mode
        if not isinstance(mode, TldrConfirm):
            return
        try:
            error = self.context.populate_tldr_cache(mode.command)
        finally:
            self.state.set_mode(BROWSE)
        if error:
            self.state.status_message = error
