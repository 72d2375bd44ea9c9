"""Mutable session state: catalog, filter query, selection, and mode.

The filtered view is derived from the catalog and query, and the derived
indices are kept only until the query changes. The selection index is always kept
inside the current view (or at 0 when the view is empty).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import filter_catalog
from .modes import BROWSE, UIMode


class NoSelection(LookupError):
    """Raised when an action needs a current command but the view is empty."""


@dataclass
class AppState:
    catalog: tuple[str, ...]
    query: str = ""
    selected: int = 0
    mode: UIMode = BROWSE
    exit_requested: bool = False
    list_start: int = 0
    status_message: str = ""
    dirty: bool = True
    _view: tuple[int, ...] = field(default=(), init=False, repr=False, compare=False)
    _view_key: tuple[tuple[str, ...], str] | None = field(default=None, init=False, repr=False, compare=False)

    def filtered_indices(self) -> tuple[int, ...]:
        """Return catalog indices matching the current query, in catalog order.

        The result is recomputed only when the query (or catalog) changes.
        """
        key = self._view_key
        if key is None or key[0] is not self.catalog or key[1] != self.query:
            self._view = tuple(filter_catalog(self.catalog, self.query))
            self._view_key = (self.catalog, self.query)
        return self._view

    def filtered_commands(self) -> list[str]:
        return [self.catalog[idx] for idx in self.filtered_indices()]

    def view_size(self) -> int:
        return len(self.filtered_indices())

    def has_selection(self) -> bool:
        return self.view_size() > 0

    def current_command(self) -> str:
        """Resolve the highlighted command through the filtered view."""
        view = self.filtered_indices()
        if not view:
            raise NoSelection("no command matches the current filter")
        return self.catalog[view[self.selected]]

    def clamp_selection(self) -> None:
        """Pull the selection back inside the current view."""
        size = self.view_size()
        clamped = 0 if size == 0 else max(0, min(self.selected, size - 1))
        if clamped != self.selected:
            self.selected = clamped
            self.dirty = True

    def reset_selection(self) -> None:
        self.selected = 0
        self.list_start = 0
        self.dirty = True

    def move_next(self) -> None:
        size = self.view_size()
        if size and self.selected < size - 1:
            self.selected += 1
            self.dirty = True

    def move_previous(self) -> None:
        if self.view_size() and self.selected > 0:
            self.selected -= 1
            self.dirty = True

    def move_first(self) -> None:
        if self.view_size():
            self.selected = 0
            self.dirty = True

    def move_last(self) -> None:
        size = self.view_size()
        if size:
            self.selected = size - 1
            self.dirty = True

    def move_by(self, delta: int) -> None:
        """Move ``delta`` rows, saturating at both ends of the view."""
        size = self.view_size()
        if not size:
            return
        target = max(0, min(size - 1, self.selected + delta))
        if target != self.selected:
            self.selected = target
            self.dirty = True

    def set_mode(self, mode: UIMode) -> None:
        self.mode = mode
        self.dirty = True

    def request_exit(self) -> None:
        self.exit_requested = True

    def sync_list_viewport(self, visible_rows: int) -> None:
        """Scroll the list so the selected row stays inside ``visible_rows``."""
        rows = max(1, visible_rows)
        size = self.view_size()
        start = self.list_start
        if self.selected < start:
            start = self.selected
        elif self.selected >= start + rows:
            start = self.selected - rows + 1
        start = max(0, min(start, max(0, size - rows)))
        if start != self.list_start:
            self.list_start = start
            self.dirty = True
