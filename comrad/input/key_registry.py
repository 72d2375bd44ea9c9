"""Key-token dispatch tables used by the per-mode handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyHandler = Callable[[str], None]


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single handler."""

    keys: tuple[str, ...]
    handler: KeyHandler


class KeyRegistry:
    """Exact-match key table with an optional catch-all handler."""

    def __init__(self, fallback: KeyHandler | None = None) -> None:
        self._handlers: dict[str, KeyHandler] = {}
        self._fallback = fallback

    def bind(self, *bindings: KeyBinding) -> KeyRegistry:
        """Register bindings, overwriting earlier handlers for the same keys."""
        for binding in bindings:
            for key in binding.keys:
                self._handlers[key] = binding.handler
        return self

    def bound_keys(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def dispatch(self, key: str) -> bool:
        """Invoke the handler for ``key``; return whether anything handled it."""
        handler = self._handlers.get(key, self._fallback)
        if handler is None:
            return False
        handler(key)
        return True
