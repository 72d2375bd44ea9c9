"""Input-layer public API for key decoding and modal routing.

Exports are split between low-level terminal decoding (`read_key`) and the
mode-aware router used by the runtime loop.
"""

from .key_registry import KeyBinding, KeyRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key
from .router import NEXT_KEYS, PREVIOUS_KEYS, ModalKeyRouter, RouterContext

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyRegistry",
    "ModalKeyRouter",
    "RouterContext",
    "NEXT_KEYS",
    "PREVIOUS_KEYS",
]
