"""Cleanup and syntax coloring for text captured from external programs.

Help, man, and tldr output is stripped of overstrike and escape sequences,
control bytes are neutralized, and the result is colored with Pygments using
a small lexer that knows the shape of usage text.
"""

from __future__ import annotations

import logging
import re

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import RegexLexer, bygroups
from pygments.styles import get_style_by_name
from pygments.token import Comment, Generic, Name, String, Text, Whitespace
from pygments.util import ClassNotFound

from .ansi import ANSI_ESCAPE_RE

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_INLINE_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_OVERSTRIKE_RE = re.compile(r".\x08")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_INVALID_STYLES: set[str] = set()


class HelpTextLexer(RegexLexer):
    """Lexer for ``--help`` output, rendered man pages, and tldr pages."""

    name = "Command help"
    aliases = ["comrad-help"]
    filenames: list[str] = []

    tokens = {
        "root": [
            (r"^[A-Z][A-Z0-9 _/,()-]+$", Generic.Heading),
            (r"^(\s*)((?:[Uu]sage|USAGE)\s*:)", bygroups(Whitespace, Generic.Subheading)),
            (r"^(\s*)(- )(.*)$", bygroups(Whitespace, Comment, Comment)),
            (r"\{\{[^}\n]*\}\}", Name.Variable),
            (r"`[^`\n]*`", String),
            (r"<[A-Za-z][\w.-]*>", Name.Variable),
            (r"(?<![\w-])--?[A-Za-z0-9?][\w-]*", Name.Attribute),
            (r"\s+", Whitespace),
            (r"\w+", Text),
            (r".", Text),
        ],
    }


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def sanitize_inline_text(source: str) -> str:
    """Escape every control byte, newlines and tabs included, for one-row labels."""
    return _INLINE_CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def clean_external_text(text: str) -> str:
    """Normalize captured program output into plain, display-safe text."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _OVERSTRIKE_RE.sub("", text)
    text = ANSI_ESCAPE_RE.sub("", text)
    return sanitize_terminal_text(text)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style or style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.info("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def highlight_help_text(text: str, style: str = DEFAULT_STYLE, enabled: bool = True) -> list[str]:
    """Return display lines for ``text``, colored when ``enabled``."""
    if not text:
        return []
    if not enabled:
        return text.splitlines()
    formatter = _formatter_for_style(normalize_style(style))
    rendered = pygments_highlight(text, HelpTextLexer(stripnl=False), formatter)
    return rendered.splitlines()
