"""Frame composition tests for the list, footer, and mode overlays.

Frames are rendered with the plain theme and highlighting off, then stripped
of escape sequences, so assertions read against visible text only.
"""

from __future__ import annotations

import unittest
from unittest import mock

from comrad.ansi import ANSI_ESCAPE_RE
from comrad.modes import APP_HELP, BROWSE, FILTER_EDIT, CommandHelpOverlay, ManEnter, TldrConfirm
from comrad.render import (
    CONFIRM_LINES,
    EMPTY_CATALOG_MESSAGE,
    NO_CONTENT_MESSAGE,
    NO_MATCHES_MESSAGE,
    RenderContext,
    build_frame,
    list_view_rows,
    render_frame,
    text_overlay_body_rows,
)
from comrad.ui_theme import PLAIN_THEME


def _context(**overrides) -> RenderContext:
    values = dict(
        width=80,
        height=24,
        commands=["Bash", "cat", "ls"],
        catalog_size=3,
        selected=1,
        list_start=0,
        query="",
        mode=BROWSE,
        theme=PLAIN_THEME,
        highlight=False,
    )
    values.update(overrides)
    return RenderContext(**values)


def _visible(frame: str) -> str:
    return ANSI_ESCAPE_RE.sub("", frame)


class BaseLayerTests(unittest.TestCase):
    def test_list_marks_only_the_selected_command(self) -> None:
        text = _visible(build_frame(_context()))
        self.assertIn(">> cat", text)
        self.assertNotIn(">> Bash", text)
        self.assertNotIn(">> ls", text)
        self.assertIn("   Bash", text)

    def test_title_and_browse_footer_are_drawn(self) -> None:
        text = _visible(build_frame(_context()))
        self.assertIn("COMRAD", text)
        self.assertIn("--help <h>", text)
        self.assertIn("Filter </>", text)
        self.assertIn("Quit <q>", text)

    def test_title_shows_match_count_when_filtered(self) -> None:
        text = _visible(build_frame(_context(commands=["cat"], query="ca", selected=0)))
        self.assertIn("1/3", text)

    def test_list_starts_at_viewport_offset(self) -> None:
        commands = [f"cmd{idx:02d}" for idx in range(60)]
        frame = build_frame(_context(commands=commands, catalog_size=60, selected=30, list_start=25))
        text = _visible(frame)
        self.assertNotIn("cmd24", text)
        self.assertIn("cmd25", text)
        self.assertIn(">> cmd30", text)
        self.assertIn(f"cmd{25 + list_view_rows(24) - 1:02d}", text)

    def test_empty_catalog_shows_placeholder(self) -> None:
        text = _visible(build_frame(_context(commands=[], catalog_size=0, selected=0)))
        self.assertIn(EMPTY_CATALOG_MESSAGE, text)
        self.assertNotIn(">>", text)

    def test_no_matches_shows_placeholder(self) -> None:
        text = _visible(build_frame(_context(commands=[], query="zz", selected=0)))
        self.assertIn(NO_MATCHES_MESSAGE, text)

    def test_status_message_replaces_footer_hints(self) -> None:
        text = _visible(build_frame(_context(status_message="man not found in PATH")))
        self.assertIn("man not found in PATH", text)
        self.assertNotIn("Quit <q>", text)

    def test_control_bytes_in_command_names_are_escaped(self) -> None:
        frame = build_frame(_context(commands=["evil\x1b[2Jname", "nl\nname"], selected=0))
        self.assertNotIn("\x1b[2J", frame)
        text = _visible(frame)
        self.assertIn("evil\\x1b[2Jname", text)
        self.assertIn("nl\\x0aname", text)
        self.assertNotIn("\n", frame)

    def test_browse_has_no_overlay(self) -> None:
        self.assertNotIn("╭", build_frame(_context()))
        self.assertNotIn("╭", build_frame(_context(mode=ManEnter("ls"))))

    def test_tiny_terminal_does_not_fail(self) -> None:
        frame = build_frame(_context(width=10, height=3, mode=CommandHelpOverlay("ls", "text")))
        self.assertTrue(frame.startswith("\033[H"))


class OverlayTests(unittest.TestCase):
    def test_filter_overlay_shows_query(self) -> None:
        text = _visible(build_frame(_context(mode=FILTER_EDIT, query="ca", commands=["cat"], selected=0)))
        self.assertIn("Filter", text)
        self.assertIn("ca", text)
        self.assertIn("Exit filter", text)

    def test_text_overlay_shows_command_title_and_body(self) -> None:
        mode = CommandHelpOverlay("cat", "Usage: cat [FILE]...\nConcatenate files.")
        text = _visible(build_frame(_context(mode=mode)))
        self.assertIn(" cat ", text)
        self.assertIn("Usage: cat [FILE]...", text)
        self.assertIn("Concatenate files.", text)

    def test_text_overlay_honors_scroll_offset(self) -> None:
        body = "\n".join(f"entry-{idx:02d}" for idx in range(60))
        rows = text_overlay_body_rows(80, 24)
        text = _visible(build_frame(_context(mode=CommandHelpOverlay("cat", body, scroll=10))))
        self.assertNotIn("entry-09", text)
        self.assertIn("entry-10", text)
        self.assertIn(f"entry-{10 + rows - 1:02d}", text)
        self.assertNotIn(f"entry-{10 + rows:02d}", text)
        self.assertIn(f"11-{10 + rows}/60", text)

    def test_overlay_title_escapes_control_bytes(self) -> None:
        frame = build_frame(_context(mode=CommandHelpOverlay("bad\x07\x1b]0;x", "text")))
        self.assertNotIn("\x07", frame)
        self.assertIn(" bad\\x07\\x1b]0;x ", _visible(frame))

    def test_blank_text_overlay_shows_no_content_placeholder(self) -> None:
        text = _visible(build_frame(_context(mode=CommandHelpOverlay("cat", "   \n"))))
        self.assertIn(NO_CONTENT_MESSAGE, text)

    def test_tldr_confirm_overlay_shows_prompt(self) -> None:
        text = _visible(build_frame(_context(mode=TldrConfirm("cat"))))
        self.assertIn("Warning", text)
        for line in CONFIRM_LINES:
            self.assertIn(line, text)

    def test_app_help_overlay_lists_bindings(self) -> None:
        text = _visible(build_frame(_context(mode=APP_HELP)))
        self.assertIn("Comrad Help", text)
        self.assertIn("Navigation", text)
        self.assertIn("quit comrad", text)
        self.assertIn("Press Esc to close", text)

    def test_only_the_active_overlay_is_drawn(self) -> None:
        text = _visible(build_frame(_context(mode=TldrConfirm("cat"))))
        self.assertNotIn(" Filter ", text)
        self.assertNotIn("Comrad Help", text)
        self.assertEqual(text.count("╭"), 1)

    def test_highlighted_overlay_keeps_visible_text(self) -> None:
        mode = CommandHelpOverlay("ls", "Usage: ls [OPTION]\n  -a, --all  show hidden")
        frame = build_frame(_context(mode=mode, highlight=True))
        text = _visible(frame)
        self.assertIn("--all", text)
        self.assertIn("show hidden", text)


class RenderFrameTests(unittest.TestCase):
    def test_render_frame_writes_encoded_frame(self) -> None:
        context = _context()
        with mock.patch("comrad.render.os.write") as write_mock:
            render_frame(context, 7)

        write_mock.assert_called_once_with(7, build_frame(context).encode("utf-8"))


if __name__ == "__main__":
    unittest.main()
