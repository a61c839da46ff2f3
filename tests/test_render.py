"""Tests for frame composition and the render callback.

Frames must fill the terminal exactly, reflect focus and entry state, and
never mutate the registry they read from.
"""

from __future__ import annotations

import copy
import os
import unittest
from unittest import mock

from refer.ansi import ANSI_ESCAPE_RE, clip_ansi_line, display_width, fit_ansi_line
from refer.app import build_resources
from refer.render import FrameRenderer, FrameSize, compose_frame, left_panel_width, terminal_frame_size
from refer.state import FileListState, FocusState, TextEntryState
from refer.ui_theme import DEFAULT_THEME, MONO_THEME, resolve_theme


class ComposeFrameTests(unittest.TestCase):
    def setUp(self) -> None:
        self.resources = build_resources(["a.txt", "b.txt"])
        self.size = FrameSize(columns=40, lines=6)

    def test_rows_fill_terminal_exactly(self) -> None:
        rows = compose_frame(self.resources.view(), self.size, MONO_THEME)

        self.assertEqual(len(rows), 6)
        for row in rows:
            self.assertEqual(display_width(row), 40)

    def test_file_list_and_view_panel(self) -> None:
        rows = compose_frame(self.resources.view(), self.size, MONO_THEME)
        left = left_panel_width(40)

        self.assertTrue(rows[1].startswith("a.txt"))
        self.assertTrue(rows[2].startswith("b.txt"))
        self.assertEqual(rows[1][left], "│")
        self.assertIn("b.txt", rows[1][left + 1 :])
        self.assertIn("2 files open", rows[2][left + 1 :])
        self.assertIn("Ctrl+Q", rows[-1])

    def test_focused_region_title_is_reversed(self) -> None:
        rows = compose_frame(self.resources.view(), self.size, DEFAULT_THEME)
        self.assertTrue(rows[0].startswith(f"{DEFAULT_THEME.reverse} Files {DEFAULT_THEME.reset}"))

        self.resources.get_mut(FocusState).set_cursor("view")
        rows = compose_frame(self.resources.view(), self.size, DEFAULT_THEME)
        self.assertIn(f"{DEFAULT_THEME.reverse} View {DEFAULT_THEME.reset}", rows[0])
        self.assertFalse(rows[0].startswith(DEFAULT_THEME.reverse))

    def test_entry_prompt_replaces_hints_while_active(self) -> None:
        entry = self.resources.get_mut(TextEntryState)
        entry.toggle()
        for ch in "notes.md":
            entry.push(ch)

        rows = compose_frame(self.resources.view(), self.size, MONO_THEME)

        self.assertTrue(rows[-1].startswith("open: notes.md "))
        self.assertNotIn("Ctrl+Q", rows[-1])

    def test_long_entry_keeps_tail_visible(self) -> None:
        entry = self.resources.get_mut(TextEntryState)
        entry.toggle()
        for ch in "x" * 60 + "END":
            entry.push(ch)

        rows = compose_frame(self.resources.view(), self.size, MONO_THEME)

        self.assertIn("END", rows[-1])
        self.assertEqual(display_width(rows[-1]), 40)

    def test_list_scrolls_to_newest_files(self) -> None:
        files = self.resources.get_mut(FileListState)
        for idx in range(10):
            files.insert(f"f{idx}")

        rows = compose_frame(self.resources.view(), self.size, MONO_THEME)

        self.assertTrue(rows[4].startswith("f9"))
        self.assertTrue(rows[1].startswith("f6"))

    def test_empty_file_list(self) -> None:
        rows = compose_frame(build_resources([]).view(), self.size, MONO_THEME)

        self.assertIn("no files open", rows[1])

    def test_compose_does_not_mutate_resources(self) -> None:
        self.resources.get_mut(TextEntryState).toggle()
        before = [
            copy.deepcopy(self.resources.get_mut(cls)) for cls in (FocusState, TextEntryState, FileListState)
        ]

        compose_frame(self.resources.view(), self.size, DEFAULT_THEME)

        after = [self.resources.get_mut(cls) for cls in (FocusState, TextEntryState, FileListState)]
        self.assertEqual(before, after)

    def test_narrow_terminal_still_renders(self) -> None:
        rows = compose_frame(self.resources.view(), FrameSize(columns=8, lines=3), MONO_THEME)

        self.assertEqual(len(rows), 3)
        for row in rows:
            self.assertEqual(display_width(row), 8)


class FrameRendererTests(unittest.TestCase):
    def test_renderer_writes_single_frame(self) -> None:
        resources = build_resources(["a.txt"])
        renderer = FrameRenderer(7, MONO_THEME, size_provider=lambda: FrameSize(30, 4))

        with mock.patch("refer.render.os.write") as write_mock:
            renderer(resources.view())

        write_mock.assert_called_once()
        fd, payload = write_mock.call_args.args
        self.assertEqual(fd, 7)
        text = payload.decode("utf-8")
        self.assertTrue(text.startswith("\033[H"))
        self.assertTrue(text.endswith("\033[J"))
        self.assertEqual(text.count("\r\n"), 3)

    def test_default_size_is_measured_on_output_fd(self) -> None:
        resources = build_resources(["a.txt"])
        renderer = FrameRenderer(9, MONO_THEME)

        with mock.patch(
            "refer.render.os.get_terminal_size", return_value=os.terminal_size((20, 3))
        ) as size_mock, mock.patch("refer.render.os.write") as write_mock:
            renderer(resources.view())

        size_mock.assert_called_once_with(9)
        payload = write_mock.call_args.args[1].decode("utf-8")
        self.assertEqual(payload.count("\r\n"), 2)

    def test_frame_size_falls_back_when_fd_is_not_a_terminal(self) -> None:
        with mock.patch("refer.render.os.get_terminal_size", side_effect=OSError("not a tty")):
            self.assertEqual(terminal_frame_size(5), FrameSize(columns=80, lines=24))


class AnsiHelperTests(unittest.TestCase):
    def test_clip_preserves_escapes_and_counts_wide_chars(self) -> None:
        self.assertEqual(clip_ansi_line("\033[1mabcdef\033[0m", 3), "\033[1mabc")
        self.assertEqual(clip_ansi_line("界界界", 5), "界界")
        self.assertEqual(clip_ansi_line("a\tb", 10), "a       b")
        self.assertEqual(clip_ansi_line("a\tb", 4), "a")

    def test_fit_pads_and_replaces_control_characters(self) -> None:
        fitted = fit_ansi_line("a\x07b", 5)

        self.assertEqual(ANSI_ESCAPE_RE.sub("", fitted), "a?b  ")


class ThemeTests(unittest.TestCase):
    def test_resolve_theme_falls_back_to_default(self) -> None:
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertIs(resolve_theme("nope"), DEFAULT_THEME)
        self.assertIs(resolve_theme(" MONO "), MONO_THEME)


if __name__ == "__main__":
    unittest.main()
