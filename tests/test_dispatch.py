"""Tests for normal/entry mode key dispatch.

Covers quit precedence, entry commit and cancel, focus keys, and the
guarantee that unmatched events leave every resource unchanged.
"""

from __future__ import annotations

import copy
import unittest

from refer.app import build_resources
from refer.input import InputDispatcher, KeyEvent, KeyModifiers, MouseEvent
from refer.input.events import ctrl
from refer.resources import Resources
from refer.state import FileListState, FocusState, LaunchArgs, TextEntryState

CTRL = KeyModifiers.CONTROL


def _snapshot(resources: Resources) -> tuple[object, ...]:
    return tuple(
        copy.deepcopy(resources.get_mut(cls)) for cls in (LaunchArgs, FocusState, TextEntryState, FileListState)
    )


class DispatcherTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.resources = build_resources(["main.rs"])
        self.dispatcher = InputDispatcher(self.resources)

    def send(self, *events: KeyEvent) -> list[bool]:
        return [self.dispatcher.dispatch(event) for event in events]

    def type_text(self, text: str) -> None:
        for ch in text:
            self.assertFalse(self.dispatcher.dispatch(KeyEvent(ch)))

    @property
    def focus(self) -> FocusState:
        return self.resources.get_mut(FocusState)

    @property
    def entry(self) -> TextEntryState:
        return self.resources.get_mut(TextEntryState)

    @property
    def files(self) -> FileListState:
        return self.resources.get_mut(FileListState)


class QuitTests(DispatcherTestCase):
    def test_ctrl_q_and_ctrl_c_quit_in_normal_mode(self) -> None:
        self.assertTrue(self.dispatcher.dispatch(ctrl("q")))
        self.assertTrue(self.dispatcher.dispatch(ctrl("c")))

    def test_quit_takes_precedence_in_entry_mode(self) -> None:
        self.send(ctrl("n"))
        self.type_text("ab")
        before = _snapshot(self.resources)

        self.assertTrue(self.dispatcher.dispatch(ctrl("q")))

        self.assertEqual(_snapshot(self.resources), before)
        self.assertEqual(self.entry.text, "ab")

    def test_plain_q_does_not_quit(self) -> None:
        self.assertFalse(self.dispatcher.dispatch(KeyEvent("q")))


class NormalModeTests(DispatcherTestCase):
    def test_arrows_move_focus_between_regions(self) -> None:
        self.send(KeyEvent("RIGHT"))
        self.assertEqual(self.focus.cursor, "view")

        self.send(KeyEvent("RIGHT"))
        self.assertEqual(self.focus.cursor, "view")

        self.send(KeyEvent("LEFT"))
        self.assertEqual(self.focus.cursor, "files")

    def test_ctrl_n_begins_entry_on_both_states(self) -> None:
        self.send(KeyEvent("RIGHT"), ctrl("n"))

        self.assertTrue(self.entry.active)
        self.assertTrue(self.focus.entry_active)
        self.assertEqual(self.focus.cursor, "entry")

    def test_unmatched_events_leave_state_unchanged(self) -> None:
        before = _snapshot(self.resources)

        results = self.send(
            KeyEvent("a"),
            KeyEvent("ENTER"),
            KeyEvent("BACKSPACE"),
            KeyEvent("UP"),
            KeyEvent("LEFT", CTRL),
            ctrl("x"),
        )
        self.assertFalse(self.dispatcher.dispatch(MouseEvent("LEFT_DOWN", 3, 4)))

        self.assertEqual(results, [False] * 6)
        self.assertEqual(_snapshot(self.resources), before)

    def test_custom_focus_keys(self) -> None:
        resources = Resources()
        resources.insert(FocusState(navigation=("tree", "source", "log")))
        resources.insert(TextEntryState())
        resources.insert(FileListState())
        dispatcher = InputDispatcher(resources, {"TAB": "log", "UP": "tree"})

        dispatcher.dispatch(KeyEvent("TAB"))
        self.assertEqual(resources.get(FocusState).cursor, "log")
        dispatcher.dispatch(KeyEvent("LEFT"))
        self.assertEqual(resources.get(FocusState).cursor, "log")
        dispatcher.dispatch(KeyEvent("UP"))
        self.assertEqual(resources.get(FocusState).cursor, "tree")

    def test_focus_keys_cannot_shadow_entry_or_quit(self) -> None:
        with self.assertLogs("refer.input.dispatch", level="WARNING"):
            dispatcher = InputDispatcher(self.resources, {"CTRL_N": "view", "CTRL_Q": "view"})

        self.assertTrue(dispatcher.dispatch(ctrl("q")))
        dispatcher.dispatch(ctrl("n"))

        self.assertTrue(self.entry.active)
        self.assertEqual(self.focus.cursor, "entry")


class EntryModeTests(DispatcherTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.send(ctrl("n"))

    def test_commit_appends_text_and_restores_focus(self) -> None:
        self.type_text("abc")

        self.assertFalse(self.dispatcher.dispatch(KeyEvent("ENTER")))

        self.assertEqual(self.files.names, ("main.rs", "abc"))
        self.assertEqual(self.entry.buffer, ())
        self.assertFalse(self.entry.active)
        self.assertFalse(self.focus.entry_active)
        self.assertEqual(self.focus.cursor, "files")

    def test_commit_without_input_appends_empty_string(self) -> None:
        self.type_text("abc")
        self.send(KeyEvent("ENTER"), ctrl("n"), KeyEvent("ENTER"))

        self.assertEqual(self.files.names, ("main.rs", "abc", ""))

    def test_cancel_discards_input(self) -> None:
        self.type_text("xyz")

        self.send(ctrl("n"))

        self.assertEqual(self.files.names, ("main.rs",))
        self.assertEqual(self.entry.buffer, ())
        self.assertFalse(self.entry.active)
        self.assertFalse(self.focus.entry_active)

    def test_backspace_pops_and_is_safe_on_empty_buffer(self) -> None:
        self.type_text("ab")
        self.send(KeyEvent("BACKSPACE"))
        self.assertEqual(self.entry.text, "a")

        self.send(KeyEvent("BACKSPACE"), KeyEvent("BACKSPACE"))
        self.assertEqual(self.entry.buffer, ())

    def test_printable_characters_including_shifted_and_unicode(self) -> None:
        self.send(KeyEvent("A", KeyModifiers.SHIFT), KeyEvent("é"), KeyEvent(" "), KeyEvent("/"))

        self.assertEqual(self.entry.text, "Aé /")

    def test_arrows_and_modified_keys_are_ignored(self) -> None:
        self.type_text("k")
        before = _snapshot(self.resources)

        self.send(
            KeyEvent("LEFT"),
            KeyEvent("RIGHT"),
            KeyEvent("x", KeyModifiers.ALT),
            ctrl("x"),
            KeyEvent("TAB"),
            KeyEvent("ESC"),
        )

        self.assertEqual(_snapshot(self.resources), before)
        self.assertEqual(self.focus.cursor, "entry")

    def test_focus_returns_to_region_active_before_entry(self) -> None:
        self.send(ctrl("n"), KeyEvent("RIGHT"), ctrl("n"))
        self.type_text("f")
        self.send(KeyEvent("ENTER"))

        self.assertEqual(self.focus.cursor, "view")


if __name__ == "__main__":
    unittest.main()
