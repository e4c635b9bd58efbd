"""Picker runtime loop tests with a scripted terminal.

The terminal is replaced by a recorder and keys come from a list, so the
session loop, ready hooks and post-exit action dispatch run without a tty.
"""

from __future__ import annotations

import contextlib
import termios
import unittest

from lazyapropos.candidates import CandidateEntry
from lazyapropos.picker.keys import KeyComboBinding
from lazyapropos.picker.runtime import PickerRuntime
from lazyapropos.picker.session import PresentOptions
from lazyapropos.sources import SourceAction, SourceDescriptor


class RecordingTerminal:
    instances: list[RecordingTerminal] = []

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.frames: list[list[str]] = []
        self.active = False
        self.events: list[str] = []
        RecordingTerminal.instances.append(self)

    def write_frame(self, rows: list[str]) -> None:
        self.frames.append(rows)

    @contextlib.contextmanager
    def raw_mode(self):
        self.active = True
        self.events.append("enter")
        try:
            yield
        finally:
            self.active = False
            self.events.append("exit")


class PickerRuntimeTests(unittest.TestCase):
    def setUp(self) -> None:
        RecordingTerminal.instances.clear()
        self.calls: list[tuple[str, str, bool]] = []

    def _runtime(self, keys: list[str]) -> PickerRuntime:
        pending = list(keys)

        def read_key(fd: int) -> str:
            return pending.pop(0) if pending else ""

        return PickerRuntime(
            stdin_fd=0,
            stdout_fd=1,
            read_key_fn=read_key,
            terminal_factory=RecordingTerminal,
            terminal_size=lambda: (60, 12),
        )

    def _sources(self) -> list[SourceDescriptor]:
        def find(value: str) -> None:
            self.calls.append(("find", value, RecordingTerminal.instances[-1].active))

        actions = (SourceAction("find-definition", "Find definition", find),)
        return [
            SourceDescriptor(name="a", candidates=[CandidateEntry("x", "a/x")], actions=actions),
            SourceDescriptor(name="b", candidates=[CandidateEntry("y", "b/y")], actions=actions),
        ]

    def test_enter_runs_action_after_terminal_restored(self) -> None:
        runtime = self._runtime(["DOWN", "ENTER"])
        selection = runtime.present(self._sources(), PresentOptions(buffer_name="*t*"))

        self.assertIsNotNone(selection)
        self.assertEqual(selection.values, ("b/y",))
        self.assertEqual(self.calls, [("find", "b/y", False)])
        self.assertEqual(RecordingTerminal.instances[-1].events, ["enter", "exit"])

    def test_abort_returns_none_and_runs_nothing(self) -> None:
        runtime = self._runtime(["ESC"])
        self.assertIsNone(runtime.present(self._sources(), PresentOptions(buffer_name="*t*")))
        self.assertEqual(self.calls, [])

    def test_end_of_input_aborts(self) -> None:
        runtime = self._runtime([])
        self.assertIsNone(runtime.present(self._sources(), PresentOptions(buffer_name="*t*")))

    def test_preselect_pattern_is_applied(self) -> None:
        runtime = self._runtime(["ENTER"])
        selection = runtime.present(self._sources(), PresentOptions(buffer_name="*t*", preselect=r"/y$"))
        self.assertEqual(selection.values, ("b/y",))

    def test_ready_hook_fires_once_after_first_frame(self) -> None:
        fired: list[int] = []

        def hook(session) -> None:
            fired.append(len(RecordingTerminal.instances[-1].frames))
            session.select_first_in_source("b")

        runtime = self._runtime(["ENTER", "ENTER"])
        runtime.add_ready_hook(hook)
        first = runtime.present(self._sources(), PresentOptions(buffer_name="*t*"))
        second = runtime.present(self._sources(), PresentOptions(buffer_name="*t*"))

        self.assertEqual(fired, [1])
        self.assertEqual(first.values, ("b/y",))
        self.assertEqual(second.values, ("a/x",))
        self.assertEqual(runtime.pending_ready_hooks, 0)

    def test_after_exit_continuation_runs_instead_of_action(self) -> None:
        continued: list[str] = []
        binding = KeyComboBinding(("CTRL_D",), lambda s: s.run_after_exit(lambda: continued.append("again")))
        runtime = self._runtime(["CTRL_D"])
        result = runtime.present(self._sources(), PresentOptions(buffer_name="*t*", keymap=(binding,)))

        self.assertIsNone(result)
        self.assertEqual(continued, ["again"])
        self.assertEqual(self.calls, [])

    def test_frames_are_redrawn_after_keys(self) -> None:
        runtime = self._runtime(["DOWN", "ESC"])
        runtime.present(self._sources(), PresentOptions(buffer_name="*t*"))
        self.assertGreaterEqual(len(RecordingTerminal.instances[-1].frames), 2)

    def test_hook_is_dropped_when_terminal_setup_fails(self) -> None:
        fired: list[str] = []
        attempts: list[int] = []

        def flaky_terminal(stdin_fd: int, stdout_fd: int) -> RecordingTerminal:
            attempts.append(stdin_fd)
            if len(attempts) == 1:
                raise termios.error(25, "Inappropriate ioctl for device")
            return RecordingTerminal(stdin_fd, stdout_fd)

        pending = ["ENTER"]
        runtime = PickerRuntime(
            stdin_fd=0,
            stdout_fd=1,
            read_key_fn=lambda fd: pending.pop(0) if pending else "",
            terminal_factory=flaky_terminal,
            terminal_size=lambda: (60, 12),
        )

        def hook(session) -> None:
            fired.append("hook")
            session.select_first_in_source("b")

        runtime.add_ready_hook(hook)
        with self.assertRaises(termios.error):
            runtime.present(self._sources(), PresentOptions(buffer_name="*t*"))
        self.assertEqual(runtime.pending_ready_hooks, 0)

        selection = runtime.present(self._sources(), PresentOptions(buffer_name="*t*"))
        self.assertEqual(selection.values, ("a/x",))
        self.assertEqual(fired, [])


if __name__ == "__main__":
    unittest.main()
