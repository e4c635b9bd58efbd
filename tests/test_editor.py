from __future__ import annotations

import os
import unittest
from pathlib import Path
from unittest import mock

from lazyapropos.editor import editor_command, launch_editor


class EditorLaunchTests(unittest.TestCase):
    def test_command_includes_line_jump(self) -> None:
        with mock.patch.dict(os.environ, {"EDITOR": "code --wait"}):
            self.assertEqual(
                editor_command(Path("/src/core.clj"), 12),
                ["code", "--wait", "+12", "/src/core.clj"],
            )
            self.assertEqual(editor_command(Path("/src/core.clj"), 0), ["code", "--wait", "/src/core.clj"])

    def test_missing_editor_reports_message(self) -> None:
        with mock.patch.dict(os.environ, {"EDITOR": "  "}):
            self.assertIsNone(editor_command(Path("x.clj")))
            self.assertIn("$EDITOR is not set", launch_editor(Path("x.clj")))

    def test_launch_failure_reports_message(self) -> None:
        with mock.patch.dict(os.environ, {"EDITOR": "vi"}), mock.patch(
            "lazyapropos.editor.subprocess.run", side_effect=FileNotFoundError("vi")
        ):
            self.assertIn("Cannot open definition with vi", launch_editor(Path("x.clj"), 3))

    def test_successful_launch_returns_none(self) -> None:
        with mock.patch.dict(os.environ, {"EDITOR": "vi"}), mock.patch("lazyapropos.editor.subprocess.run") as run:
            self.assertIsNone(launch_editor(Path("x.clj"), 3))
        run.assert_called_once_with(["vi", "+3", "x.clj"], check=False)


if __name__ == "__main__":
    unittest.main()
