from __future__ import annotations

import logging
import unittest

import colorlog

from lazyapropos import log as log_mod


class LoggingHelperTests(unittest.TestCase):
    def setUp(self) -> None:
        self.root = logging.getLogger("lazyapropos")
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level
        self.root.handlers = [h for h in self.root.handlers if not getattr(h, "_lazyapropos_console", False)]

    def tearDown(self) -> None:
        self.root.handlers = self.saved_handlers
        self.root.setLevel(self.saved_level)

    def test_get_logger_names(self) -> None:
        self.assertIs(log_mod.get_logger(), self.root)
        self.assertEqual(log_mod.get_logger("lazyapropos.sources").name, "lazyapropos.sources")
        self.assertEqual(log_mod.get_logger("cli").name, "lazyapropos.cli")

    def test_console_handler_attached_once(self) -> None:
        log_mod.get_console_log("debug")
        log_mod.get_console_log("info")

        console = [h for h in self.root.handlers if getattr(h, "_lazyapropos_console", False)]
        self.assertEqual(len(console), 1)
        self.assertIsInstance(console[0].formatter, colorlog.ColoredFormatter)
        self.assertEqual(self.root.level, logging.INFO)


if __name__ == "__main__":
    unittest.main()
