from __future__ import annotations

import unittest

from lazyapropos.picker.keys import KeyComboBinding, KeyComboRegistry, normalize_key_token


class KeyComboRegistryTests(unittest.TestCase):
    def test_normalize_key_token(self) -> None:
        self.assertEqual(normalize_key_token("ctrl-d"), "CTRL_D")
        self.assertEqual(normalize_key_token(" page_up "), "PAGE_UP")
        self.assertEqual(normalize_key_token("d"), "d")

    def test_dispatch_invokes_bound_handler(self) -> None:
        seen: list[object] = []
        registry = KeyComboRegistry().register_binding(KeyComboBinding(("ctrl-o", "CTRL_B"), seen.append))

        self.assertTrue(registry.dispatch("CTRL_O", "session"))
        self.assertTrue(registry.dispatch("ctrl_b", "other"))
        self.assertEqual(seen, ["session", "other"])
        self.assertIn("CTRL_O", registry)

    def test_dispatch_unbound_key_returns_false(self) -> None:
        registry = KeyComboRegistry()
        self.assertFalse(registry.dispatch("CTRL_X", None))
        self.assertNotIn("CTRL_X", registry)

    def test_later_binding_overrides_earlier(self) -> None:
        seen: list[str] = []
        registry = KeyComboRegistry().register_bindings(
            [
                KeyComboBinding(("CTRL_D",), lambda s: seen.append("first")),
                KeyComboBinding(("CTRL_D",), lambda s: seen.append("second")),
            ]
        )
        registry.dispatch("CTRL_D", None)
        self.assertEqual(seen, ["second"])

    def test_printable_keys_are_case_sensitive(self) -> None:
        seen: list[str] = []
        registry = KeyComboRegistry().register_binding(KeyComboBinding(("d",), lambda s: seen.append("d")))
        self.assertFalse(registry.dispatch("D", None))
        self.assertTrue(registry.dispatch("d", None))


if __name__ == "__main__":
    unittest.main()
