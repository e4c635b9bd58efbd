"""Candidate label/value construction tests."""

from __future__ import annotations

import unittest

from lazyapropos.ansi import strip_ansi
from lazyapropos.candidates import build_candidate, build_namespace_candidate, wrap_doc
from lazyapropos.symbols import SymbolKind, SymbolRecord
from lazyapropos.ui_theme import DEFAULT_THEME, PLAIN_THEME


REDUCE = SymbolRecord(
    "clojure.core/reduce",
    SymbolKind.FUNCTION,
    "f should be a function of 2 arguments. If val is not supplied, returns the result of applying f "
    "to the first 2 items in coll.",
)


class PlainCandidateTests(unittest.TestCase):
    def test_value_is_always_qualified_name(self) -> None:
        for record in (
            REDUCE,
            SymbolRecord("user/foo", SymbolKind.MACRO),
            SymbolRecord("clojure.core//", SymbolKind.OTHER),
        ):
            with self.subTest(name=record.qualified_name):
                self.assertEqual(build_candidate(record, False).value, record.qualified_name)
                self.assertEqual(build_candidate(record, True, width=40).value, record.qualified_name)

    def test_plain_label_is_styled_bare_name(self) -> None:
        candidate = build_candidate(REDUCE, False)
        self.assertEqual(candidate.label, f"{DEFAULT_THEME.symbol_function}reduce{DEFAULT_THEME.reset}")

    def test_unknown_kind_is_left_unstyled(self) -> None:
        candidate = build_candidate(SymbolRecord("user/thing", SymbolKind.OTHER), False)
        self.assertEqual(candidate.label, "thing")


class DocCandidateTests(unittest.TestCase):
    def test_doc_label_starts_with_qualified_name_then_wrapped_doc(self) -> None:
        candidate = build_candidate(REDUCE, True, width=40, theme=PLAIN_THEME)
        lines = candidate.label.split("\n")
        self.assertEqual(lines[0], "clojure.core/reduce")
        self.assertGreater(len(lines), 2)
        for line in lines[1:]:
            self.assertLessEqual(len(line), 40)
            self.assertTrue(line.startswith("  "))

    def test_missing_doc_renders_empty_block(self) -> None:
        candidate = build_candidate(SymbolRecord("user/foo", SymbolKind.MACRO), True, width=40)
        self.assertEqual(strip_ansi(candidate.label), "user/foo\n")

    def test_wrap_doc_keeps_blank_paragraph_breaks(self) -> None:
        self.assertEqual(wrap_doc("first line\n\nsecond", 80), "  first line\n\n  second")
        self.assertEqual(wrap_doc(None, 80), "")


class NamespaceCandidateTests(unittest.TestCase):
    def test_namespace_candidate_value_is_namespace(self) -> None:
        candidate = build_namespace_candidate("clojure.string", PLAIN_THEME)
        self.assertEqual(candidate.label, "clojure.string")
        self.assertEqual(candidate.value, "clojure.string")


if __name__ == "__main__":
    unittest.main()
