from __future__ import annotations

import unittest

from lazyapropos.fuzzy import fuzzy_score, matches_query, substring_index


class FuzzyBehaviorTests(unittest.TestCase):
    def test_empty_query_matches_everything(self) -> None:
        self.assertTrue(matches_query("", "clojure.core/map"))
        self.assertTrue(matches_query("   ", "anything"))
        self.assertEqual(fuzzy_score("", "x"), 0)
        self.assertEqual(substring_index("", "x"), 0)

    def test_substring_is_case_insensitive(self) -> None:
        self.assertEqual(substring_index("RED", "clojure.core/reduce"), 13)
        self.assertIsNone(substring_index("xyz", "clojure.core/reduce"))

    def test_fuzzy_requires_characters_in_order(self) -> None:
        self.assertIsNotNone(fuzzy_score("rdc", "reduce"))
        self.assertIsNone(fuzzy_score("cdr", "reduce"))

    def test_smaller_gaps_score_higher(self) -> None:
        near = fuzzy_score("red", "clojure.core/reduce")
        scattered = fuzzy_score("red", "clojure.core/transduce")
        self.assertIsNotNone(near)
        self.assertIsNotNone(scattered)
        self.assertGreater(near, scattered)

    def test_every_term_must_match(self) -> None:
        self.assertTrue(matches_query("core red", "clojure.core/reduce"))
        self.assertFalse(matches_query("core zzz", "clojure.core/reduce"))


if __name__ == "__main__":
    unittest.main()
