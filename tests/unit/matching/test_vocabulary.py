#!/usr/bin/env python3
"""
Unit tests for the controlled vocabulary and text helpers.
"""

import unittest

from pydantic import ValidationError

from matching.utils import clamp, contains_term, normalize_slug, round_half_up, to_string_list, tokenize
from matching.vocabulary import Vocabulary, default_vocabulary


class TestVocabulary(unittest.TestCase):

    def setUp(self):
        self.vocabulary = default_vocabulary()

    def test_resolve_career_path(self):
        self.assertEqual(self.vocabulary.resolve_career_path("Tech & Engineering"), "tech")
        self.assertEqual(self.vocabulary.resolve_career_path("data-analytics"), "data")
        self.assertEqual(self.vocabulary.resolve_career_path("Sales & Client Success"), "sales")
        self.assertEqual(self.vocabulary.resolve_career_path("Astronomy"), "astronomy")

    def test_skill_synonyms_are_bidirectional(self):
        synonyms = self.vocabulary.skill_synonyms_for("react")
        self.assertIn("reactjs", synonyms)
        self.assertIn("javascript", synonyms)
        self.assertNotIn("react", synonyms)
        self.assertEqual(self.vocabulary.skill_synonyms_for("cobol"), frozenset())

    def test_experience_levels(self):
        self.assertEqual(self.vocabulary.experience_level("Internship"), 0)
        self.assertEqual(self.vocabulary.experience_level("Graduate Analyst Programme"), 1)
        self.assertEqual(self.vocabulary.experience_level("entry level"), 1)
        self.assertEqual(self.vocabulary.experience_level("Senior"), 3)
        self.assertIsNone(self.vocabulary.experience_level("Rockstar"))
        self.assertIsNone(self.vocabulary.experience_level(None))

    def test_countries(self):
        self.assertEqual(self.vocabulary.normalize_country("UK"), "united kingdom")
        self.assertEqual(self.vocabulary.normalize_country("Ireland"), "ireland")
        self.assertEqual(self.vocabulary.country_for_city("Dublin"), "ireland")
        self.assertIsNone(self.vocabulary.country_for_city("Atlantis"))
        self.assertTrue(self.vocabulary.is_european_city("Central London"))

    def test_default_vocabulary_is_shared_and_frozen(self):
        self.assertIs(default_vocabulary(), self.vocabulary)
        with self.assertRaises(ValidationError):
            self.vocabulary.neutral_experience_level = 3

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            self.vocabulary.skill_synonyms["cobol"] = ("mainframe",)
        with self.assertRaises(TypeError):
            self.vocabulary.city_countries["atlantis"] = "ireland"

        custom = Vocabulary(country_aliases={"ire": "ireland"})
        self.assertEqual(custom.normalize_country("IRE"), "ireland")
        with self.assertRaises(TypeError):
            custom.country_aliases["ire"] = "iran"
        self.assertEqual(default_vocabulary().skill_synonyms_for("cobol"), frozenset())

    def test_custom_vocabulary(self):
        vocabulary = Vocabulary(top_employers=("acme",))
        self.assertEqual(vocabulary.top_employers, ("acme",))
        self.assertEqual(vocabulary.career_path("finance").label, "Finance & Investment")


class TestTextHelpers(unittest.TestCase):

    def test_round_half_up(self):
        self.assertEqual(round_half_up(68.5), 69)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(2.4999), 2)

    def test_clamp(self):
        self.assertEqual(clamp(130), 100)
        self.assertEqual(clamp(-4), 0)
        self.assertEqual(clamp(42.5), 42.5)

    def test_contains_term_respects_word_boundaries(self):
        self.assertFalse(contains_term("results driven", "ts"))
        self.assertTrue(contains_term("ts, react and node", "ts"))
        self.assertTrue(contains_term("amazon web services experience", "amazon web services"))
        self.assertFalse(contains_term("anything", ""))

    def test_to_string_list(self):
        self.assertEqual(to_string_list(None), [])
        self.assertEqual(to_string_list("Berlin, Paris,"), ["Berlin", "Paris"])
        self.assertEqual(to_string_list(["Berlin", None, " "]), ["Berlin"])

    def test_tokenize_and_slug(self):
        self.assertEqual(tokenize("Python, SQL (advanced)"), ["python", "sql", "advanced"])
        self.assertEqual(normalize_slug(" Supply Chain_Ops "), "supply-chain-ops")


if __name__ == '__main__':
    unittest.main()
