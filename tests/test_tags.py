#!/usr/bin/env python3
"""Unit tests for yt_extract.tags"""

import unittest

from yt_extract.tags import is_stop_word, normalize_and_filter_tags


class TestNormalizeAndFilterTags(unittest.TestCase):
    def test_title_cases_latin_tags(self):
        self.assertEqual(
            normalize_and_filter_tags(["  Machine learning ", "python"]),
            ["Machine Learning", "Python"],
        )

    def test_drops_stop_words_short_and_long(self):
        tags = ["the", "x", "a" * 31, "ok"]
        self.assertEqual(normalize_and_filter_tags(tags), ["Ok"])

    def test_drops_punctuation(self):
        self.assertEqual(normalize_and_filter_tags(["c++", "node.js", "rust-lang"]), ["Rust-lang"])

    def test_keeps_non_latin_as_is(self):
        self.assertEqual(normalize_and_filter_tags(["Привет мир", "音楽"]), ["привет мир", "音楽"])

    def test_dedupes_in_first_seen_order(self):
        self.assertEqual(
            normalize_and_filter_tags(["Music", "music", "MUSIC ", "jazz"]),
            ["Music", "Jazz"],
        )

    def test_caps_at_fifteen(self):
        tags = [f"tag{i}" for i in range(30)]
        result = normalize_and_filter_tags(tags)
        self.assertEqual(len(result), 15)
        self.assertEqual(result[0], "Tag0")

    def test_language_specific_stop_words(self):
        self.assertEqual(normalize_and_filter_tags(["para", "de"], language="es"), [])
        self.assertEqual(normalize_and_filter_tags(["para"], language="en"), ["Para"])

    def test_unknown_language_has_no_stop_words(self):
        self.assertFalse(is_stop_word("the", "de"))
