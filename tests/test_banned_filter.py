#!/usr/bin/env python3
"""
Unit tests for the banned phrase filter.
"""

import unittest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from server.chat.banned_filter import BannedPhraseFilter


class TestBannedPhraseFilter(unittest.TestCase):
    """Case-insensitive substring matching."""

    def setUp(self):
        self.filter = BannedPhraseFilter(['Spam', 'hate speech', '  '])

    def test_phrases_are_lower_cased_and_blank_ones_dropped(self):
        self.assertEqual(self.filter.phrases, frozenset({'spam', 'hate speech'}))

    def test_match_in_any_casing(self):
        self.assertTrue(self.filter.contains('buy SPAM now'))
        self.assertTrue(self.filter.contains('Hate Speech is bad'))

    def test_substring_without_word_boundaries(self):
        self.assertTrue(self.filter.contains('antispammer'))

    def test_clean_message(self):
        self.assertFalse(self.filter.contains('hello there'))
        self.assertFalse(self.filter.contains('hate'))

    def test_empty_filter_never_matches(self):
        self.assertFalse(BannedPhraseFilter().contains('anything at all'))

    def test_len_counts_phrases(self):
        self.assertEqual(len(self.filter), 2)
        self.assertEqual(len(BannedPhraseFilter()), 0)


if __name__ == '__main__':
    unittest.main()
