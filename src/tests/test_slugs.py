"""Slug derivation and reading-time/tag normalization."""

from __future__ import annotations

import re

from django.test import SimpleTestCase

from blogs.normalization import normalize_tags, reading_time_minutes
from blogs.slugs import generate_slug


class GenerateSlugTests(SimpleTestCase):
    def test_lowercases_and_hyphenates(self):
        self.assertEqual(generate_slug("Hidden Beaches of Thailand"), "hidden-beaches-of-thailand")

    def test_strips_punctuation_and_non_ascii(self):
        self.assertEqual(generate_slug("Café & Crêpes: Paris, Day #2!"), "caf-crpes-paris-day-2")

    def test_collapses_whitespace_runs(self):
        self.assertEqual(generate_slug("Rome   in\tthree  days"), "rome-in-three-days")

    def test_truncates_to_fifty_characters(self):
        slug = generate_slug("abcd " * 30)
        self.assertEqual(slug, "-".join(["abcd"] * 10))
        self.assertEqual(len(generate_slug("x" * 120)), 50)

    def test_no_hyphen_at_either_end(self):
        self.assertEqual(generate_slug("!! hello"), "hello")
        self.assertEqual(generate_slug("hello ??"), "hello")
        self.assertEqual(generate_slug("a" * 49 + " tail"), "a" * 49)

    def test_surrounding_whitespace_does_not_leave_hyphens(self):
        self.assertEqual(generate_slug("  Lisbon Nights  "), "lisbon-nights")

    def test_output_alphabet(self):
        titles = [
            "Hello, World!",
            "10 Things to do in Oslo (2024 edition)",
            "ÜBER Berlin — a guide",
            "tabs\tand\nnewlines",
            "x" * 120,
        ]
        for title in titles:
            slug = generate_slug(title)
            self.assertLessEqual(len(slug), 50)
            self.assertRegex(slug, re.compile(r"^[a-z0-9-]*$"))
            self.assertEqual(slug, slug.lower())

    def test_symbol_only_title_yields_empty_slug(self):
        self.assertEqual(generate_slug("!!!"), "")


class ReadingTimeTests(SimpleTestCase):
    def test_exactly_four_hundred_words_is_two_minutes(self):
        self.assertEqual(reading_time_minutes(" ".join(["word"] * 400)), 2)

    def test_four_hundred_and_one_words_rounds_up(self):
        self.assertEqual(reading_time_minutes(" ".join(["word"] * 401)), 3)

    def test_short_text_is_one_minute(self):
        self.assertEqual(reading_time_minutes("just a few words"), 1)

    def test_empty_text_is_zero(self):
        self.assertEqual(reading_time_minutes(""), 0)


class NormalizeTagsTests(SimpleTestCase):
    def test_lowercases_trims_and_dedupes(self):
        self.assertEqual(normalize_tags([" Japan", "japan", "Temples ", "", "  "]), ["japan", "temples"])

    def test_none_is_empty(self):
        self.assertEqual(normalize_tags(None), [])
