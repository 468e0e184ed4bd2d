"""Tests for utils.py utility functions."""

import pytest

from acoustid_tagger.utils import generate_filename, sanitize_filename, sanitize_input


class TestSanitizeInput:
    """Tests for sanitize_input function."""

    def test_replaces_misdecoded_apostrophe(self):
        """Should turn the mis-decoded curly apostrophe into a straight one."""
        assert sanitize_input("Donâ€™t Stop") == "Don't Stop"

    def test_replaces_curly_apostrophe(self):
        """Should straighten a proper curly apostrophe."""
        assert sanitize_input("Don’t") == "Don't"

    def test_replaces_arrow(self):
        """Should turn arrow glyphs into hyphens."""
        assert sanitize_input("A → B") == "A - B"
        assert sanitize_input("A â†’ B") == "A - B"

    def test_leaves_plain_text(self):
        """Should not alter ordinary text."""
        assert sanitize_input("Plain Title (Remix)") == "Plain Title (Remix)"

    @pytest.mark.parametrize("value", [
        "",
        "Donâ€™t",
        "â€™â€™",
        "a → b ’ c",
        "café",
    ])
    def test_idempotent(self, value):
        """Should give the same result when applied twice."""
        once = sanitize_input(value)
        assert sanitize_input(once) == once


class TestSanitizeFilename:
    """Tests for sanitize_filename function."""

    def test_replaces_invalid_characters(self):
        """Should replace invalid filename characters with underscore."""
        result = sanitize_filename('AC/DC: "Live"?')
        for ch in '/:"?':
            assert ch not in result

    def test_strips_leading_trailing_dots_and_spaces(self):
        """Should strip leading/trailing dots and spaces."""
        assert sanitize_filename("  .test. ") == "test"

    def test_collapses_multiple_spaces(self):
        """Should collapse multiple spaces to single space."""
        assert sanitize_filename("test    name") == "test name"


class TestGenerateFilename:
    """Tests for generate_filename function."""

    def test_artist_dash_song(self):
        """Should build '<artist> - <song>.mp3'."""
        assert generate_filename("Foo", "Bar") == "Foo - Bar.mp3"

    def test_sanitizes_parts(self):
        """Should keep path separators out of the name."""
        assert "/" not in generate_filename("AC/DC", "T.N.T.")
