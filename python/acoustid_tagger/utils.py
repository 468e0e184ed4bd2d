"""Utility functions for AcoustID Tagger."""

import re

# Mis-decoded sequences seen in AcoustID metadata. Replacements are plain
# ASCII, so applying the table twice changes nothing. "â†’" ends in "’",
# so it must be replaced before the bare apostrophe.
INPUT_REPLACEMENTS = (
    ("â†’", "-"),
    ("â€™", "'"),
    ("→", "-"),
    ("’", "'"),
)


def sanitize_input(value: str) -> str:
    """Normalize punctuation that breaks prompt rendering."""
    for bad, good in INPUT_REPLACEMENTS:
        value = value.replace(bad, good)
    return value


def sanitize_filename(s: str) -> str:
    """Sanitize a string for use in filenames."""
    s = re.sub(r'[<>:"/\\|?*]', '_', s)
    s = s.strip('. ')
    s = re.sub(r'\s+', ' ', s)
    s = re.sub(r'_+', '_', s)
    return s


def generate_filename(artist: str, song_name: str) -> str:
    """Build the '<artist> - <song>.mp3' name used when renaming."""
    return f"{sanitize_filename(artist)} - {sanitize_filename(song_name)}.mp3"
