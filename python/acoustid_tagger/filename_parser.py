"""Best-effort artist/title extraction from file names like 'Artist - Song.mp3'."""

import re
from pathlib import Path
from typing import Tuple

from acoustid_tagger.errors import UnparsableNameError

SEPARATOR = " - "

# Bracketed forms go first so their brackets are removed with the phrase.
FILLER_PATTERNS = [
    re.compile(r"[\(\[]\s*official\s+(?:music\s+video|audio|video)\s*[\)\]]",
               re.IGNORECASE),
    re.compile(r"[\(\[]\s*lyrics(?:\s+video)?\s*[\)\]]", re.IGNORECASE),
    re.compile(r"[\(\[]\s*prod\.[^\)\]]*[\)\]]", re.IGNORECASE),
    re.compile(r"\bofficial\s+(?:music\s+video|audio|video)\b", re.IGNORECASE),
    re.compile(r"\blyrics(?:\s+video)?\b", re.IGNORECASE),
    re.compile(r"\bprod\.\s*.+?(?=\s+-\s+|\.mp3$|$)", re.IGNORECASE),
]

MP3_SUFFIX = re.compile(r"\.mp3$", re.IGNORECASE)


def clean_filename(file_name: str) -> str:
    """
    Remove filler phrases such as '(Official Video)' or '[Lyrics]'.

    Args:
        file_name: File name, with or without extension

    Returns:
        Cleaned name with whitespace collapsed.
    """
    name = file_name
    for pattern in FILLER_PATTERNS:
        name = pattern.sub("", name)

    name = re.sub(r"[ \t]{2,}", " ", name)
    name = re.sub(r"\s+(\.mp3)$", r"\1", name, flags=re.IGNORECASE)
    return name.strip()


def extract_from_filename(file_name: str) -> Tuple[str, str]:
    """
    Derive (artist, song name) from a file name.

    Args:
        file_name: Name (or path) of the audio file

    Returns:
        (artist, song_name) tuple

    Raises:
        UnparsableNameError: If the cleaned name does not contain exactly
            one ' - ' separator.
    """
    cleaned = clean_filename(Path(file_name).name)
    parts = cleaned.split(SEPARATOR)

    if len(parts) != 2:
        raise UnparsableNameError(
            f"Expected 'Artist{SEPARATOR}Song' in file name: {file_name}"
        )

    artist = parts[0].strip()
    song_name = MP3_SUFFIX.sub("", parts[1]).strip()
    return artist, song_name
