"""Data models for AcoustID Tagger."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Artist:
    """An artist credit as returned by AcoustID."""
    id: str
    name: str
    join_phrase: str = ""


@dataclass(frozen=True)
class ReleaseGroup:
    """An album/single/compilation entry a recording belongs to."""
    type: str
    title: str
    secondary_types: Tuple[str, ...] = ()
    artists: Tuple[Artist, ...] = ()


@dataclass(frozen=True)
class Recording:
    """One recording matched to a fingerprint."""
    title: str
    artists: Tuple[Artist, ...] = ()
    release_groups: Tuple[ReleaseGroup, ...] = ()
    sources: int = 0
    duration: Optional[int] = None  # seconds; None when not reported

    @property
    def has_duration(self) -> bool:
        """Check if the service reported a usable duration."""
        return bool(self.duration)


@dataclass(frozen=True)
class Result:
    """One fingerprint match with its confidence score."""
    score: float
    recordings: Tuple[Recording, ...] = ()


@dataclass(frozen=True)
class LookupResponse:
    """Complete answer to one AcoustID lookup."""
    results: Tuple[Result, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Check if no result carries any recording."""
        return not any(r.recordings for r in self.results)


@dataclass(frozen=True)
class MatchCandidate:
    """A fully resolved (artist, song, album) proposal for one file."""
    artist: str
    song_name: str
    album: str
    score: float = 0.0
    sources: int = 0


class TagField(Enum):
    """Rows of the edit menu. COMMIT saves and exits."""
    COMMIT = "Save"
    ARTIST = "Artist"
    SONG_NAME = "Song name"
    ALBUM = "Album"

    @property
    def label(self) -> str:
        return self.value


@dataclass
class EditableTag:
    """One editable field of a session: proposed value next to stored value."""
    field: TagField
    new_value: str = ""
    old_value: str = ""


@dataclass(frozen=True)
class TrackTags:
    """Artist/title/album currently stored in a file."""
    artist: str = ""
    title: str = ""
    album: str = ""


@dataclass
class ProcessingStats:
    """Statistics for a processing run."""
    total_files: int = 0
    tags_updated: int = 0
    files_renamed: int = 0
    files_skipped: int = 0
    no_match: int = 0
    filename_fallbacks: int = 0
    errors: List[str] = field(default_factory=list)
