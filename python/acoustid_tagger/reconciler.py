"""Turn an AcoustID lookup response into an ordered list of tag candidates."""

from typing import Iterable, List, Sequence

from acoustid_tagger.models import (
    Artist, LookupResponse, MatchCandidate, Recording, ReleaseGroup
)

COMPILATION = "Compilation"


def build_artist_credit(artists: Iterable[Artist]) -> str:
    """
    Join artist names with their join phrases.

    Args:
        artists: Artist credits in display order

    Returns:
        Display string, e.g. "A & B" (empty for no artists).
    """
    return "".join(a.name + (a.join_phrase or "") for a in artists)


def is_artist_in_list(artist_id: str, artists: Iterable[Artist]) -> bool:
    """Check if an artist id appears in a credit list."""
    return any(a.id == artist_id for a in artists)


def sort_by_sources(recordings: Sequence[Recording]) -> List[Recording]:
    """Order recordings by sources, highest first, keeping ties in input order."""
    decorated = [(-rec.sources, i, rec) for i, rec in enumerate(recordings)]
    decorated.sort(key=lambda d: (d[0], d[1]))
    return [rec for _, _, rec in decorated]


def within_duration(recording: Recording, measured_duration: int,
                    tolerance: int) -> bool:
    """Check the recording length against the file; unknown lengths pass."""
    if not recording.has_duration:
        return True
    return abs(recording.duration - measured_duration) <= tolerance


def accepts_release_group(recording: Recording, group: ReleaseGroup) -> bool:
    """
    Decide whether a release group may be offered for a recording.

    Only the first secondary type is checked for compilations. A group with
    an artist list must credit the recording's first artist.
    """
    if group.secondary_types and group.secondary_types[0] == COMPILATION:
        return False

    if group.artists:
        if not recording.artists:
            return False
        return is_artist_in_list(recording.artists[0].id, group.artists)

    return True


def reconcile(response: LookupResponse, measured_duration: int,
              duration_tolerance: int) -> List[MatchCandidate]:
    """
    Flatten a lookup response into candidates for one file.

    Candidates are grouped by result, then recording (most sources first),
    then release group. Nothing is deduplicated.

    Args:
        response: Parsed AcoustID response
        measured_duration: Length of the local file in seconds
        duration_tolerance: Largest accepted length difference in seconds

    Returns:
        Ordered list of MatchCandidate (possibly empty).
    """
    candidates = []

    for result in response.results:
        for recording in sort_by_sources(result.recordings):
            # recording ids without metadata come back with no release groups
            if not recording.release_groups:
                continue

            if not within_duration(recording, measured_duration,
                                   duration_tolerance):
                continue

            artist = build_artist_credit(recording.artists)

            for group in recording.release_groups:
                if not accepts_release_group(recording, group):
                    continue

                candidates.append(MatchCandidate(
                    artist=artist,
                    song_name=recording.title,
                    album=group.title,
                    score=result.score,
                    sources=recording.sources,
                ))

    return candidates
