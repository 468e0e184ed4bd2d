"""Shared test fixtures for acoustid_tagger tests."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add the python/ source root to the path so tests run without installing
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from acoustid_tagger.models import (
    Artist, LookupResponse, MatchCandidate, Recording, ReleaseGroup, Result,
    TrackTags
)


@pytest.fixture
def foo_artist():
    """A single artist credit."""
    return Artist(id="artist-foo", name="Foo")


@pytest.fixture
def album_group(foo_artist):
    """A plain album release group crediting Foo."""
    return ReleaseGroup(type="Album", title="Bar", artists=(foo_artist,))


@pytest.fixture
def sample_recording(foo_artist, album_group):
    """A recording with one artist and one album."""
    return Recording(
        title="Song",
        artists=(foo_artist,),
        release_groups=(album_group,),
        sources=3,
        duration=205,
    )


@pytest.fixture
def sample_response(sample_recording):
    """A lookup response with one result and one recording."""
    return LookupResponse(results=(
        Result(score=0.9, recordings=(sample_recording,)),
    ))


@pytest.fixture
def sample_candidates():
    """Two candidates as produced by reconciliation."""
    return [
        MatchCandidate(artist="Foo", song_name="Song", album="Bar",
                       score=0.9, sources=3),
        MatchCandidate(artist="Foo", song_name="Song", album="Baz",
                       score=0.9, sources=3),
    ]


@pytest.fixture
def mock_handle():
    """A TagHandle stand-in with stored tags."""
    handle = Mock()
    handle.current_tags = Mock(return_value=TrackTags(
        artist="Old Artist", title="Old Title", album="Old Album"
    ))
    handle.get_album = Mock(return_value="Old Album")
    return handle


@pytest.fixture
def mock_prompts():
    """A prompter stand-in; tests set select_one/edit_value side effects."""
    prompts = Mock()
    prompts.select_one = Mock(return_value=0)
    prompts.edit_value = Mock(side_effect=lambda label, default: default)
    prompts.print = Mock()
    prompts.show_progress = Mock()
    prompts.show_summary = Mock()
    return prompts
