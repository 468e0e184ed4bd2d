"""Interactive confirm/edit/save workflow for the tags of one file."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from acoustid_tagger.config import eprint
from acoustid_tagger.errors import PromptCancelled, RenameError
from acoustid_tagger.models import EditableTag, MatchCandidate, TagField, TrackTags
from acoustid_tagger.utils import generate_filename, sanitize_input


class SessionState(Enum):
    """States of a tag edit session."""
    SELECT_MATCH = "select_match"
    EDIT_MENU = "edit_menu"
    EDIT_FIELD = "edit_field"
    COMMITTED = "committed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.COMMITTED, SessionState.ABORTED)


@dataclass
class SessionPolicy:
    """Per-run switches that change how a session behaves."""
    auto_select_single: bool = False
    rename_on_commit: bool = False


@dataclass
class SessionOutcome:
    """What a finished session did."""
    state: SessionState
    written: Optional[TrackTags] = None
    renamed_to: Optional[str] = None
    rename_error: Optional[str] = None

    @property
    def committed(self) -> bool:
        return self.state is SessionState.COMMITTED


def describe_candidate(candidate: MatchCandidate) -> str:
    """Display text for one candidate in the match list."""
    return (
        f"{sanitize_input(candidate.artist)} - {sanitize_input(candidate.song_name)}\n"
        f"Album:   {sanitize_input(candidate.album)}\n"
        f"Score:   {candidate.score:.2f}   Sources: {candidate.sources}"
    )


def describe_tag(tag: EditableTag) -> str:
    """Display text for one row of the edit menu."""
    if tag.field is TagField.COMMIT:
        return tag.field.label
    old = tag.old_value or "(empty)"
    return f"{tag.field.label}: {tag.new_value}\nCurrent: {old}"


class TagEditSession:
    """
    State machine driving the edit of one file's artist/title/album.

    SELECT_MATCH -> EDIT_MENU <-> EDIT_FIELD, with EDIT_MENU ending in
    COMMITTED on Save. Any cancelled prompt ends in ABORTED, which writes
    nothing.
    """

    def __init__(self, file_name: str, candidates: List[MatchCandidate],
                 handle, prompts, policy: Optional[SessionPolicy] = None):
        """
        Initialize session.

        Args:
            file_name: Name shown in prompt headings
            candidates: Ordered candidates from reconciliation
            handle: Open TagHandle for the file
            prompts: Prompter with select_one/edit_value
            policy: Auto-select and rename switches
        """
        self.file_name = file_name
        self.candidates = candidates
        self.handle = handle
        self.prompts = prompts
        self.policy = policy or SessionPolicy()

        self.current = handle.current_tags()
        self.tags: List[EditableTag] = []
        self.editing: Optional[EditableTag] = None
        self.state: Optional[SessionState] = None

        self._handlers = {
            SessionState.SELECT_MATCH: self._select_match,
            SessionState.EDIT_MENU: self._edit_menu,
            SessionState.EDIT_FIELD: self._edit_field,
        }

    def start(self) -> SessionState:
        """Pick the entry state."""
        if len(self.candidates) == 1 and self.policy.auto_select_single:
            self._seed_tags(self.candidates[0])
            return SessionState.COMMITTED
        return SessionState.SELECT_MATCH

    def step(self) -> SessionState:
        """Run the current state and return the next one."""
        try:
            return self._handlers[self.state]()
        except PromptCancelled:
            return SessionState.ABORTED

    def run(self) -> SessionOutcome:
        """
        Drive the session to a terminal state.

        Returns:
            SessionOutcome describing what was written

        Raises:
            TagSaveError: If saving the committed values fails.
        """
        self.state = self.start()
        while not self.state.is_terminal:
            self.state = self.step()

        if self.state is SessionState.ABORTED:
            return SessionOutcome(state=SessionState.ABORTED)

        return self._commit()

    def value_of(self, field: TagField) -> str:
        """Current proposed value of a field."""
        for tag in self.tags:
            if tag.field is field:
                return tag.new_value
        return ""

    def _seed_tags(self, candidate: MatchCandidate) -> None:
        self.tags = [
            EditableTag(TagField.COMMIT),
            EditableTag(TagField.ARTIST, sanitize_input(candidate.artist),
                        sanitize_input(self.current.artist)),
            EditableTag(TagField.SONG_NAME, sanitize_input(candidate.song_name),
                        sanitize_input(self.current.title)),
            EditableTag(TagField.ALBUM, sanitize_input(candidate.album),
                        sanitize_input(self.current.album)),
        ]

    def _select_match(self) -> SessionState:
        index = self.prompts.select_one(
            f"Select match for: {self.file_name}",
            [describe_candidate(c) for c in self.candidates],
        )
        self._seed_tags(self.candidates[index])
        return SessionState.EDIT_MENU

    def _edit_menu(self) -> SessionState:
        index = self.prompts.select_one(
            f"Edit tags for: {self.file_name}",
            [describe_tag(t) for t in self.tags],
        )
        selected = self.tags[index]
        if selected.field is TagField.COMMIT:
            return SessionState.COMMITTED
        self.editing = selected
        return SessionState.EDIT_FIELD

    def _edit_field(self) -> SessionState:
        tag = self.editing
        tag.new_value = self.prompts.edit_value(tag.field.label, tag.new_value)
        self.editing = None
        return SessionState.EDIT_MENU

    def _commit(self) -> SessionOutcome:
        written = TrackTags(
            artist=sanitize_input(self.value_of(TagField.ARTIST)),
            title=sanitize_input(self.value_of(TagField.SONG_NAME)),
            album=sanitize_input(self.value_of(TagField.ALBUM)),
        )

        self.handle.set_artist(written.artist)
        self.handle.set_title(written.title)
        self.handle.set_album(written.album)
        self.handle.save()

        outcome = SessionOutcome(state=SessionState.COMMITTED, written=written)

        if self.policy.rename_on_commit:
            new_name = generate_filename(written.artist, written.title)
            try:
                if self.handle.rename(new_name) is not None:
                    outcome.renamed_to = new_name
            except RenameError as e:
                eprint(f"Rename failed (tags were saved): {e}")
                outcome.rename_error = str(e)

        return outcome
