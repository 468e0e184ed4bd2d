"""ID3 tag handler using mutagen."""

import os
from pathlib import Path
from typing import Optional

from mutagen import MutagenError
from mutagen.id3 import ID3, ID3NoHeaderError, TALB, TIT2, TPE1

from acoustid_tagger.errors import RenameError, TagOpenError, TagSaveError
from acoustid_tagger.models import TrackTags


class TagHandle:
    """Open artist/title/album tags of one MP3 file."""

    def __init__(self, file_path: str, tags: ID3):
        self.file_path = Path(file_path)
        self._tags = tags
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get_artist(self) -> str:
        return self._get_text("TPE1")

    def get_title(self) -> str:
        return self._get_text("TIT2")

    def get_album(self) -> str:
        return self._get_text("TALB")

    def set_artist(self, value: str) -> None:
        self._tags.add(TPE1(encoding=3, text=value))

    def set_title(self, value: str) -> None:
        self._tags.add(TIT2(encoding=3, text=value))

    def set_album(self, value: str) -> None:
        self._tags.add(TALB(encoding=3, text=value))

    def current_tags(self) -> TrackTags:
        """Snapshot of the stored values."""
        return TrackTags(
            artist=self.get_artist(),
            title=self.get_title(),
            album=self.get_album(),
        )

    def save(self) -> None:
        """
        Persist the tags.

        Raises:
            TagSaveError: If the handle is closed or writing fails.
        """
        if self._closed:
            raise TagSaveError(f"Tag handle already closed: {self.file_path.name}")
        try:
            self._tags.save(str(self.file_path))
        except (MutagenError, OSError) as e:
            raise TagSaveError(f"Failed to store tags in {self.file_path.name}: {e}") from e

    def rename(self, new_name: str) -> Optional[Path]:
        """
        Rename the file within its folder.

        Args:
            new_name: New file name (no directory part)

        Returns:
            The new path, or None when the name is unchanged

        Raises:
            RenameError: If the target exists or the rename fails.
        """
        new_path = self.file_path.with_name(new_name)
        if new_path == self.file_path:
            return None

        # a case-only change points back at the same file on case-insensitive filesystems
        if new_path.exists() and not os.path.samefile(new_path, self.file_path):
            raise RenameError(f"Target already exists: {new_name}")

        try:
            os.rename(self.file_path, new_path)
        except OSError as e:
            raise RenameError(f"Failed to rename {self.file_path.name}: {e}") from e

        self.file_path = new_path
        return new_path

    def close(self) -> None:
        """Release the tags. Safe to call more than once."""
        self._closed = True
        self._tags = None

    def _get_text(self, frame_id: str) -> str:
        """Get the first text value of a frame, or ''."""
        if self._tags is None:
            return ""
        frame = self._tags.get(frame_id)
        if frame and frame.text:
            return str(frame.text[0])
        return ""


class ID3Handler:
    """Opens ID3 tags for reading and writing."""

    SUPPORTED_EXTENSIONS = {".mp3"}

    @classmethod
    def is_supported(cls, file_path: str) -> bool:
        """Check if file format is supported."""
        return Path(file_path).suffix.lower() in cls.SUPPORTED_EXTENSIONS

    def open(self, file_path: str) -> TagHandle:
        """
        Open the tags of a file.

        Files without an ID3 header get an empty tag that is created on save.

        Args:
            file_path: Path to MP3 file

        Returns:
            TagHandle for the file

        Raises:
            TagOpenError: If the file is missing or its tags are unreadable.
        """
        if not Path(file_path).is_file():
            raise TagOpenError(f"File not found: {file_path}")

        try:
            tags = ID3(file_path)
        except ID3NoHeaderError:
            tags = ID3()
        except (MutagenError, OSError) as e:
            raise TagOpenError(f"Failed to parse ID3 tags of {Path(file_path).name}: {e}") from e

        return TagHandle(file_path, tags)
