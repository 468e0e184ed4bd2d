#!/usr/bin/env python3
"""
AcoustID Tagger - Identify MP3 files by fingerprint and fix their ID3 tags.

Usage:
    python -m acoustid_tagger /path/to/music [options]
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from acoustid_tagger.acoustid_client import AcoustIDClient
from acoustid_tagger.config import (
    DEFAULT_DURATION_TOLERANCE, DEFAULT_TIMEOUT, TaggerConfig,
    build_tagger_config, eprint, get_acoustid_instructions,
    get_fpcalc_instructions, load_config, validate_config
)
from acoustid_tagger.errors import (
    FingerprintError, LookupServiceError, TagOpenError, TagSaveError,
    UnparsableNameError
)
from acoustid_tagger.filename_parser import extract_from_filename
from acoustid_tagger.fingerprinter import Fingerprinter
from acoustid_tagger.id3_handler import ID3Handler
from acoustid_tagger.interactive import InteractivePrompts
from acoustid_tagger.models import MatchCandidate, ProcessingStats
from acoustid_tagger.reconciler import reconcile
from acoustid_tagger.session import SessionPolicy, TagEditSession


class TaggerProcessor:
    """Runs fingerprint, lookup, review and save for each file in turn."""

    def __init__(self, config: TaggerConfig, prompts: InteractivePrompts,
                 fingerprinter: Optional[Fingerprinter] = None,
                 client: Optional[AcoustIDClient] = None,
                 id3_handler: Optional[ID3Handler] = None):
        """
        Initialize processor.

        Args:
            config: Settings for this run
            prompts: Interactive prompts handler
            fingerprinter: fpcalc wrapper (built from config if omitted)
            client: AcoustID client (built from config if omitted)
            id3_handler: Tag store (built if omitted)
        """
        self.config = config
        self.prompts = prompts
        self.stats = ProcessingStats()

        self.fingerprinter = fingerprinter or Fingerprinter(config.fpcalc_path)
        self.client = client or AcoustIDClient(
            config.api_key, config.lookup_url, config.timeout
        )
        self.id3_handler = id3_handler or ID3Handler()
        self.policy = SessionPolicy(
            auto_select_single=config.auto_select_single,
            rename_on_commit=config.rename_on_commit,
        )

    def process(self, path: str) -> None:
        """
        Main entry point for processing.

        Args:
            path: Path to process (file or folder)
        """
        path_obj = Path(path)

        if path_obj.is_file():
            files = [str(path_obj)]
        elif path_obj.is_dir():
            files = self._discover_audio_files(path)
            if not files:
                self.prompts.print(f"No MP3 files found in: {path}")
        else:
            eprint(f"Path not found: {path}")
            sys.exit(1)

        for i, file_path in enumerate(files, 1):
            self.prompts.show_progress(i, len(files), Path(file_path).name)
            self.process_file(file_path)

        self.prompts.show_summary(self.stats)

    def process_file(self, file_path: str) -> None:
        """Identify, review and tag a single file."""
        self.stats.total_files += 1
        file_name = Path(file_path).name

        if not ID3Handler.is_supported(file_path):
            self._skip(file_path, f"Unsupported format: {file_name}")
            return

        try:
            duration, fingerprint = self.fingerprinter.fingerprint(file_path)
        except FingerprintError as e:
            self._skip(file_path, f"Failed to generate fingerprint for \"{file_name}\": {e}")
            return

        try:
            response = self.client.lookup(duration, fingerprint)
        except LookupServiceError as e:
            self._skip(file_path, f"AcoustID lookup failed for \"{file_name}\": {e.message}")
            return

        candidates = reconcile(response, duration, self.config.duration_tolerance)
        fallback = None

        if not candidates:
            self.stats.no_match += 1
            if response.is_empty:
                self.prompts.print(f"  No matches for: {file_name}")
            else:
                self.prompts.print(f"  No usable matches for: {file_name}")

            if not self.config.filename_fallback:
                self.stats.files_skipped += 1
                return

            try:
                fallback = extract_from_filename(file_name)
            except UnparsableNameError as e:
                self._skip(file_path, str(e))
                return

            self.stats.filename_fallbacks += 1
            self.prompts.print(f"  Using file name: {fallback[0]} - {fallback[1]}")

        try:
            handle = self.id3_handler.open(file_path)
        except TagOpenError as e:
            self._skip(file_path, str(e))
            return

        try:
            if fallback is not None:
                candidates = [MatchCandidate(
                    artist=fallback[0],
                    song_name=fallback[1],
                    album=handle.get_album(),
                )]

            if len(candidates) == 1 and self.policy.auto_select_single:
                self.prompts.print(f"  Auto selected single match for: {file_name}")

            session = TagEditSession(file_name, candidates, handle,
                                     self.prompts, self.policy)
            outcome = session.run()
        except TagSaveError as e:
            self._skip(file_path, str(e))
            return
        finally:
            handle.close()

        if not outcome.committed:
            self.stats.files_skipped += 1
            self.prompts.print(f"  Skipped, tags unchanged: {file_name}")
            return

        self.stats.tags_updated += 1
        self.prompts.print(f"  Updated: {file_name}")
        if outcome.renamed_to:
            self.stats.files_renamed += 1
            self.prompts.print(f"  Renamed: {file_name} -> {outcome.renamed_to}")

    def _skip(self, file_path: str, message: str) -> None:
        """Report a failure for one file and move on."""
        eprint(message)
        self.stats.files_skipped += 1
        self.stats.errors.append(message)

    def _discover_audio_files(self, folder_path: str) -> List[str]:
        """List supported files in a folder, sorted by name."""
        folder = Path(folder_path)
        return sorted(
            str(p) for p in folder.iterdir()
            if p.is_file() and ID3Handler.is_supported(str(p))
        )


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        description="Identify MP3 files with AcoustID fingerprints, "
                    "review the matches and write artist/title/album tags.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Tag every MP3 in a folder
  python -m acoustid_tagger /path/to/music

  # Tag a single file and rename it to "Artist - Song.mp3"
  python -m acoustid_tagger /path/to/song.mp3 --rename-files

  # Accept single matches without asking
  python -m acoustid_tagger /path/to/music --auto-handle-single-match
"""
    )

    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="MP3 file or folder to process (default: current folder)"
    )

    # Matching options
    parser.add_argument(
        "--song-length-difference",
        type=int,
        default=DEFAULT_DURATION_TOLERANCE,
        help="Skip matches whose duration differs by more than this many "
             f"seconds (default: {DEFAULT_DURATION_TOLERANCE})"
    )

    parser.add_argument(
        "--auto-handle-single-match",
        action="store_true",
        help="Save a match without asking when it is the only result"
    )

    parser.add_argument(
        "--no-filename-fallback",
        action="store_true",
        help="Do not propose 'Artist - Song' from the file name when nothing matches"
    )

    # File handling
    parser.add_argument(
        "--rename-files",
        action="store_true",
        help="Rename files to 'Artist - Song.mp3' after saving tags"
    )

    # Configuration
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"AcoustID request timeout in seconds (default: {DEFAULT_TIMEOUT})"
    )

    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: ./.env)"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    # Verbosity
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output"
    )

    return parser


def main():
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()

    # Validate path
    if not os.path.exists(args.path):
        parser.error(f"Path does not exist: {args.path}")

    # Load configuration
    config = build_tagger_config(load_config(args.env_file), args)
    problems = validate_config(config)

    if problems:
        for problem in problems:
            eprint(f"Configuration error: {problem}")
        if any("fpcalc" in p for p in problems):
            eprint(get_fpcalc_instructions())
        if any("ACOUSTID" in p for p in problems):
            eprint(get_acoustid_instructions())
        sys.exit(1)

    prompts = InteractivePrompts(no_color=args.no_color, quiet=args.quiet)
    processor = TaggerProcessor(config, prompts)

    try:
        processor.process(args.path)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        sys.exit(1)


if __name__ == "__main__":
    main()
