"""Configuration management for AcoustID Tagger."""

import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Key published in the AcoustID web service docs. It is rotated upstream, so
# set ACOUSTID_API_KEY to your own application key.
DEFAULT_API_KEY = "cvmvE4sHiAU"
DEFAULT_LOOKUP_URL = "https://api.acoustid.org/v2/lookup"
DEFAULT_DURATION_TOLERANCE = 15
DEFAULT_TIMEOUT = 15


def eprint(*args, **kwargs):
    """Print to stderr."""
    print(*args, file=sys.stderr, **kwargs)


@dataclass
class TaggerConfig:
    """Settings for one tagging run, passed explicitly to every stage."""
    api_key: str = DEFAULT_API_KEY
    lookup_url: str = DEFAULT_LOOKUP_URL
    fpcalc_path: str = "./fpcalc"
    duration_tolerance: int = DEFAULT_DURATION_TOLERANCE
    auto_select_single: bool = False
    rename_on_commit: bool = False
    filename_fallback: bool = True
    timeout: float = DEFAULT_TIMEOUT


def get_fpcalc_path() -> str:
    """
    Locate the fpcalc binary.

    Order: FPCALC_BINARY_PATH, then the PATH, then ./fpcalc.

    Returns:
        Path to fpcalc (not checked for existence).
    """
    fpcalc = os.getenv("FPCALC_BINARY_PATH")
    if fpcalc:
        return fpcalc

    found = shutil.which("fpcalc")
    if found:
        return found

    return "./fpcalc"


def load_config(env_file: Optional[str] = None) -> dict:
    """
    Load configuration from .env file.

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Dictionary of configuration values.
    """
    if env_file is None:
        env_file = ".env"

    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        eprint(f"Loaded environment from {env_path.resolve()}")

    return {
        "acoustid_api_key": os.getenv("ACOUSTID_API_KEY") or DEFAULT_API_KEY,
        "acoustid_api_url": os.getenv("ACOUSTID_API_URL") or DEFAULT_LOOKUP_URL,
        "fpcalc_path": get_fpcalc_path(),
    }


def build_tagger_config(config: dict, args) -> TaggerConfig:
    """
    Combine environment configuration and CLI arguments.

    Args:
        config: Dictionary from load_config()
        args: Parsed CLI arguments

    Returns:
        TaggerConfig for the run.
    """
    return TaggerConfig(
        api_key=config["acoustid_api_key"],
        lookup_url=config["acoustid_api_url"],
        fpcalc_path=config["fpcalc_path"],
        duration_tolerance=args.song_length_difference,
        auto_select_single=args.auto_handle_single_match,
        rename_on_commit=args.rename_files,
        filename_fallback=not args.no_filename_fallback,
        timeout=args.timeout,
    )


def validate_config(config: TaggerConfig) -> List[str]:
    """
    Validate configuration and return a list of problems.

    Args:
        config: TaggerConfig to check

    Returns:
        List of human readable problems (empty if usable).
    """
    problems = []

    if not Path(config.fpcalc_path).is_file():
        problems.append(f"fpcalc not found at {config.fpcalc_path}")

    if not config.api_key:
        problems.append("ACOUSTID_API_KEY is empty")

    if config.duration_tolerance < 0:
        problems.append("song length difference must not be negative")

    return problems


def get_fpcalc_instructions() -> str:
    """Return instructions for installing fpcalc."""
    return """
To install fpcalc (Chromaprint):
1. Debian/Ubuntu: sudo apt install libchromaprint-tools
   macOS:         brew install chromaprint
2. Or download a build from https://acoustid.org/chromaprint
3. Put it on your PATH, or point to it in your .env file:
   FPCALC_BINARY_PATH=/path/to/fpcalc
"""


def get_acoustid_instructions() -> str:
    """Return instructions for obtaining an AcoustID API key."""
    return """
To get an AcoustID API key:
1. Sign in at https://acoustid.org/login
2. Register an application at https://acoustid.org/new-application
3. Copy the API key to your .env file:
   ACOUSTID_API_KEY=your_api_key
"""
