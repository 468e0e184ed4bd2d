"""Chromaprint fingerprinting through the fpcalc command line tool."""

import json
import subprocess
from typing import Tuple

from acoustid_tagger.errors import FingerprintError


class Fingerprinter:
    """Runs fpcalc against audio files."""

    def __init__(self, fpcalc_path: str, timeout: float = 120):
        """
        Initialize fingerprinter.

        Args:
            fpcalc_path: Path to the fpcalc binary
            timeout: Seconds to wait for fpcalc before giving up
        """
        self.fpcalc_path = fpcalc_path
        self.timeout = timeout

    def fingerprint(self, file_path: str) -> Tuple[int, str]:
        """
        Generate an AcoustID fingerprint for a file.

        Args:
            file_path: Path to audio file

        Returns:
            (duration_seconds, fingerprint) tuple

        Raises:
            FingerprintError: If fpcalc fails or its output is unusable.
        """
        try:
            proc = subprocess.run(
                [self.fpcalc_path, "-json", file_path],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise FingerprintError(f"could not run fpcalc: {e}") from e

        if proc.returncode != 0:
            detail = proc.stderr.strip() or f"exit status {proc.returncode}"
            raise FingerprintError(f"fpcalc failed: {detail}")

        return self._parse_output(proc.stdout)

    def _parse_output(self, output: str) -> Tuple[int, str]:
        """Parse fpcalc -json output into (duration, fingerprint)."""
        try:
            data = json.loads(output)
            duration = int(float(data["duration"]))
            fingerprint = data["fingerprint"]
        except (ValueError, KeyError, TypeError) as e:
            raise FingerprintError(f"invalid JSON output from fpcalc: {e}") from e

        if not isinstance(fingerprint, str) or not fingerprint:
            raise FingerprintError("fpcalc returned an empty fingerprint")

        return duration, fingerprint
