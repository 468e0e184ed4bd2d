"""Tests for fingerprinter.py fpcalc wrapper."""

import subprocess
from unittest.mock import Mock, patch

import pytest

from acoustid_tagger.errors import FingerprintError
from acoustid_tagger.fingerprinter import Fingerprinter


@pytest.fixture
def fingerprinter():
    """Create a Fingerprinter pointing at a fake binary."""
    return Fingerprinter("/opt/fpcalc")


def completed(stdout="", returncode=0, stderr=""):
    """Build a CompletedProcess stand-in."""
    return Mock(stdout=stdout, returncode=returncode, stderr=stderr)


class TestFingerprint:
    """Tests for fingerprint method."""

    def test_runs_fpcalc_json(self, fingerprinter):
        """Should call fpcalc with -json and the file."""
        out = '{"duration": 205.73, "fingerprint": "AQADtE"}'
        with patch("acoustid_tagger.fingerprinter.subprocess.run",
                   return_value=completed(out)) as run:
            result = fingerprinter.fingerprint("/music/song.mp3")

        assert run.call_args[0][0] == ["/opt/fpcalc", "-json", "/music/song.mp3"]
        assert result == (205, "AQADtE")

    def test_nonzero_exit(self, fingerprinter):
        """Should raise on a failing fpcalc."""
        with patch("acoustid_tagger.fingerprinter.subprocess.run",
                   return_value=completed(returncode=2, stderr="ERROR: decode")):
            with pytest.raises(FingerprintError, match="decode"):
                fingerprinter.fingerprint("/music/bad.mp3")

    def test_missing_binary(self, fingerprinter):
        """Should raise when fpcalc cannot be started."""
        with patch("acoustid_tagger.fingerprinter.subprocess.run",
                   side_effect=FileNotFoundError("no fpcalc")):
            with pytest.raises(FingerprintError):
                fingerprinter.fingerprint("/music/song.mp3")

    def test_timeout(self, fingerprinter):
        """Should raise when fpcalc hangs."""
        with patch("acoustid_tagger.fingerprinter.subprocess.run",
                   side_effect=subprocess.TimeoutExpired("fpcalc", 1)):
            with pytest.raises(FingerprintError):
                fingerprinter.fingerprint("/music/song.mp3")


class TestParseOutput:
    """Tests for _parse_output method."""

    @pytest.mark.parametrize("output", [
        "",
        "not json",
        "[]",
        '{"duration": 10}',
        '{"fingerprint": "AQ"}',
        '{"duration": "x", "fingerprint": "AQ"}',
        '{"duration": 10, "fingerprint": ""}',
    ])
    def test_malformed_output(self, fingerprinter, output):
        """Should raise FingerprintError for unusable output."""
        with pytest.raises(FingerprintError):
            fingerprinter._parse_output(output)

    def test_truncates_duration(self, fingerprinter):
        """Should truncate fractional seconds."""
        assert fingerprinter._parse_output(
            '{"duration": 199.99, "fingerprint": "AQ"}'
        ) == (199, "AQ")
