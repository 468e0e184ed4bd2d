"""Tests for config.py configuration loading."""

from argparse import Namespace

import pytest

from acoustid_tagger.config import (
    DEFAULT_API_KEY, DEFAULT_LOOKUP_URL, TaggerConfig, build_tagger_config,
    get_fpcalc_path, load_config, validate_config
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove tagger variables from the environment."""
    for name in ("ACOUSTID_API_KEY", "ACOUSTID_API_URL", "FPCALC_BINARY_PATH"):
        # setenv first so values loaded by dotenv are undone after the test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestGetFpcalcPath:
    """Tests for get_fpcalc_path."""

    def test_env_variable_wins(self, clean_env):
        """Should prefer FPCALC_BINARY_PATH."""
        clean_env.setenv("FPCALC_BINARY_PATH", "/custom/fpcalc")
        assert get_fpcalc_path() == "/custom/fpcalc"

    def test_path_lookup(self, clean_env):
        """Should fall back to the PATH."""
        clean_env.setattr("acoustid_tagger.config.shutil.which", lambda name: "/usr/bin/fpcalc")
        assert get_fpcalc_path() == "/usr/bin/fpcalc"

    def test_local_fallback(self, clean_env):
        """Should fall back to ./fpcalc."""
        clean_env.setattr("acoustid_tagger.config.shutil.which", lambda name: None)
        assert get_fpcalc_path() == "./fpcalc"


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_env_file(self, clean_env, tmp_path):
        """Should use defaults when nothing is configured."""
        config = load_config(str(tmp_path / "missing.env"))
        assert config["acoustid_api_key"] == DEFAULT_API_KEY
        assert config["acoustid_api_url"] == DEFAULT_LOOKUP_URL

    def test_reads_env_file(self, clean_env, tmp_path):
        """Should load values from the .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("ACOUSTID_API_KEY=mykey\nFPCALC_BINARY_PATH=/x/fpcalc\n")
        config = load_config(str(env_file))
        assert config["acoustid_api_key"] == "mykey"
        assert config["fpcalc_path"] == "/x/fpcalc"


class TestBuildTaggerConfig:
    """Tests for build_tagger_config."""

    def test_maps_arguments(self):
        """Should copy CLI switches into the config."""
        args = Namespace(
            song_length_difference=7,
            auto_handle_single_match=True,
            rename_files=True,
            no_filename_fallback=True,
            timeout=3.0,
        )
        env = {"acoustid_api_key": "k", "acoustid_api_url": "u", "fpcalc_path": "f"}
        config = build_tagger_config(env, args)

        assert config == TaggerConfig(
            api_key="k", lookup_url="u", fpcalc_path="f",
            duration_tolerance=7, auto_select_single=True,
            rename_on_commit=True, filename_fallback=False, timeout=3.0,
        )


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid(self, tmp_path):
        """Should report nothing for a usable config."""
        fpcalc = tmp_path / "fpcalc"
        fpcalc.write_text("")
        assert validate_config(TaggerConfig(fpcalc_path=str(fpcalc))) == []

    def test_missing_fpcalc(self, tmp_path):
        """Should report a missing fpcalc."""
        problems = validate_config(TaggerConfig(fpcalc_path=str(tmp_path / "nope")))
        assert any("fpcalc" in p for p in problems)

    def test_negative_tolerance(self, tmp_path):
        """Should reject a negative tolerance."""
        fpcalc = tmp_path / "fpcalc"
        fpcalc.write_text("")
        problems = validate_config(TaggerConfig(fpcalc_path=str(fpcalc),
                                                duration_tolerance=-1))
        assert problems

    def test_defaults(self):
        """Should match the documented defaults."""
        config = TaggerConfig()
        assert config.duration_tolerance == 15
        assert config.auto_select_single is False
        assert config.rename_on_commit is False
        assert config.filename_fallback is True
