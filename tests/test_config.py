"""Tests for myexpense.config."""

import stat
from pathlib import Path

import pytest
import tomli_w

from myexpense.config import (
    DEFAULT_CONFIG,
    create_default_config,
    get_config_path,
    get_medium_name,
    get_setting,
    load_config,
)


class TestConfigFile:
    """Tests for reading and writing the config file."""

    def test_path_follows_xdg(self, isolated_home: Path) -> None:
        """Should live under XDG_CONFIG_HOME."""
        assert get_config_path() == isolated_home / "config" / "myexpense" / "config.toml"

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Should fall back to defaults without a file."""
        assert load_config(tmp_path / "none.toml") == DEFAULT_CONFIG

    def test_default_file_is_private(self, tmp_path: Path) -> None:
        """Should create the file with 600 permissions."""
        path = tmp_path / "myexpense" / "config.toml"
        create_default_config(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert load_config(path) == DEFAULT_CONFIG

    def test_partial_file_merges_defaults(self, tmp_path: Path) -> None:
        """Should keep defaults for keys the file leaves out."""
        path = tmp_path / "config.toml"
        path.write_bytes(tomli_w.dumps({"storage": {"medium": "remote"}, "remote": {"base_url": "https://x"}}).encode())
        config = load_config(path)

        assert config["storage"]["medium"] == "remote"
        assert config["remote"]["base_url"] == "https://x"
        assert config["remote"]["collection"] == "transactions"
        assert config["display"]["currency"] == "₹"


class TestSettings:
    """Tests for get_setting and get_medium_name."""

    def test_get_setting_falls_back(self) -> None:
        """Should use the default for missing sections."""
        assert get_setting({}, "logging", "level") == "WARNING"

    def test_medium_name(self) -> None:
        """Should accept local and remote case-insensitively."""
        assert get_medium_name({"storage": {"medium": "Remote"}}) == "remote"
        assert get_medium_name({}) == "local"

    def test_unknown_medium(self) -> None:
        """Should reject unknown media."""
        with pytest.raises(ValueError):
            get_medium_name({"storage": {"medium": "ftp"}})
