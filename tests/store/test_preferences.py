"""Tests for myexpense.store.preferences."""

from pathlib import Path

import pytest

from myexpense.store.preferences import get_theme, set_theme, toggle_theme
from myexpense.store.schema import THEME_KEY, set_value


class TestTheme:
    """Tests for theme storage."""

    def test_defaults_to_light(self, tmp_path: Path) -> None:
        """Should read light when nothing is stored."""
        assert get_theme(tmp_path / "db.sqlite") == "light"

    def test_unknown_value_reads_light(self, tmp_path: Path) -> None:
        """Should ignore unrecognized stored values."""
        db_path = tmp_path / "db.sqlite"
        set_value(THEME_KEY, "sepia", db_path)
        assert get_theme(db_path) == "light"

    def test_set_and_toggle(self, tmp_path: Path) -> None:
        """Should persist explicit and toggled themes."""
        db_path = tmp_path / "db.sqlite"
        set_theme("dark", db_path)
        assert get_theme(db_path) == "dark"

        assert toggle_theme(db_path) == "light"
        assert get_theme(db_path) == "light"

    def test_rejects_unknown_theme(self, tmp_path: Path) -> None:
        """Should refuse themes other than light and dark."""
        with pytest.raises(ValueError):
            set_theme("sepia", tmp_path / "db.sqlite")
