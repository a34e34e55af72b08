"""Display preferences stored alongside local data."""

from pathlib import Path

from myexpense.store.schema import THEME_KEY, get_value, set_value

THEMES = ("light", "dark")


def get_theme(db_path: Path | None = None) -> str:
    """Get the stored theme, "light" when unset or unrecognized."""
    value = get_value(THEME_KEY, db_path)
    return value if value in THEMES else "light"


def set_theme(theme: str, db_path: Path | None = None) -> None:
    """Store the theme.

    Raises:
        ValueError: If the theme is not light or dark.
    """
    if theme not in THEMES:
        raise ValueError(f"Theme must be one of: {', '.join(THEMES)}")
    set_value(THEME_KEY, theme, db_path)


def toggle_theme(db_path: Path | None = None) -> str:
    """Flip between light and dark and return the new theme."""
    new = "light" if get_theme(db_path) == "dark" else "dark"
    set_theme(new, db_path)
    return new
