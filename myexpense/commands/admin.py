"""Admin commands for init and display theme."""

import sqlite3
import sys

from rich.console import Console

from myexpense.config import create_default_config, get_config_path
from myexpense.store.preferences import THEMES, get_theme, set_theme, toggle_theme
from myexpense.store.schema import get_db_path, init_database

console = Console()


def init_command(force: bool = False) -> None:
    """Create the config file and the local database."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    if not force and (db_exists or config_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if db_exists:
            console.print(f"  Database already exists: {db_path}")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'myexpense init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        if force and db_exists:
            db_path.unlink()
        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print("[dim]Sample transactions are added the first time you list them[/dim]")


def theme_command(choice: str | None = None) -> None:
    """Show the theme, set it to light/dark, or toggle it."""
    db_path = get_db_path()
    try:
        if choice is None:
            console.print(f"Theme: [bold]{get_theme(db_path)}[/bold]")
            return
        if choice == "toggle":
            theme = toggle_theme(db_path)
        elif choice in THEMES:
            set_theme(choice, db_path)
            theme = choice
        else:
            console.print(f"[red]Theme must be one of: {', '.join(THEMES)}, toggle[/red]", style="bold")
            sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    icon = "🌙" if theme == "dark" else "🌗"
    console.print(f"[green]✓[/green] Theme set to {theme} {icon}")
