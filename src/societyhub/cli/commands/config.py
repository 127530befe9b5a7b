"""Configuration commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...config import ConfigError, Settings
from ..output import console, print_error, print_success

app = typer.Typer(help="Manage configuration")

_SETTABLE = {
    "backend": str,
    "db_path": Path,
    "rest_url": str,
    "autosave_delay": float,
    "request_timeout": float,
    "log_level": str,
}


@app.command("show")
def show_config():
    """Show the effective configuration (file plus environment)."""
    settings = Settings.load()
    console.print("[bold]Store:[/bold]")
    console.print(f"  backend: {settings.backend}")
    console.print(f"  db_path: {settings.db_path}")
    console.print(f"  rest_url: {settings.rest_url or '(not set)'}")
    console.print(f"  api_key: {'(set)' if settings.api_key else '(not set)'}")
    console.print(f"  request_timeout: {settings.request_timeout}s")
    console.print("[bold]Editing:[/bold]")
    console.print(f"  autosave_delay: {settings.autosave_delay}s")
    console.print("[bold]Logging:[/bold]")
    console.print(f"  log_level: {settings.log_level}")


@app.command("set")
def set_config(
    key: Annotated[str, typer.Argument(help=f"One of: {', '.join(_SETTABLE)}")],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """Set a configuration value in the config file."""
    if key not in _SETTABLE:
        print_error(f"Unknown key: {key}")
        raise typer.Exit(1)

    settings = Settings.load()
    try:
        setattr(settings, key, _SETTABLE[key](value))
        settings.validate()
    except (ValueError, ConfigError) as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    settings.save()
    print_success(f"Set {key} = {value}")
