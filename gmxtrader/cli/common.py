"""Helpers shared by CLI commands."""

from typing import Any

import click
from rich.console import Console
from rich.panel import Panel

from gmxtrader.config import load_config

console = Console()


def get_config(ctx: click.Context) -> dict[str, Any]:
    """Load the config selected by the ``--config`` option."""
    obj = ctx.find_root().obj or {}
    return load_config(obj.get("config_path"))


def fail(title: str, error: Exception) -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{title}:[/red]\n\n{error}",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)
