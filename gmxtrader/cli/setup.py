"""Setup commands for gmxtrader CLI."""

import click
from rich.panel import Panel
from rich.table import Table

from gmxtrader.cli.common import console
from gmxtrader.config import CONFIG_PATH, TOKEN_CONFIG, create_template_config


@click.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Write a template configuration file."""
    config_path = (ctx.find_root().obj or {}).get("config_path") or CONFIG_PATH

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        console.print("[dim]Use --force to overwrite it.[/dim]")
        return

    path = create_template_config(config_path)
    console.print(Panel(
        f"[bold green]Config created[/bold green]\n\n"
        f"{path}\n\n"
        "[dim]Set trading.mode = \"live\" and a private key to trade on-chain.[/dim]",
        title="[bold]gmxtrader[/bold]",
        border_style="green",
    ))


@click.command("tokens")
def tokens() -> None:
    """List supported tokens."""
    table = Table(title="Supported Tokens", show_header=True, header_style="bold cyan")
    table.add_column("Symbol", style="bold")
    table.add_column("Address", style="dim")
    table.add_column("Decimals", justify="right")
    table.add_column("Sane Range (USD)", justify="right")

    for symbol in sorted(TOKEN_CONFIG):
        token = TOKEN_CONFIG[symbol]
        table.add_row(
            token.symbol,
            token.address,
            str(token.decimals),
            f"{token.min_price:,} - {token.max_price:,}",
        )

    console.print(table)
