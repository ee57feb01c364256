"""Natural-language command for gmxtrader CLI."""

import asyncio
import getpass
from typing import Optional

import click
from rich.panel import Panel

from gmxtrader.cli.alerts import run_watch
from gmxtrader.cli.common import console, fail, get_config
from gmxtrader.cli.swap import run_swap
from gmxtrader.errors import GmxTraderError
from gmxtrader.models import AlertIntent, CommandIntent, SwapOrder, TradeIntent
from gmxtrader.services import build_command_parser


def describe_intent(intent: CommandIntent) -> str:
    """One-line description of a parsed intent."""
    if isinstance(intent, AlertIntent):
        text = f"Alert: {intent.token} on a {intent.threshold * 100:.3f}% drop"
        if intent.custom_slippage is not None:
            text += f" (slippage {intent.custom_slippage * 100:.2f}%)"
        return text
    return (
        f"Trade: {intent.amount_in} {intent.token_in} → {intent.token_out} "
        f"(slippage {intent.slippage * 100:.2f}%)"
    )


@click.command("ask")
@click.argument("command")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Skip trade confirmation.")
@click.option("--owner", default=None, help="Owner ID for alerts.")
@click.option("--parse-only", is_flag=True, help="Show the parsed command without acting.")
@click.pass_context
def ask(
    ctx: click.Context,
    command: str,
    assume_yes: bool,
    owner: Optional[str],
    parse_only: bool,
) -> None:
    """Run a natural-language trade or alert command.

    Commands mentioning "alert" register a price-drop alert and start
    monitoring; anything else is parsed as a swap.

    \b
    Examples:
      gmxtrader ask "trade! buy 0.77 USDC for WETH with 1% slippage"
      gmxtrader ask "alert! set up a buy alert for WETH if there's a 0.1% drop"
    """
    config = get_config(ctx)

    try:
        parser = build_command_parser(config)
        with console.status("[bold cyan]Parsing command...[/bold cyan]"):
            intent = asyncio.run(parser.parse(command))
    except GmxTraderError as e:
        fail("Could not understand command", e)

    console.print(Panel(describe_intent(intent), title="[bold]Parsed Command[/bold]", border_style="cyan"))
    if parse_only:
        return

    try:
        if isinstance(intent, TradeIntent):
            asyncio.run(run_swap(config, SwapOrder.from_intent(intent), assume_yes))
        else:
            asyncio.run(run_watch(config, [intent], owner or getpass.getuser()))
    except KeyboardInterrupt:
        console.print("\n[dim]Monitoring stopped.[/dim]")
    except (GmxTraderError, ValueError) as e:
        fail("Command failed", e)
