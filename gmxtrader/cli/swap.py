"""Swap command for gmxtrader CLI.

Quotes the swap, asks for confirmation, then hands the order to the
configured executor (paper by default, GMX Router in live mode).
"""

import asyncio
from typing import Any, Optional

import click
from rich.panel import Panel

from gmxtrader.cli.common import console, fail, get_config
from gmxtrader.cli.market import build_quote, render_quote
from gmxtrader.config import get_default_slippage, get_trading_mode
from gmxtrader.errors import GmxTraderError
from gmxtrader.models import SwapOrder, SwapResult
from gmxtrader.services import build_executor, build_price_source

ARBISCAN_TX_URL = "https://arbiscan.io/tx/"


def render_result(result: SwapResult) -> Panel:
    """Render a swap result as a rich panel."""
    if result.is_paper:
        link = f"Paper ID:  {result.tx_hash}"
    else:
        link = f"Tx:        {ARBISCAN_TX_URL}{result.tx_hash}"
    return Panel(
        f"[bold green]Swap {result.status}[/bold green]\n\n"
        f"Spent:     {result.amount_in} {result.token_in}\n"
        f"Received:  ~{result.expected_out} {result.token_out}\n"
        f"Min Out:   {result.min_out} {result.token_out}\n"
        f"{link}",
        title="[bold]Swap[/bold]" + (" [dim](paper)[/dim]" if result.is_paper else ""),
        border_style="green",
    )


async def run_swap(config: dict[str, Any], order: SwapOrder, assume_yes: bool) -> Optional[SwapResult]:
    """Quote, confirm and execute a swap.

    Returns:
        The SwapResult, or None if the user declined.
    """
    source = build_price_source(config)
    quote = await build_quote(
        source, order.token_in, order.token_out, order.amount_in, order.slippage
    )
    console.print(render_quote(quote))

    mode = get_trading_mode(config)
    if not assume_yes and not click.confirm(f"Execute this swap ({mode} mode)?", default=False):
        console.print("[yellow]Swap cancelled.[/yellow]")
        return None

    executor = build_executor(config, source)
    result = await executor.swap(order)
    console.print(render_result(result))
    return result


@click.command("swap")
@click.argument("token_in")
@click.argument("token_out")
@click.argument("amount", type=float)
@click.option(
    "--slippage", "-s",
    type=float,
    default=None,
    help="Slippage tolerance as a fraction (default from config, 0.02).",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Skip confirmation.")
@click.pass_context
def swap(
    ctx: click.Context,
    token_in: str,
    token_out: str,
    amount: float,
    slippage: Optional[float],
    assume_yes: bool,
) -> None:
    """Swap AMOUNT of TOKEN_IN for TOKEN_OUT.

    \b
    Examples:
      gmxtrader swap USDC WETH 25
      gmxtrader swap WETH USDC 0.01 --slippage 0.005 --yes
    """
    config = get_config(ctx)

    try:
        slippage = get_default_slippage(config) if slippage is None else slippage
        order = SwapOrder(
            token_in=token_in,
            token_out=token_out,
            amount_in=amount,
            slippage=slippage,
        )
        asyncio.run(run_swap(config, order, assume_yes))
    except (GmxTraderError, ValueError) as e:
        fail("Swap failed", e)
