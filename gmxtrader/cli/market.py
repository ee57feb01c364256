"""Price and quote commands for gmxtrader CLI."""

import asyncio
from typing import Optional

import click
from rich.table import Table

from gmxtrader.cli.common import console, fail, get_config
from gmxtrader.config import get_default_slippage
from gmxtrader.errors import GmxTraderError
from gmxtrader.pricing.base import BasePriceSource
from gmxtrader.pricing.calculator import apply_slippage, expected_output, min_out_units
from gmxtrader.services import build_price_source


async def _fetch_prices(source: BasePriceSource, symbols: list[str]) -> list[tuple[str, float]]:
    return [(symbol.upper(), await source.get_price(symbol)) for symbol in symbols]


async def build_quote(
    source: BasePriceSource,
    token_in: str,
    token_out: str,
    amount_in: float,
    slippage: float,
) -> dict:
    """Compute expected output, min-out and min-out units for a swap.

    Returns:
        Dictionary with token_in, token_out, amount_in, slippage,
        expected_out, min_out and min_out_units.
    """
    expected = await expected_output(source, token_in, token_out, amount_in)
    minimum = apply_slippage(expected, slippage)
    return {
        "token_in": token_in.upper(),
        "token_out": token_out.upper(),
        "amount_in": amount_in,
        "slippage": slippage,
        "expected_out": expected,
        "min_out": minimum,
        "min_out_units": min_out_units(minimum, token_out),
    }


def render_quote(quote: dict) -> Table:
    """Render a quote dict as a rich table."""
    table = Table(title="Swap Quote", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("Spend", f"{quote['amount_in']} {quote['token_in']}")
    table.add_row("Expected", f"{quote['expected_out']} {quote['token_out']}")
    table.add_row("Slippage", f"{quote['slippage'] * 100:.2f}%")
    table.add_row("Min Out", f"{quote['min_out']} {quote['token_out']}")
    table.add_row("Min Out (units)", str(quote["min_out_units"]))
    return table


@click.command("price")
@click.argument("symbols", nargs=-1, required=True)
@click.pass_context
def price(ctx: click.Context, symbols: tuple[str, ...]) -> None:
    """Show current USD prices.

    \b
    Examples:
      gmxtrader price WETH
      gmxtrader price WETH WBTC LINK
    """
    try:
        source = build_price_source(get_config(ctx))
        prices = asyncio.run(_fetch_prices(source, list(symbols)))
    except GmxTraderError as e:
        fail("Failed to fetch price", e)

    table = Table(title="Prices", show_header=True, header_style="bold cyan")
    table.add_column("Token", style="bold")
    table.add_column("Price (USD)", justify="right")
    for symbol, value in prices:
        table.add_row(symbol, f"${value:,.4f}")
    console.print(table)


@click.command("quote")
@click.argument("token_in")
@click.argument("token_out")
@click.argument("amount", type=float)
@click.option(
    "--slippage", "-s",
    type=float,
    default=None,
    help="Slippage tolerance as a fraction (default from config, 0.02).",
)
@click.pass_context
def quote(
    ctx: click.Context,
    token_in: str,
    token_out: str,
    amount: float,
    slippage: Optional[float],
) -> None:
    """Estimate the output of swapping AMOUNT TOKEN_IN for TOKEN_OUT.

    \b
    Examples:
      gmxtrader quote WETH USDC 0.5
      gmxtrader quote USDC WETH 100 --slippage 0.01
    """
    config = get_config(ctx)

    try:
        slippage = get_default_slippage(config) if slippage is None else slippage
        source = build_price_source(config)
        result = asyncio.run(build_quote(source, token_in, token_out, amount, slippage))
    except (GmxTraderError, ValueError) as e:
        fail("Failed to build quote", e)

    console.print(render_quote(result))
