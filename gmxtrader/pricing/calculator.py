"""Swap output arithmetic.

Expected output and minimum output are computed from two independent USD
price reads. Results are formatted to a fixed number of fractional digits
and parsed back to strip binary floating-point noise.
"""

import logging
from decimal import ROUND_FLOOR, Decimal

from gmxtrader.config import DEFAULT_SLIPPAGE, get_token_config
from gmxtrader.errors import InvalidMinOutError
from gmxtrader.pricing.base import BasePriceSource

logger = logging.getLogger(__name__)


# Fractional digits kept when rounding computed amounts
OUTPUT_PRECISION = 12


def round_amount(value: float, precision: int = OUTPUT_PRECISION) -> float:
    """Round by formatting to ``precision`` digits and re-parsing."""
    return float(f"{value:.{precision}f}")


def apply_slippage(amount: float, slippage: float) -> float:
    """Reduce ``amount`` by a slippage fraction."""
    if not 0 <= slippage < 1:
        raise ValueError(f"Slippage must be in [0, 1), got {slippage}")
    return round_amount(amount * (1 - slippage))


async def expected_output(
    source: BasePriceSource,
    token_in: str,
    token_out: str,
    amount_in: float,
) -> float:
    """Estimate the amount of ``token_out`` received for ``amount_in``.

    Args:
        source: Price source for both tokens.
        token_in: Symbol of the token spent.
        token_out: Symbol of the token received.
        amount_in: Human-readable input amount.

    Returns:
        Expected output amount, rounded to OUTPUT_PRECISION digits.

    Raises:
        PriceSourceError: If either price read fails.
        UnknownTokenError: If either token is not configured.
    """
    price_in = await source.get_price(token_in)
    price_out = await source.get_price(token_out)
    amount_out = round_amount(amount_in * price_in / price_out)
    logger.debug(
        "Expected output: %s %s @ %s -> %s %s @ %s",
        amount_in, token_in, price_in, amount_out, token_out, price_out,
    )
    return amount_out


async def min_out(
    source: BasePriceSource,
    token_in: str,
    token_out: str,
    amount_in: float,
    slippage: float = DEFAULT_SLIPPAGE,
) -> float:
    """Minimum acceptable output after applying slippage tolerance.

    Args:
        source: Price source for both tokens.
        token_in: Symbol of the token spent.
        token_out: Symbol of the token received.
        amount_in: Human-readable input amount.
        slippage: Slippage tolerance as a fraction (0.02 = 2%).

    Returns:
        Minimum output amount, rounded to OUTPUT_PRECISION digits.
    """
    expected = await expected_output(source, token_in, token_out, amount_in)
    return apply_slippage(expected, slippage)


def to_base_units(amount: float, decimals: int) -> int:
    """Convert a human-readable amount to integer token units, rounding down."""
    scaled = Decimal(repr(amount)) * (Decimal(10) ** decimals)
    return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def from_base_units(units: int, decimals: int) -> float:
    """Convert integer token units to a human-readable amount."""
    return float(Decimal(units) / (Decimal(10) ** decimals))


def min_out_units(amount: float, token_symbol: str) -> int:
    """Convert a min-out amount to integer units of ``token_symbol``.

    Tokens with fewer than 18 decimals lose one unit to absorb rounding in
    the router's own conversion.

    Raises:
        InvalidMinOutError: If the result is not positive.
    """
    token = get_token_config(token_symbol)
    raw_units = to_base_units(amount, token.decimals)
    units = raw_units
    if token.decimals != 18:
        units = max(raw_units - 1, 0)

    logger.debug(
        "minOut conversion for %s: amount=%s decimals=%s raw=%s adjusted=%s",
        token.symbol, amount, token.decimals, raw_units, units,
    )

    if units <= 0:
        raise InvalidMinOutError(
            f"Invalid minOut for {token.symbol}: {amount} -> {units} units"
        )
    return units
