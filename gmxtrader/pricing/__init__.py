"""Price sources and swap output arithmetic."""

from gmxtrader.pricing.base import BasePriceSource, check_price_range
from gmxtrader.pricing.calculator import (
    apply_slippage,
    expected_output,
    from_base_units,
    min_out,
    min_out_units,
    round_amount,
    to_base_units,
)
from gmxtrader.pricing.static import StaticPriceSource

__all__ = [
    "BasePriceSource",
    "StaticPriceSource",
    "apply_slippage",
    "check_price_range",
    "expected_output",
    "from_base_units",
    "min_out",
    "min_out_units",
    "round_amount",
    "to_base_units",
]
