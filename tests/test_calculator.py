"""Tests for swap output arithmetic.

**Feature: gmx-trading-agent**
"""

import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gmxtrader.errors import InvalidMinOutError, PriceSourceError, UnknownTokenError
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


def _source(**prices: float) -> StaticPriceSource:
    return StaticPriceSource(prices)


class TestOutputArithmetic:
    """
    **Feature: gmx-trading-agent, Property 6: Output Arithmetic**

    *For any* pair of prices, expected output is
    ``amount_in * price_in / price_out`` and min-out applies slippage.
    """

    def test_expected_output_weth_to_usdc(self):
        """10 WETH at 2000 USD into USDC at 1 USD is 20000 USDC."""
        source = _source(WETH=2000.0, USDC=1.0)
        result = asyncio.run(expected_output(source, "WETH", "USDC", 10))
        assert result == pytest.approx(20000.0, abs=1e-9)

    def test_min_out_default_slippage(self):
        """Default 2% slippage on 20000 gives 19600."""
        source = _source(WETH=2000.0, USDC=1.0)
        result = asyncio.run(min_out(source, "WETH", "USDC", 10))
        assert result == pytest.approx(19600.0, abs=1e-9)

    def test_min_out_explicit_slippage(self):
        source = _source(WETH=2000.0, USDC=1.0)
        result = asyncio.run(min_out(source, "WETH", "USDC", 10, slippage=0.02))
        assert result == pytest.approx(19600.0, abs=1e-9)

    def test_expected_output_usdc_to_weth(self):
        source = _source(WETH=2500.0, USDC=1.0)
        result = asyncio.run(expected_output(source, "USDC", "WETH", 100))
        assert result == pytest.approx(0.04, abs=1e-12)

    def test_symbols_are_case_insensitive(self):
        source = _source(WETH=2000.0, USDC=1.0)
        result = asyncio.run(expected_output(source, "weth", "usdc", 1))
        assert result == pytest.approx(2000.0)

    @given(
        price_in=st.floats(min_value=0.1, max_value=10000.0),
        price_out=st.floats(min_value=0.1, max_value=10000.0),
        amount=st.floats(min_value=0.001, max_value=1000.0),
        slippage=st.floats(min_value=0.0, max_value=0.5),
    )
    @settings(max_examples=100)
    def test_min_out_never_exceeds_expected(self, price_in, price_out, amount, slippage):
        """
        *For any* prices, amount and slippage, min-out is at most the
        expected output.
        """
        source = _source(LINK=price_in, UNI=price_out)
        expected = asyncio.run(expected_output(source, "LINK", "UNI", amount))
        minimum = asyncio.run(min_out(source, "LINK", "UNI", amount, slippage))
        assert minimum <= expected
        assert expected == pytest.approx(amount * price_in / price_out, rel=1e-9, abs=1e-11)


class TestErrorPropagation:
    """Price source errors propagate without retry."""

    def test_unknown_token_propagates(self):
        source = _source(WETH=2000.0)
        with pytest.raises(UnknownTokenError):
            asyncio.run(expected_output(source, "WETH", "DOGE", 1))

    def test_missing_price_propagates(self):
        source = _source(WETH=2000.0)
        with pytest.raises(PriceSourceError):
            asyncio.run(min_out(source, "WETH", "USDC", 1))


class TestRounding:
    """Amounts are rounded to 12 fractional digits."""

    def test_strips_float_noise(self):
        assert round_amount(0.1 + 0.2) == 0.3

    def test_keeps_twelve_digits(self):
        assert round_amount(1.1234567890129) == 1.123456789013

    def test_apply_slippage(self):
        assert apply_slippage(100.0, 0.01) == 99.0

    @pytest.mark.parametrize("slippage", [-0.01, 1.0, 1.5])
    def test_apply_slippage_rejects_out_of_range(self, slippage):
        with pytest.raises(ValueError):
            apply_slippage(100.0, slippage)


class TestBaseUnits:
    """
    **Feature: gmx-trading-agent, Property: Min-Out Unit Conversion**

    Min-out is floored to token units; tokens with fewer than 18 decimals
    lose one unit; the result must be positive.
    """

    def test_to_base_units_floors(self):
        assert to_base_units(1.9999999, 6) == 1999999

    def test_to_base_units_exact(self):
        assert to_base_units(0.77, 6) == 770000

    def test_from_base_units(self):
        assert from_base_units(1500000, 6) == 1.5

    def test_usdc_min_out_takes_one_unit_haircut(self):
        assert min_out_units(19600.0, "USDC") == 19600 * 10**6 - 1

    def test_weth_min_out_has_no_haircut(self):
        assert min_out_units(0.5, "WETH") == 5 * 10**17

    def test_wbtc_uses_eight_decimals(self):
        assert min_out_units(0.01, "wbtc") == 10**6 - 1

    def test_zero_min_out_rejected(self):
        with pytest.raises(InvalidMinOutError):
            min_out_units(0.0, "WETH")

    def test_single_unit_after_haircut_rejected(self):
        """One USDC unit minus the haircut is zero and is rejected."""
        with pytest.raises(InvalidMinOutError):
            min_out_units(0.000001, "USDC")

    def test_unknown_token_rejected(self):
        with pytest.raises(UnknownTokenError):
            min_out_units(1.0, "NOPE")

    @given(amount=st.floats(min_value=0.01, max_value=1_000_000.0))
    @settings(max_examples=100)
    def test_units_never_exceed_amount(self, amount: float):
        """
        *For any* positive amount, the converted units never exceed the
        exact amount in token units.
        """
        units = min_out_units(amount, "USDC")
        assert 0 < units
        assert from_base_units(units, 6) <= amount
