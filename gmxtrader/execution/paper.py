"""Paper swap executor for simulated trading."""

import logging
import uuid
from typing import Mapping, Optional

from gmxtrader.errors import ExecutionError
from gmxtrader.execution.base import BaseSwapExecutor
from gmxtrader.models import SwapOrder, SwapResult
from gmxtrader.pricing.base import BasePriceSource
from gmxtrader.pricing.calculator import apply_slippage, expected_output, min_out_units

logger = logging.getLogger(__name__)


class PaperSwapExecutor(BaseSwapExecutor):
    """Simulates swaps at the price source's current rate.

    Swaps fill at the expected output without touching a chain. When
    starting balances are given, the executor tracks virtual token
    balances and rejects swaps that spend more than is held.
    """

    def __init__(
        self,
        price_source: BasePriceSource,
        balances: Optional[Mapping[str, float]] = None,
    ):
        """Initialize the paper executor.

        Args:
            price_source: Price source used to fill swaps.
            balances: Optional starting balances by token symbol. When
                omitted, balances are not checked.
        """
        self._price_source = price_source
        self._balances: Optional[dict[str, float]] = None
        if balances is not None:
            self._balances = {k.upper(): float(v) for k, v in balances.items()}
        self.history: list[SwapResult] = []

    def get_balance(self, symbol: str) -> Optional[float]:
        """Virtual balance for ``symbol``, or None if balances are not tracked."""
        if self._balances is None:
            return None
        return self._balances.get(symbol.upper(), 0.0)

    async def swap(self, order: SwapOrder) -> SwapResult:
        if self._balances is not None:
            held = self.get_balance(order.token_in)
            if held < order.amount_in:
                raise ExecutionError(
                    f"Insufficient {order.token_in} balance: {held} < {order.amount_in}"
                )

        expected = await expected_output(
            self._price_source, order.token_in, order.token_out, order.amount_in
        )
        minimum = apply_slippage(expected, order.slippage)
        units = min_out_units(minimum, order.token_out)

        if self._balances is not None:
            self._balances[order.token_in] = self.get_balance(order.token_in) - order.amount_in
            self._balances[order.token_out] = self.get_balance(order.token_out) + expected

        result = SwapResult(
            status="COMPLETE",
            token_in=order.token_in,
            token_out=order.token_out,
            amount_in=order.amount_in,
            expected_out=expected,
            min_out=minimum,
            min_out_units=units,
            tx_hash=f"paper-{uuid.uuid4().hex[:16]}",
            is_paper=True,
            message="Paper swap filled at expected output",
        )
        self.history.append(result)
        logger.info(
            "Paper swap: %s %s -> %s %s",
            order.amount_in, order.token_in, expected, order.token_out,
        )
        return result
