"""In-memory price source for paper trading and tests."""

from typing import Mapping, Optional

from gmxtrader.config import TokenConfig
from gmxtrader.errors import PriceSourceError
from gmxtrader.pricing.base import BasePriceSource


class StaticPriceSource(BasePriceSource):
    """Price source backed by a mutable symbol -> price mapping."""

    def __init__(self, prices: Optional[Mapping[str, float]] = None):
        self._prices: dict[str, float] = {}
        for symbol, price in (prices or {}).items():
            self.set_price(symbol, price)

    def set_price(self, symbol: str, price: float) -> None:
        """Set the price returned for ``symbol``."""
        self._prices[symbol.strip().upper()] = float(price)

    async def _fetch_price(self, token: TokenConfig) -> float:
        try:
            return self._prices[token.symbol]
        except KeyError:
            raise PriceSourceError(f"No price available for {token.symbol}") from None
