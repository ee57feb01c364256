"""Base price source interface for gmxtrader."""

import logging
from abc import ABC, abstractmethod

from gmxtrader.config import TokenConfig, get_token_config
from gmxtrader.errors import PriceOutOfRangeError

logger = logging.getLogger(__name__)


class BasePriceSource(ABC):
    """Abstract base class for USD price sources.

    Implementations fetch a raw price with :meth:`_fetch_price`; callers use
    :meth:`get_price`, which resolves the token, fetches, and applies the
    token's sanity band.
    """

    async def get_price(self, symbol: str) -> float:
        """Get the current USD price for a token.

        Args:
            symbol: Token symbol (case-insensitive).

        Returns:
            USD price.

        Raises:
            UnknownTokenError: If the symbol is not configured.
            PriceOutOfRangeError: If the price is outside the sanity band.
            PriceSourceError: If the price could not be read.
        """
        token = get_token_config(symbol)
        price = await self._fetch_price(token)
        check_price_range(token, price)
        logger.debug("Price for %s: %s USD", token.symbol, price)
        return price

    @abstractmethod
    async def _fetch_price(self, token: TokenConfig) -> float:
        """Fetch the raw USD price for a configured token."""
        pass


def check_price_range(token: TokenConfig, price: float) -> None:
    """Raise if ``price`` is outside the token's sanity band."""
    if not (token.min_price <= price <= token.max_price):
        raise PriceOutOfRangeError(token.symbol, price, token.min_price, token.max_price)
