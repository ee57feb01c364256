"""Exception types raised by gmxtrader."""


class GmxTraderError(ValueError):
    """Base class for all gmxtrader errors."""


class UnknownTokenError(GmxTraderError):
    """Raised when a token symbol has no configuration."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Token config for {symbol} not found")


class PriceSourceError(GmxTraderError):
    """Raised when a price cannot be read from the price source."""


class PriceOutOfRangeError(PriceSourceError):
    """Raised when a price falls outside the token's sanity band."""

    def __init__(self, symbol: str, price: float, min_price: float, max_price: float):
        self.symbol = symbol
        self.price = price
        self.min_price = min_price
        self.max_price = max_price
        super().__init__(
            f"Price for {symbol} out of range: {price} "
            f"(expected {min_price} - {max_price})"
        )


class InvalidMinOutError(GmxTraderError):
    """Raised when a computed minimum output is not positive."""


class CommandParseError(GmxTraderError):
    """Raised when a natural-language command cannot be parsed."""


class ExecutionError(GmxTraderError):
    """Raised when a swap could not be executed."""
