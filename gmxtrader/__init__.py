"""gmxtrader - AI-assisted swaps and price-drop alerts on GMX (Arbitrum)."""

__version__ = "0.1.0"
