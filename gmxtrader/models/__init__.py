"""Data models for gmxtrader."""

from gmxtrader.models.alert import Alert
from gmxtrader.models.intent import AlertIntent, CommandIntent, TradeIntent
from gmxtrader.models.order import SwapOrder, SwapResult
from gmxtrader.models.signal import Signal

__all__ = [
    "Alert",
    "AlertIntent",
    "CommandIntent",
    "Signal",
    "SwapOrder",
    "SwapResult",
    "TradeIntent",
]
