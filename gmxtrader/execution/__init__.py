"""Swap executors for gmxtrader."""

from gmxtrader.execution.base import BaseSwapExecutor
from gmxtrader.execution.paper import PaperSwapExecutor

__all__ = [
    "BaseSwapExecutor",
    "PaperSwapExecutor",
]
