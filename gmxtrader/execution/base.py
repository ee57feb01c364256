"""Base swap executor interface for gmxtrader."""

from abc import ABC, abstractmethod

from gmxtrader.models import SwapOrder, SwapResult


class BaseSwapExecutor(ABC):
    """Abstract base class for swap executors.

    All executors (GMX Router, paper) must inherit from this class and
    implement :meth:`swap`.
    """

    @abstractmethod
    async def swap(self, order: SwapOrder) -> SwapResult:
        """Execute a swap.

        Args:
            order: Swap to execute.

        Returns:
            SwapResult with execution details.

        Raises:
            UnknownTokenError: If either token is not configured.
            InvalidMinOutError: If the computed minimum output is not positive.
            ExecutionError: If the swap could not be submitted or reverted.
        """
        pass
