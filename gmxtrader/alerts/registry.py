"""In-memory alert registry.

The registry owns every registered Alert. Each alert captures a baseline
price at registration and fires a single BUY signal when the price drops
by at least its threshold. The alert re-arms once the drop falls back
below the threshold, so each new crossing notifies again.
"""

import asyncio
import logging
from typing import Optional

from gmxtrader.models import Alert, AlertIntent, Signal
from gmxtrader.notify.base import BaseNotifier
from gmxtrader.pricing.base import BasePriceSource

logger = logging.getLogger(__name__)


class AlertRegistry:
    """Stores price-drop alerts and evaluates them against a price source.

    Registering the same token for the same owner twice creates two
    independent alerts; there is no de-duplication.
    """

    def __init__(self, price_source: BasePriceSource, notifier: BaseNotifier):
        """Initialize the registry.

        Args:
            price_source: Source of current USD prices.
            notifier: Sink that receives fired signals.
        """
        self._price_source = price_source
        self._notifier = notifier
        self._alerts: list[Alert] = []
        self._next_id = 1
        self._sweep_lock = asyncio.Lock()

    @property
    def alerts(self) -> list[Alert]:
        """Snapshot of registered alerts in registration order."""
        return list(self._alerts)

    def __len__(self) -> int:
        return len(self._alerts)

    async def register(
        self,
        token: str,
        threshold: float,
        owner_id: str,
        custom_slippage: Optional[float] = None,
    ) -> Alert:
        """Register a new alert using the current price as its baseline.

        Args:
            token: Token symbol to monitor.
            threshold: Drop fraction that triggers the alert (must be > 0).
            owner_id: ID of the user to notify.
            custom_slippage: Optional slippage override for follow-up trades.

        Returns:
            The stored alert.

        Raises:
            ValueError: If threshold is not positive.
            PriceSourceError: If the baseline price cannot be read. Nothing
                is stored in that case.
        """
        if threshold <= 0:
            raise ValueError(f"Threshold must be positive, got {threshold}")

        try:
            baseline_price = await self._price_source.get_price(token)
        except Exception as e:
            logger.error("Error registering alert for %s: %s", token, e)
            raise

        alert = Alert(
            id=self._next_id,
            token=token,
            threshold=threshold,
            custom_slippage=custom_slippage,
            owner_id=owner_id,
            baseline_price=baseline_price,
        )
        self._next_id += 1
        self._alerts.append(alert)
        logger.debug(
            "Registered alert %s for %s with baseline price %s USD and threshold %s",
            alert.id, alert.token, baseline_price, threshold,
        )
        return alert

    async def register_intent(self, intent: AlertIntent, owner_id: str) -> Alert:
        """Register an alert from a parsed alert command."""
        return await self.register(
            token=intent.token,
            threshold=intent.threshold,
            owner_id=owner_id,
            custom_slippage=intent.custom_slippage,
        )

    async def sweep(self) -> None:
        """Evaluate every alert once, in registration order.

        A failed price read skips that alert for this sweep; it never
        aborts the sweep or changes the alert's state. Concurrent calls
        are serialized.
        """
        async with self._sweep_lock:
            # Alerts registered mid-sweep are picked up on the next sweep
            for index in range(len(self._alerts)):
                await self._evaluate(index)

    async def _evaluate(self, index: int) -> None:
        alert = self._alerts[index]

        try:
            current_price = await self._price_source.get_price(alert.token)
        except Exception as e:
            logger.error("Error monitoring alert %s for %s: %s", alert.id, alert.token, e)
            return

        drop = alert.drop_from(current_price)
        logger.debug(
            "Monitoring alert %s for %s: baseline %s USD, current %s USD, drop %.2f%%",
            alert.id, alert.token, alert.baseline_price, current_price, drop * 100,
        )

        if drop >= alert.threshold and not alert.triggered:
            logger.info(
                "Alert condition met for %s. Notifying user %s.", alert.token, alert.owner_id
            )
            signal = Signal(
                token=alert.token,
                current_price=current_price,
                average_price=alert.baseline_price,
                percentage_drop=drop,
                suggested_action="BUY",
                owner_id=alert.owner_id,
            )
            await self._notify(signal)
            self._alerts[index] = alert.model_copy(update={"triggered": True})
        elif drop < alert.threshold and alert.triggered:
            logger.debug("Alert %s for %s reset as the drop is no longer met.", alert.id, alert.token)
            self._alerts[index] = alert.model_copy(update={"triggered": False})

    async def _notify(self, signal: Signal) -> None:
        try:
            await self._notifier.send(signal)
        except Exception as e:
            logger.error("Error sending notification for %s: %s", signal.token, e)
