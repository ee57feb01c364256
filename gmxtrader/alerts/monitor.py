"""Periodic alert monitoring.

Runs :meth:`AlertRegistry.sweep` on a fixed cadence. A tick that arrives
while the previous sweep is still running is skipped, and starting an
already-running monitor returns the existing task.
"""

import asyncio
import contextlib
import logging
from typing import Optional

from gmxtrader.alerts.registry import AlertRegistry
from gmxtrader.config import DEFAULT_ALERT_INTERVAL_MS

logger = logging.getLogger(__name__)


class AlertMonitor:
    """Drives periodic sweeps of an AlertRegistry."""

    def __init__(self, registry: AlertRegistry):
        self._registry = registry
        self._task: Optional[asyncio.Task] = None
        self._sweep_task: Optional[asyncio.Task] = None
        self._busy = False
        self.skipped_ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def busy(self) -> bool:
        """True while a sweep started by this monitor is in flight."""
        return self._busy

    def start(self, period_ms: int = DEFAULT_ALERT_INTERVAL_MS) -> asyncio.Task:
        """Start periodic monitoring.

        Must be called from within a running event loop.

        Args:
            period_ms: Interval between ticks in milliseconds.

        Returns:
            The monitoring task. Await it to run until cancelled.
        """
        if period_ms <= 0:
            raise ValueError(f"Monitoring period must be positive, got {period_ms}")

        if self.running:
            logger.warning("Alert monitoring already running; ignoring start()")
            return self._task

        self._task = asyncio.get_running_loop().create_task(self._run(period_ms))
        logger.info("Alert monitoring started with interval %s ms", period_ms)
        return self._task

    async def stop(self) -> None:
        """Stop monitoring and cancel any in-flight sweep."""
        tasks = [t for t in (self._task, self._sweep_task) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._task = None
        self._sweep_task = None
        self._busy = False
        logger.info("Alert monitoring stopped")

    def tick(self) -> bool:
        """Schedule one sweep unless the previous one is still running.

        Returns:
            True if a sweep was scheduled, False if the tick was skipped.
        """
        if self._busy:
            self.skipped_ticks += 1
            logger.warning("Previous sweep still running; skipping tick")
            return False

        self._busy = True
        self._sweep_task = asyncio.get_running_loop().create_task(self._guarded_sweep())
        return True

    async def _guarded_sweep(self) -> None:
        try:
            await self._registry.sweep()
        except Exception:
            logger.exception("Unexpected error during alert sweep")
        finally:
            self._busy = False

    async def _run(self, period_ms: int) -> None:
        interval = period_ms / 1000
        while True:
            await asyncio.sleep(interval)
            self.tick()
