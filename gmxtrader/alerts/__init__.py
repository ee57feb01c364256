"""Price-drop alert registry and monitor."""

from gmxtrader.alerts.monitor import AlertMonitor
from gmxtrader.alerts.registry import AlertRegistry

__all__ = ["AlertMonitor", "AlertRegistry"]
