"""Notification sinks for alert signals."""

from gmxtrader.notify.base import BaseNotifier, discord_user_id, format_signal_message
from gmxtrader.notify.console import ConsoleNotifier

__all__ = [
    "BaseNotifier",
    "ConsoleNotifier",
    "discord_user_id",
    "format_signal_message",
]
