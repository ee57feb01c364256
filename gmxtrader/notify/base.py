"""Base notifier interface and message formatting."""

from abc import ABC, abstractmethod
from typing import Optional

from gmxtrader.models import Signal


class BaseNotifier(ABC):
    """Abstract base class for signal delivery channels."""

    @abstractmethod
    async def send(self, signal: Signal) -> None:
        """Deliver a signal.

        Args:
            signal: Signal to deliver.

        Raises:
            Exception: Implementations may raise on delivery failure; the
                alert registry logs and discards such errors.
        """
        pass


def format_signal_message(signal: Signal) -> str:
    """Format a signal as a plain-text chat message."""
    lines = [
        f"Buy Signal Detected for {signal.token}:",
        f"Current Price: ${signal.current_price:,.2f}",
        f"Baseline Price: ${signal.average_price:,.2f}",
        f"Drop: {signal.percentage_drop * 100:.2f}%",
        f"Action: {signal.suggested_action}",
        f"Time: {signal.timestamp.strftime('%Y-%m-%d %H:%M:%S')}",
    ]
    mention = discord_user_id(signal.owner_id)
    if mention:
        lines.insert(0, f"<@{mention}>")
    return "\n".join(lines)


def discord_user_id(owner_id: Optional[str]) -> Optional[str]:
    """Return ``owner_id`` if it can be mentioned on Discord.

    Discord mentions take numeric snowflake IDs; local user names and
    other free-form owners are not mentioned.
    """
    owner_id = (owner_id or "").strip()
    if owner_id.isascii() and owner_id.isdigit():
        return owner_id
    return None
