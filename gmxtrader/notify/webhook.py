"""Discord webhook notifier."""

import logging

import aiohttp

from gmxtrader.errors import GmxTraderError
from gmxtrader.models import Signal
from gmxtrader.notify.base import BaseNotifier, discord_user_id, format_signal_message

logger = logging.getLogger(__name__)


class DiscordWebhookNotifier(BaseNotifier):
    """Posts signals to a Discord channel through an incoming webhook."""

    def __init__(self, webhook_url: str, timeout_seconds: int = 10):
        """Initialize the notifier.

        Args:
            webhook_url: Discord webhook URL.
            timeout_seconds: Request timeout.
        """
        if not webhook_url:
            raise ValueError("Discord webhook URL is required")
        self._webhook_url = webhook_url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def build_payload(self, signal: Signal) -> dict:
        """Build the webhook JSON payload for a signal."""
        payload = {"content": format_signal_message(signal)}
        mention = discord_user_id(signal.owner_id)
        if mention:
            payload["allowed_mentions"] = {"users": [mention]}
        return payload

    async def send(self, signal: Signal) -> None:
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.post(self._webhook_url, json=self.build_payload(signal)) as response:
                if response.status not in (200, 204):
                    text = await response.text()
                    raise GmxTraderError(f"Discord webhook HTTP {response.status}: {text}")
        logger.info("Discord notification sent for %s", signal.token)
