"""Tests for signal notifiers.

**Feature: gmx-trading-agent**
"""

from datetime import datetime

import pytest
from aiohttp import test_utils, web
from hypothesis import given, settings
from hypothesis import strategies as st
from rich.console import Console

from gmxtrader.errors import GmxTraderError
from gmxtrader.models import Signal
from gmxtrader.notify import ConsoleNotifier, discord_user_id, format_signal_message
from gmxtrader.notify.webhook import DiscordWebhookNotifier


def _signal(owner_id="1234") -> Signal:
    return Signal(
        token="WETH",
        current_price=2375.5,
        average_price=2500.0,
        percentage_drop=0.0498,
        timestamp=datetime(2024, 3, 1, 12, 30, 0),
        owner_id=owner_id,
    )


class TestFormatSignalMessage:
    """Signals render as a readable chat message."""

    def test_contains_fields(self):
        message = format_signal_message(_signal())

        assert message.splitlines()[0] == "<@1234>"
        assert "Buy Signal Detected for WETH:" in message
        assert "Current Price: $2,375.50" in message
        assert "Baseline Price: $2,500.00" in message
        assert "Drop: 4.98%" in message
        assert "Action: BUY" in message
        assert "Time: 2024-03-01 12:30:00" in message

    def test_no_mention_without_owner(self):
        message = format_signal_message(_signal(owner_id=None))
        assert message.startswith("Buy Signal Detected for WETH:")


class TestDiscordMentions:
    """
    **Feature: gmx-trading-agent, Property: Discord Mentions**

    *For any* owner that is not a numeric Discord user ID, messages carry
    no mention and the webhook payload allows no user mentions.
    """

    @pytest.mark.parametrize(
        "owner_id,expected",
        [("1234", "1234"), (" 987654321012345678 ", "987654321012345678"),
         ("root", None), ("alice-01", None), ("", None), (None, None)],
    )
    def test_discord_user_id(self, owner_id, expected):
        assert discord_user_id(owner_id) == expected

    def test_local_username_not_mentioned(self):
        signal = _signal(owner_id="root")

        payload = DiscordWebhookNotifier("https://discord.test/hook").build_payload(signal)

        assert "<@" not in payload["content"]
        assert payload["content"].startswith("Buy Signal Detected for WETH:")
        assert "allowed_mentions" not in payload

    @given(owner_id=st.from_regex(r"[A-Za-z_.\-][A-Za-z0-9_.\-]*", fullmatch=True))
    @settings(max_examples=100)
    def test_username_owner_never_mentioned(self, owner_id):
        payload = DiscordWebhookNotifier("https://discord.test/hook").build_payload(
            _signal(owner_id=owner_id)
        )
        assert not payload["content"].startswith("<@")
        assert "allowed_mentions" not in payload

    @pytest.mark.asyncio
    async def test_console_still_shows_local_owner(self):
        console = Console(record=True, width=100)
        await ConsoleNotifier(console).send(_signal(owner_id="root"))
        assert "root" in console.export_text()


class TestConsoleNotifier:
    @pytest.mark.asyncio
    async def test_prints_panel(self):
        console = Console(record=True, width=100)
        await ConsoleNotifier(console).send(_signal())

        output = console.export_text()
        assert "Buy Signal Detected" in output
        assert "WETH" in output
        assert "4.98%" in output
        assert "1234" in output


class TestDiscordWebhookNotifier:
    """Signals are posted as webhook messages that mention the owner."""

    def test_url_required(self):
        with pytest.raises(ValueError):
            DiscordWebhookNotifier("")

    def test_payload(self):
        payload = DiscordWebhookNotifier("https://discord.test/hook").build_payload(_signal())
        assert payload["content"] == format_signal_message(_signal())
        assert payload["allowed_mentions"] == {"users": ["1234"]}

    def test_payload_without_owner(self):
        payload = DiscordWebhookNotifier("https://discord.test/hook").build_payload(
            _signal(owner_id=None)
        )
        assert "allowed_mentions" not in payload

    @pytest.mark.asyncio
    async def test_send_posts_payload(self):
        received = []

        async def handler(request):
            received.append(await request.json())
            return web.Response(status=204)

        app = web.Application()
        app.router.add_post("/hook", handler)
        async with test_utils.TestServer(app) as server:
            await DiscordWebhookNotifier(str(server.make_url("/hook"))).send(_signal())

        assert len(received) == 1
        assert received[0]["content"].startswith("<@1234>")

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        async def handler(request):
            return web.Response(status=500, text="server error")

        app = web.Application()
        app.router.add_post("/hook", handler)
        async with test_utils.TestServer(app) as server:
            with pytest.raises(GmxTraderError, match="500"):
                await DiscordWebhookNotifier(str(server.make_url("/hook"))).send(_signal())
