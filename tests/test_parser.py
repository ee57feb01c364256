"""Tests for natural-language command parsing.

**Feature: gmx-trading-agent**
"""

from unittest.mock import AsyncMock, patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gmxtrader.agents.parser import (
    CommandParser,
    build_intent,
    classify_command,
    extract_json,
)
from gmxtrader.errors import CommandParseError
from gmxtrader.models import AlertIntent, TradeIntent


class TestCommandClassification:
    """
    **Feature: gmx-trading-agent, Property: Command Routing**

    *For any* command containing the word "alert" the alert parser is
    used; every other command is a trade.
    """

    @pytest.mark.parametrize(
        "text",
        [
            "alert! set up a buy alert for WETH if there's a 0.1% drop",
            "ALERT me when LINK drops 5%",
            "please Alert on UNI",
        ],
    )
    def test_alert_commands(self, text):
        assert classify_command(text) == "alert"

    @pytest.mark.parametrize(
        "text",
        [
            "trade! buy $0.77 USDC for WETH with 1% slippage",
            "swap 10 LINK to USDC",
            "alerts are off, buy WETH",
        ],
    )
    def test_trade_commands(self, text):
        assert classify_command(text) == "trade"

    @given(words=st.lists(st.sampled_from(["buy", "sell", "WETH", "USDC", "1%", "now"]), max_size=8))
    @settings(max_examples=50)
    def test_inserting_alert_routes_to_alert(self, words):
        text = " ".join(words)
        assert classify_command(text) == "trade"
        assert classify_command(f"{text} alert") == "alert"


class TestJsonExtraction:
    """Model responses are reduced to a single JSON object."""

    def test_fenced_block(self):
        content = 'Sure!\n```json\n{"token": "WETH", "threshold": 0.001}\n```'
        assert extract_json(content) == {"token": "WETH", "threshold": 0.001}

    def test_fenced_block_without_language(self):
        content = '```\n{"token": "LINK", "threshold": 0.05}\n```'
        assert extract_json(content) == {"token": "LINK", "threshold": 0.05}

    def test_bare_object(self):
        content = 'Here it is: {"tokenIn": "USDC", "tokenOut": "WETH", "amountIn": 1}'
        assert extract_json(content)["tokenOut"] == "WETH"

    def test_think_block_removed(self):
        content = (
            '<think>maybe {"token": "WRONG"} is right</think>\n'
            '```json\n{"token": "ARB", "threshold": 0.02}\n```'
        )
        assert extract_json(content) == {"token": "ARB", "threshold": 0.02}

    def test_no_json(self):
        with pytest.raises(CommandParseError):
            extract_json("I cannot help with that.")

    def test_invalid_json(self):
        with pytest.raises(CommandParseError):
            extract_json("```json\n{token: WETH}\n```")


class TestIntentValidation:
    """Extracted JSON is validated into typed intents."""

    def test_trade_intent_aliases(self):
        intent = build_intent(
            "trade",
            {"commandType": "trade", "tokenIn": "usdc", "tokenOut": "weth", "amountIn": 0.77, "slippage": 0.01},
        )
        assert isinstance(intent, TradeIntent)
        assert (intent.token_in, intent.token_out) == ("USDC", "WETH")
        assert intent.amount_in == 0.77
        assert intent.slippage == 0.01

    def test_trade_amount_alias(self):
        intent = build_intent("trade", {"tokenIn": "WETH", "tokenOut": "USDC", "amount": 2})
        assert intent.amount_in == 2.0

    def test_null_slippage_uses_default(self):
        intent = build_intent(
            "trade", {"tokenIn": "WETH", "tokenOut": "USDC", "amountIn": 1, "slippage": None}
        )
        assert intent.slippage == 0.02

    def test_alert_intent(self):
        intent = build_intent(
            "alert", {"commandType": "alert", "token": "weth", "threshold": 0.001, "customSlippage": 0.01}
        )
        assert isinstance(intent, AlertIntent)
        assert intent.token == "WETH"
        assert intent.custom_slippage == 0.01

    @pytest.mark.parametrize(
        "data",
        [
            {"tokenIn": "WETH", "tokenOut": "USDC"},
            {"tokenIn": "WETH", "tokenOut": "USDC", "amountIn": -1},
            {"tokenIn": "WETH", "tokenOut": "USDC", "amountIn": 1, "slippage": 1.5},
        ],
    )
    def test_invalid_trade(self, data):
        with pytest.raises(CommandParseError):
            build_intent("trade", data)

    def test_invalid_alert_threshold(self):
        with pytest.raises(CommandParseError):
            build_intent("alert", {"token": "WETH", "threshold": 0})


class TestCommandParser:
    """End-to-end parsing with the model call replaced."""

    @pytest.mark.asyncio
    async def test_parse_trade(self):
        parser = CommandParser(model="test-model")
        reply = '```json\n{"commandType": "trade", "tokenIn": "USDC", "tokenOut": "WETH", "amountIn": 0.77, "slippage": 0.01}\n```'

        with patch("gmxtrader.agents.parser.run_agent_async", new=AsyncMock(return_value=reply)) as run:
            intent = await parser.parse("trade! buy $0.77 USDC for WETH with 1% slippage")

        assert isinstance(intent, TradeIntent)
        assert intent.amount_in == 0.77
        agent = run.call_args.args[0]
        assert agent.name == "Trade Command Parser"

    @pytest.mark.asyncio
    async def test_parse_alert_uses_alert_agent(self):
        parser = CommandParser(model="test-model")
        reply = '{"commandType": "alert", "token": "WETH", "threshold": 0.001}'

        with patch("gmxtrader.agents.parser.run_agent_async", new=AsyncMock(return_value=reply)) as run:
            intent = await parser.parse("alert! buy alert for WETH on a 0.1% drop")

        assert isinstance(intent, AlertIntent)
        assert intent.threshold == 0.001
        assert run.call_args.args[0].name == "Alert Command Parser"

    @pytest.mark.asyncio
    async def test_model_failure_wrapped(self):
        parser = CommandParser(model="test-model")

        with patch(
            "gmxtrader.agents.parser.run_agent_async",
            new=AsyncMock(side_effect=RuntimeError("rate limited")),
        ):
            with pytest.raises(CommandParseError, match="rate limited"):
                await parser.parse("swap 1 WETH to USDC")

    @pytest.mark.asyncio
    async def test_empty_command(self):
        parser = CommandParser(model="test-model")
        with pytest.raises(CommandParseError):
            await parser.parse("   ")
