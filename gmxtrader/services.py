"""Factories that build collaborators from configuration."""

import logging
from typing import Any

from gmxtrader.config import (
    get_private_key,
    get_router_address,
    get_rpc_url,
    get_setting,
    get_trading_mode,
    get_vault_address,
    get_webhook_url,
)
from gmxtrader.errors import GmxTraderError
from gmxtrader.execution.base import BaseSwapExecutor
from gmxtrader.notify.base import BaseNotifier
from gmxtrader.pricing.base import BasePriceSource

logger = logging.getLogger(__name__)


def build_price_source(config: dict[str, Any]) -> BasePriceSource:
    """Build the configured price source.

    ``[trading] price_source = "static"`` uses ``[trading] paper_prices``;
    anything else reads the GMX Vault.
    """
    kind = str(get_setting(config, "trading", "price_source", default="gmx")).lower()
    if kind == "static":
        from gmxtrader.pricing.static import StaticPriceSource

        return StaticPriceSource(config.get("trading", {}).get("paper_prices", {}))

    from gmxtrader.pricing.gmx import GmxVaultPriceSource

    return GmxVaultPriceSource(
        rpc_url=get_rpc_url(config),
        vault_address=get_vault_address(config),
    )


def build_executor(config: dict[str, Any], price_source: BasePriceSource) -> BaseSwapExecutor:
    """Build the swap executor for the configured trading mode."""
    if get_trading_mode(config) == "live":
        from gmxtrader.execution.gmx import GmxSwapExecutor

        private_key = get_private_key(config)
        if not private_key:
            raise GmxTraderError(
                "Live trading requires a private key (PRIVATE_KEY or [gmx] private_key)"
            )
        return GmxSwapExecutor(
            price_source=price_source,
            private_key=private_key,
            rpc_url=get_rpc_url(config),
            router_address=get_router_address(config),
        )

    from gmxtrader.execution.paper import PaperSwapExecutor

    return PaperSwapExecutor(
        price_source=price_source,
        balances=config.get("trading", {}).get("paper_balances"),
    )


def build_notifier(config: dict[str, Any]) -> BaseNotifier:
    """Discord webhook when configured, otherwise the console."""
    webhook_url = get_webhook_url(config)
    if webhook_url:
        from gmxtrader.notify.webhook import DiscordWebhookNotifier

        return DiscordWebhookNotifier(webhook_url)

    from gmxtrader.notify.console import ConsoleNotifier

    return ConsoleNotifier()


def build_command_parser(config: dict[str, Any]):
    """Build the LLM command parser, applying the configured API key."""
    from agents import set_default_openai_key

    from gmxtrader.agents.base import get_api_key, get_model
    from gmxtrader.agents.parser import CommandParser

    api_key = get_api_key(config)
    if api_key:
        set_default_openai_key(api_key)
    else:
        logger.warning("No OpenAI API key configured; the command parser will fail")
    return CommandParser(model=get_model(config))
