"""GMX Vault price source.

Reads prices from the GMX Vault contract on Arbitrum. The vault reports
prices as USD with 30 decimals of fixed-point precision.
"""

import logging
from decimal import Decimal
from typing import Optional

from web3 import AsyncWeb3

from gmxtrader.config import DEFAULT_RPC_URL, DEFAULT_VAULT_ADDRESS, TokenConfig
from gmxtrader.errors import PriceSourceError
from gmxtrader.pricing.base import BasePriceSource

logger = logging.getLogger(__name__)


GMX_PRICE_DECIMALS = 30

VAULT_ABI = [
    {
        "name": "getMinPrice",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "_token", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]


def format_vault_price(raw_price: int) -> float:
    """Convert a 30-decimal vault price to a float USD price."""
    return float(Decimal(raw_price) / (Decimal(10) ** GMX_PRICE_DECIMALS))


class GmxVaultPriceSource(BasePriceSource):
    """Price source using ``Vault.getMinPrice`` over JSON-RPC."""

    def __init__(
        self,
        rpc_url: str = DEFAULT_RPC_URL,
        vault_address: str = DEFAULT_VAULT_ADDRESS,
        web3: Optional[AsyncWeb3] = None,
    ):
        """Initialize the vault price source.

        Args:
            rpc_url: Arbitrum JSON-RPC endpoint.
            vault_address: GMX Vault contract address.
            web3: Optional preconfigured AsyncWeb3 instance.
        """
        self._w3 = web3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self._vault = self._w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(vault_address),
            abi=VAULT_ABI,
        )

    async def _get_min_price(self, address: str) -> int:
        return await self._vault.functions.getMinPrice(
            AsyncWeb3.to_checksum_address(address)
        ).call()

    async def _fetch_price(self, token: TokenConfig) -> float:
        try:
            raw_price = await self._get_min_price(token.address)
        except Exception as e:
            raise PriceSourceError(
                f"Error fetching {token.symbol} price from GMX Vault: {e}"
            ) from e

        price = format_vault_price(raw_price)
        logger.debug("GMX Vault price for %s: raw=%s price=%s", token.symbol, raw_price, price)
        return price
