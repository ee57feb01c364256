"""GMX Router swap executor.

Executes spot swaps through the GMX Router contract on Arbitrum. Amounts
are converted to token units using each token's decimals, the router is
approved to spend ``token_in`` when the current allowance is too low, and
the swap is submitted with a minimum output derived from the price source.
"""

import logging
from typing import Any, Optional

from web3 import AsyncWeb3

from gmxtrader.config import DEFAULT_ROUTER_ADDRESS, DEFAULT_RPC_URL, TokenConfig, get_token_config
from gmxtrader.errors import ExecutionError
from gmxtrader.execution.base import BaseSwapExecutor
from gmxtrader.models import SwapOrder, SwapResult
from gmxtrader.pricing.base import BasePriceSource
from gmxtrader.pricing.calculator import (
    apply_slippage,
    expected_output,
    min_out_units,
    to_base_units,
)

logger = logging.getLogger(__name__)


ROUTER_ABI = [
    {
        "name": "swap",
        "type": "function",
        "stateMutability": "payable",
        "inputs": [
            {"name": "_path", "type": "address[]"},
            {"name": "_amountIn", "type": "uint256"},
            {"name": "_minOut", "type": "uint256"},
            {"name": "_receiver", "type": "address"},
        ],
        "outputs": [],
    },
]

ERC20_ABI = [
    {
        "name": "approve",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "allowance",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]


class GmxSwapExecutor(BaseSwapExecutor):
    """Swap executor that signs and submits GMX Router transactions."""

    def __init__(
        self,
        price_source: BasePriceSource,
        private_key: str,
        rpc_url: str = DEFAULT_RPC_URL,
        router_address: str = DEFAULT_ROUTER_ADDRESS,
        web3: Optional[AsyncWeb3] = None,
    ):
        """Initialize the GMX executor.

        Args:
            price_source: Price source used to compute the minimum output.
            private_key: Hex private key of the trading wallet.
            rpc_url: Arbitrum JSON-RPC endpoint.
            router_address: GMX Router contract address.
            web3: Optional preconfigured AsyncWeb3 instance.
        """
        if not private_key:
            raise ValueError("A private key is required for live swaps")

        self._price_source = price_source
        self._w3 = web3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self._account = self._w3.eth.account.from_key(private_key)
        self._router_address = AsyncWeb3.to_checksum_address(router_address)
        self._router = self._w3.eth.contract(address=self._router_address, abi=ROUTER_ABI)

    @property
    def address(self) -> str:
        """Wallet address that signs and receives swaps."""
        return self._account.address

    def _erc20(self, token: TokenConfig):
        return self._w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(token.address),
            abi=ERC20_ABI,
        )

    async def _allowance(self, token: TokenConfig) -> int:
        return await self._erc20(token).functions.allowance(
            self.address, self._router_address
        ).call()

    async def _balance_of(self, token: TokenConfig) -> int:
        return await self._erc20(token).functions.balanceOf(self.address).call()

    async def _send_transaction(self, function_call: Any) -> Any:
        """Build, sign, submit and wait for a contract transaction.

        Returns:
            The transaction receipt.

        Raises:
            ExecutionError: If the transaction reverted.
        """
        tx = await function_call.build_transaction({
            "from": self.address,
            "nonce": await self._w3.eth.get_transaction_count(self.address),
            "value": 0,
        })
        signed = self._account.sign_transaction(tx)
        tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info("Transaction submitted: %s", AsyncWeb3.to_hex(tx_hash))
        receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt["status"] != 1:
            raise ExecutionError(f"Transaction reverted: {AsyncWeb3.to_hex(tx_hash)}")
        return receipt

    async def approve(self, token: TokenConfig, amount_units: int) -> None:
        """Approve the GMX Router to spend ``amount_units`` of ``token``."""
        logger.info("Submitting approval for GMX Router to spend %s...", token.symbol)
        await self._send_transaction(
            self._erc20(token).functions.approve(self._router_address, amount_units)
        )
        logger.info("Approval confirmed.")

    async def swap(self, order: SwapOrder) -> SwapResult:
        token_in = get_token_config(order.token_in)
        token_out = get_token_config(order.token_out)

        amount_in_units = to_base_units(order.amount_in, token_in.decimals)
        logger.info("Order amount: %s %s (%s units)", order.amount_in, token_in.symbol, amount_in_units)

        expected = await expected_output(
            self._price_source, token_in.symbol, token_out.symbol, order.amount_in
        )
        minimum = apply_slippage(expected, order.slippage)
        units = min_out_units(minimum, token_out.symbol)
        logger.info(
            "Expected output: %s %s, minOut: %s (%s units)",
            expected, token_out.symbol, minimum, units,
        )

        try:
            allowance = await self._allowance(token_in)
            logger.debug("Current allowance for %s: %s", token_in.symbol, allowance)
            if allowance < amount_in_units:
                logger.info("Allowance insufficient, approving token...")
                await self.approve(token_in, amount_in_units)

            balance = await self._balance_of(token_in)
            logger.debug("Wallet balance for %s: %s", token_in.symbol, balance)

            receipt = await self._send_transaction(
                self._router.functions.swap(
                    [
                        AsyncWeb3.to_checksum_address(token_in.address),
                        AsyncWeb3.to_checksum_address(token_out.address),
                    ],
                    amount_in_units,
                    units,
                    self.address,
                )
            )
        except ExecutionError:
            raise
        except Exception as e:
            raise ExecutionError(f"Error executing swap: {e}") from e

        tx_hash = AsyncWeb3.to_hex(receipt["transactionHash"])
        logger.info("Swap confirmed: %s", tx_hash)
        return SwapResult(
            status="COMPLETE",
            token_in=token_in.symbol,
            token_out=token_out.symbol,
            amount_in=order.amount_in,
            expected_out=expected,
            min_out=minimum,
            min_out_units=units,
            tx_hash=tx_hash,
            message="Swap confirmed",
        )
