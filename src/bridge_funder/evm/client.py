"""Web3 chain client - balance/nonce/gas queries and raw broadcast over HTTP RPC."""

from __future__ import annotations

import logging
from decimal import Decimal

from eth_utils import to_checksum_address
from web3 import AsyncWeb3, Web3

from bridge_funder.errors import ChainQueryError

log = logging.getLogger(__name__)

WEI_PER_ETHER = 10**18


def format_ether(wei: int, decimals: int = 8) -> str:
    """Render a wei amount in whole native units with fixed decimals."""
    amount = Decimal(wei) / Decimal(WEI_PER_ETHER)
    return f"{amount:.{decimals}f}"


class Web3ChainClient:
    """ChainClient backed by AsyncWeb3 over an HTTP JSON-RPC endpoint.

    Node errors of any kind are re-raised as ChainQueryError naming the
    failed operation, so callers handle a single exception type.
    """

    def __init__(self, rpc_url: str, provider=None) -> None:
        self._rpc_url = rpc_url
        if provider is None:
            provider = AsyncWeb3.AsyncHTTPProvider(rpc_url)
        self._w3 = AsyncWeb3(provider)

    async def close(self) -> None:
        """Close the provider's HTTP session."""
        try:
            await self._w3.provider.disconnect()
        except Exception as exc:
            log.debug("Provider disconnect failed: %s", exc)

    async def balance_at(self, address: str) -> int:
        try:
            return int(await self._w3.eth.get_balance(to_checksum_address(address)))
        except Exception as exc:
            raise ChainQueryError("balance_at", str(exc)) from exc

    async def pending_nonce(self, address: str) -> int:
        try:
            return int(
                await self._w3.eth.get_transaction_count(
                    to_checksum_address(address), "pending",
                )
            )
        except Exception as exc:
            raise ChainQueryError("pending_nonce", str(exc)) from exc

    async def suggested_gas_price(self) -> int:
        try:
            return int(await self._w3.eth.gas_price)
        except Exception as exc:
            raise ChainQueryError("suggested_gas_price", str(exc)) from exc

    async def network_id(self) -> int:
        # net_version, matching the id the bridge operators configure
        try:
            return int(await self._w3.net.version)
        except Exception as exc:
            raise ChainQueryError("network_id", str(exc)) from exc

    async def send_raw_transaction(self, raw: bytes) -> str:
        try:
            tx_hash = await self._w3.eth.send_raw_transaction(raw)
        except Exception as exc:
            raise ChainQueryError("send_raw_transaction", str(exc)) from exc
        return Web3.to_hex(tx_hash)
