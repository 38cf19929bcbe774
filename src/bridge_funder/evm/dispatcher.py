"""Funding dispatcher - signs and broadcasts plain value transfers."""

from __future__ import annotations

import logging

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from web3 import Web3

from bridge_funder.errors import ChainQueryError
from bridge_funder.interfaces.chain import ChainClient
from bridge_funder.models.records import FundingResult

log = logging.getLogger(__name__)

# Minimum gas for a transfer to an account without code
TRANSFER_GAS_LIMIT = 21_000

ERROR_NONCE = "unable to get pending nonce of sender"
ERROR_GAS_PRICE = "unable to get suggested gas price"
ERROR_NETWORK_ID = "unable to get network id"
ERROR_SIGN = "unable to sign transaction"
ERROR_SEND = "unable to send transaction"


class EvmFundDispatcher:
    """Sends a fixed amount of native currency from the configured key.

    Builds a legacy (gasPrice) transaction, signs it with EIP-155 replay
    protection for the node's network id, and broadcasts it. Each call
    makes exactly one attempt; failures come back as a FundingResult with
    a named error rather than an exception.
    """

    def __init__(
        self,
        chain: ChainClient,
        private_key: str | LocalAccount,
        amount_wei: int,
    ) -> None:
        self._chain = chain
        if isinstance(private_key, LocalAccount):
            self._account = private_key
        else:
            self._account = Account.from_key(private_key)
        self._amount_wei = amount_wei

    @property
    def sender_address(self) -> str:
        return self._account.address

    def _failed(self, recipient: str, error: str, exc: Exception, **fields) -> FundingResult:
        log.error("Funding %s failed: %s (%s)", recipient, error, exc)
        return FundingResult(
            success=False,
            recipient=recipient,
            amount_wei=self._amount_wei,
            error=error,
            **fields,
        )

    async def fund(self, recipient: str) -> FundingResult:
        """Build, sign, and broadcast the funding transfer to recipient."""
        to = to_checksum_address(recipient)

        try:
            nonce = await self._chain.pending_nonce(self.sender_address)
        except ChainQueryError as exc:
            return self._failed(to, ERROR_NONCE, exc)

        try:
            gas_price = await self._chain.suggested_gas_price()
        except ChainQueryError as exc:
            return self._failed(to, ERROR_GAS_PRICE, exc, nonce=nonce)

        try:
            chain_id = await self._chain.network_id()
        except ChainQueryError as exc:
            return self._failed(to, ERROR_NETWORK_ID, exc, nonce=nonce, gas_price=gas_price)

        tx = {
            "nonce": nonce,
            "to": to,
            "value": self._amount_wei,
            "gas": TRANSFER_GAS_LIMIT,
            "gasPrice": gas_price,
            "data": b"",
            "chainId": chain_id,
        }
        fields = dict(nonce=nonce, gas_price=gas_price, chain_id=chain_id)

        try:
            signed = self._account.sign_transaction(tx)
        except (TypeError, ValueError) as exc:
            return self._failed(to, ERROR_SIGN, exc, **fields)

        tx_hash = Web3.to_hex(signed.hash)
        try:
            await self._chain.send_raw_transaction(signed.raw_transaction)
        except ChainQueryError as exc:
            return self._failed(to, ERROR_SEND, exc, **fields)

        log.info(
            "Sent %d wei to %s (nonce=%d, gas_price=%d, chain=%d, tx=%s)",
            self._amount_wei, to, nonce, gas_price, chain_id, tx_hash,
        )
        return FundingResult(
            success=True,
            recipient=to,
            amount_wei=self._amount_wei,
            tx_hash=tx_hash,
            **fields,
        )
