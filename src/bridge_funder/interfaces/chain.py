"""ChainClient protocol - node queries and raw transaction broadcast."""

from __future__ import annotations

from typing import Protocol


class ChainClient(Protocol):
    """Read/broadcast access to an EVM node.

    Every method raises ChainQueryError on failure.
    """

    async def balance_at(self, address: str) -> int:
        """Native balance of address at the latest block, in wei."""
        ...

    async def pending_nonce(self, address: str) -> int:
        """Next nonce for address, counting pending transactions."""
        ...

    async def suggested_gas_price(self) -> int:
        """Node's suggested legacy gas price, in wei."""
        ...

    async def network_id(self) -> int:
        """Network identifier used for replay-protected signing."""
        ...

    async def send_raw_transaction(self, raw: bytes) -> str:
        """Broadcast a signed transaction. Returns the node-reported hash."""
        ...

    async def close(self) -> None:
        ...
