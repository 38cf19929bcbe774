"""Mock implementations of all external-facing components."""

from __future__ import annotations

import asyncio

from eth_utils import keccak
from web3 import Web3

from bridge_funder.errors import ChainQueryError
from bridge_funder.models.events import LogRecord

# Staged in MockSubscriber to make subscribe() hang past its timeout
HANG = object()


class MockChainClient:
    """Implements ChainClient protocol. Fails any operation listed in ``fail``."""

    def __init__(
        self,
        balances: dict[str, int] | None = None,
        default_balance: int = 0,
        nonce: int = 7,
        gas_price: int = 1_000_000_000,
        network_id: int = 1337,
        fail: set[str] | None = None,
    ) -> None:
        self.balances = {k.lower(): v for k, v in (balances or {}).items()}
        self.default_balance = default_balance
        self.nonce = nonce
        self.gas_price = gas_price
        self._network_id = network_id
        self.fail = set(fail or ())
        self.calls: list[str] = []
        self.sent: list[bytes] = []
        self.closed = False

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail:
            raise ChainQueryError(operation, "mock node failure")

    def set_balance(self, address: str, wei: int) -> None:
        self.balances[address.lower()] = wei

    async def balance_at(self, address: str) -> int:
        self._record("balance_at")
        return self.balances.get(address.lower(), self.default_balance)

    async def pending_nonce(self, address: str) -> int:
        self._record("pending_nonce")
        return self.nonce

    async def suggested_gas_price(self) -> int:
        self._record("suggested_gas_price")
        return self.gas_price

    async def network_id(self) -> int:
        self._record("network_id")
        return self._network_id

    async def send_raw_transaction(self, raw: bytes) -> str:
        self._record("send_raw_transaction")
        self.sent.append(bytes(raw))
        self.nonce += 1
        return Web3.to_hex(keccak(raw))

    async def close(self) -> None:
        self.closed = True


class MockSubscription:
    """Implements LogSubscription. Yields staged records, then drops or idles."""

    def __init__(
        self,
        records: list[LogRecord] | None = None,
        error: Exception | None = None,
        idle: bool = False,
    ) -> None:
        self._records = list(records or [])
        self._error = error
        self._idle = idle
        self.closed = False

    async def records(self):
        for record in self._records:
            yield record
        if self._error is not None:
            raise self._error
        if self._idle:
            await asyncio.Event().wait()

    async def close(self) -> None:
        self.closed = True


class MockSubscriber:
    """Implements LogSubscriber. Each subscribe() consumes one staged session.

    A session is a MockSubscription, an exception to raise, or HANG. Once
    the sessions run out, subscribe() returns an idle live subscription.
    """

    def __init__(self, *sessions) -> None:
        self.sessions = list(sessions)
        self.subscribe_calls: list[str] = []
        self.opened: list[MockSubscription] = []

    async def subscribe(self, contract_address: str) -> MockSubscription:
        self.subscribe_calls.append(contract_address)
        session = self.sessions.pop(0) if self.sessions else MockSubscription(idle=True)
        if session is HANG:
            await asyncio.Event().wait()
        if isinstance(session, Exception):
            raise session
        self.opened.append(session)
        return session


class MockNotifier:
    """Implements Notifier protocol."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.calls: list[tuple[str, int, str]] = []

    async def notify(self, message: str, block_number: int, tx_hash: str) -> bool:
        self.calls.append((message, block_number, tx_hash))
        return self.succeed
