"""LogSubscriber protocol - streaming contract logs from the node."""

from __future__ import annotations

from typing import AsyncIterator, Protocol

from bridge_funder.models.events import LogRecord


class LogSubscription(Protocol):
    """A single live log subscription."""

    def records(self) -> AsyncIterator[LogRecord]:
        """Yield logs as they arrive. Raises or ends when the connection drops."""
        ...

    async def close(self) -> None:
        """Release the underlying connection."""
        ...


class LogSubscriber(Protocol):
    """Opens log subscriptions filtered by contract address."""

    async def subscribe(self, contract_address: str) -> LogSubscription:
        ...
