"""Notifier protocol - reports completed fundings."""

from __future__ import annotations

from typing import Protocol


class Notifier(Protocol):
    """Fire-and-forget sink for funding summaries."""

    async def notify(self, message: str, block_number: int, tx_hash: str) -> bool:
        """Deliver a summary. Returns False on delivery failure, never raises."""
        ...
