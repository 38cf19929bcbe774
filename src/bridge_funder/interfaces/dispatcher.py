"""FundDispatcher protocol - builds, signs and broadcasts funding transactions."""

from __future__ import annotations

from typing import Protocol

from bridge_funder.models.records import FundingResult


class FundDispatcher(Protocol):
    """Sends the configured funding amount to a recipient."""

    @property
    def sender_address(self) -> str:
        ...

    async def fund(self, recipient: str) -> FundingResult:
        """Build, sign, and broadcast a plain value transfer. Never raises for node errors."""
        ...
