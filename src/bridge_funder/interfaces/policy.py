"""FundingPolicy protocol - decides whether a recipient should be funded."""

from __future__ import annotations

from typing import Protocol

from bridge_funder.models.records import FundingDecision


class FundingPolicy(Protocol):
    """Evaluates a recipient against the funding ceiling."""

    async def decide(self, recipient: str) -> FundingDecision:
        """Return proceed/decline. Raises ChainQueryError if the balance is unknown."""
        ...
