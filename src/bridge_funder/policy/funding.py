"""Funding policy - gates gas funding on the recipient's current balance."""

from __future__ import annotations

import logging

from bridge_funder.interfaces.chain import ChainClient
from bridge_funder.models.records import REASON_ABOVE_THRESHOLD, FundingDecision

log = logging.getLogger(__name__)


class BalanceCeilingPolicy:
    """Funds a recipient only while its balance is at or below a ceiling.

    The ceiling is inclusive: a balance exactly equal to it still gets
    funded. Nothing is remembered between calls, so a recipient can be
    funded again once its balance drops back under the ceiling.
    """

    def __init__(self, chain: ChainClient, ceiling_wei: int) -> None:
        self._chain = chain
        self._ceiling_wei = ceiling_wei

    async def decide(self, recipient: str) -> FundingDecision:
        # ChainQueryError from the balance lookup propagates to the daemon
        balance = await self._chain.balance_at(recipient)

        if balance > self._ceiling_wei:
            return FundingDecision(
                proceed=False,
                balance_wei=balance,
                ceiling_wei=self._ceiling_wei,
                reason=REASON_ABOVE_THRESHOLD,
            )

        log.debug(
            "Funding approved for %s: balance %d <= ceiling %d",
            recipient, balance, self._ceiling_wei,
        )
        return FundingDecision(
            proceed=True,
            balance_wei=balance,
            ceiling_wei=self._ceiling_wei,
        )
