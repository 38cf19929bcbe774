"""Result types for funding decisions and dispatch attempts."""

from __future__ import annotations

from dataclasses import dataclass

REASON_ABOVE_THRESHOLD = "balance above threshold"


@dataclass
class FundingDecision:
    """Outcome of the balance check for one recipient."""

    proceed: bool
    balance_wei: int
    ceiling_wei: int
    reason: str | None = None


@dataclass
class FundingResult:
    """Result of handling one qualifying Transfer event."""

    success: bool
    recipient: str
    amount_wei: int = 0
    tx_hash: str | None = None
    nonce: int | None = None
    gas_price: int | None = None  # wei
    chain_id: int | None = None
    error: str | None = None
    decision: FundingDecision | None = None

    @property
    def declined(self) -> bool:
        return self.decision is not None and not self.decision.proceed
