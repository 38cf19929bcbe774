"""Last-processed transaction tracker used to drop replayed Transfer logs."""

from __future__ import annotations


class ProcessedTxTracker:
    """Remembers the most recently handled transaction hash.

    Only one hash is kept, so a replay is caught when it arrives right
    after the original (the usual case after a resubscribe) but not when
    another transaction was handled in between. Not persisted.
    """

    def __init__(self) -> None:
        self._last_tx_hash: str | None = None

    @property
    def last_tx_hash(self) -> str | None:
        return self._last_tx_hash

    def was_processed(self, tx_hash: str) -> bool:
        return self._last_tx_hash is not None and tx_hash.lower() == self._last_tx_hash

    def mark_processed(self, tx_hash: str) -> None:
        self._last_tx_hash = tx_hash.lower()
