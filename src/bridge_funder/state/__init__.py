"""In-memory daemon state."""

from bridge_funder.state.processed import ProcessedTxTracker

__all__ = ["ProcessedTxTracker"]
