"""Data models for the bridge_funder daemon."""

from bridge_funder.models.config import FunderConfig
from bridge_funder.models.events import LogRecord, TransferEvent
from bridge_funder.models.records import FundingDecision, FundingResult

__all__ = [
    "FunderConfig",
    "LogRecord", "TransferEvent",
    "FundingDecision", "FundingResult",
]
