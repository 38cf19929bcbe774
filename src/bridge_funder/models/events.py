"""Chain log models decoded from the node's log subscription."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eth_utils import to_bytes

from bridge_funder.errors import MalformedLogError


def _as_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    return int(value or 0)


@dataclass(frozen=True)
class LogRecord:
    """A raw contract log as delivered by eth_subscribe("logs")."""

    topics: tuple[str, ...]
    data: bytes
    tx_hash: str
    block_number: int
    address: str = ""
    log_index: int = 0
    removed: bool = False

    @classmethod
    def sentinel(cls) -> LogRecord:
        """Zero-topic record pushed once per established subscription."""
        return cls(topics=(), data=b"", tx_hash="", block_number=0)

    @classmethod
    def from_rpc(cls, raw: dict) -> LogRecord:
        """Build from a JSON-RPC log object (hex-encoded fields).

        Raises MalformedLogError when a hex field cannot be parsed.
        """
        try:
            return cls(
                topics=tuple(str(t).lower() for t in raw.get("topics", [])),
                data=to_bytes(hexstr=raw.get("data") or "0x"),
                tx_hash=str(raw.get("transactionHash", "")),
                block_number=_as_int(raw.get("blockNumber")),
                address=str(raw.get("address", "")),
                log_index=_as_int(raw.get("logIndex")),
                removed=bool(raw.get("removed", False)),
            )
        except (TypeError, ValueError) as exc:
            raise MalformedLogError(
                f"malformed log in tx {raw.get('transactionHash')}: {exc}"
            ) from exc


@dataclass(frozen=True)
class TransferEvent:
    """ERC-20 Transfer(from, to, value) decoded from a LogRecord."""

    sender: str  # checksummed, from topics[1]
    recipient: str  # checksummed, from topics[2]
    value: int  # token smallest units
    tx_hash: str
    block_number: int
