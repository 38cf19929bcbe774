"""ERC-20 Transfer log decoder."""

from __future__ import annotations

import logging

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address

from bridge_funder.errors import TransferDecodeError
from bridge_funder.models.events import LogRecord, TransferEvent

log = logging.getLogger(__name__)

# keccak256("Transfer(address,address,uint256)")
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def topic_to_address(topic: str) -> str:
    """Recover an indexed address parameter from its 32-byte topic.

    Raises ValueError when the topic is not a 0x-prefixed 32-byte hex word.
    """
    if len(topic) != 66 or not topic.startswith("0x"):
        raise ValueError(f"not a 32-byte topic: {topic!r}")
    return to_checksum_address("0x" + topic[-40:])


class TransferDecoder:
    """Turns raw contract logs into TransferEvents.

    Only the ``value`` is ABI-decoded from the data payload. ``from`` and
    ``to`` are indexed, so they always come from topics[1] and topics[2].
    """

    def decode(self, record: LogRecord) -> TransferEvent | None:
        """Decode a Transfer log, or return None for anything else.

        Raises TransferDecodeError when a Transfer-signature log is malformed.
        """
        if not record.topics:
            # connection-established sentinel
            return None

        if record.topics[0].lower() != TRANSFER_TOPIC:
            log.debug("Ignoring log with topic %s", record.topics[0][:18])
            return None

        if record.removed:
            log.debug("Ignoring removed log in tx %s", record.tx_hash)
            return None

        if len(record.topics) < 3:
            raise TransferDecodeError(
                f"Transfer log in tx {record.tx_hash} has {len(record.topics)} topics, "
                "expected indexed from/to"
            )

        try:
            (value,) = abi_decode(["uint256"], record.data)
        except DecodingError as exc:
            raise TransferDecodeError(
                f"cannot unpack Transfer data in tx {record.tx_hash}: {exc}"
            ) from exc

        try:
            sender = topic_to_address(record.topics[1])
            recipient = topic_to_address(record.topics[2])
        except ValueError as exc:
            raise TransferDecodeError(
                f"bad indexed address in Transfer log of tx {record.tx_hash}: {exc}"
            ) from exc

        return TransferEvent(
            sender=sender,
            recipient=recipient,
            value=value,
            tx_hash=record.tx_hash,
            block_number=record.block_number,
        )
