"""Exception types raised across bridge_funder components."""

from __future__ import annotations


class BridgeFunderError(Exception):
    """Base class for all bridge_funder errors."""


class ChainQueryError(BridgeFunderError):
    """A call against the chain node failed (balance, nonce, gas price, ...)."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class SubscriptionError(BridgeFunderError):
    """The node refused or dropped a log subscription."""


class TransferDecodeError(BridgeFunderError):
    """A Transfer log could not be decoded.

    Raised when the payload does not match the ERC-20 Transfer ABI. This
    means the contract address or ABI is wrong, so it is not recoverable
    by reconnecting.
    """


class MalformedLogError(TransferDecodeError):
    """A log pushed by the node has fields that are not valid hex."""
