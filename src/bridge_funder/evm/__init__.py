"""EVM chain integration components."""

from bridge_funder.evm.client import Web3ChainClient
from bridge_funder.evm.decoder import TransferDecoder
from bridge_funder.evm.dispatcher import EvmFundDispatcher
from bridge_funder.evm.stream import EventStreamManager
from bridge_funder.evm.subscriber import WebSocketLogSubscriber

__all__ = [
    "Web3ChainClient",
    "TransferDecoder",
    "EvmFundDispatcher",
    "EventStreamManager",
    "WebSocketLogSubscriber",
]
