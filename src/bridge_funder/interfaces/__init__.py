"""Protocol interfaces for all bridge_funder components."""

from bridge_funder.interfaces.chain import ChainClient
from bridge_funder.interfaces.dispatcher import FundDispatcher
from bridge_funder.interfaces.notifier import Notifier
from bridge_funder.interfaces.policy import FundingPolicy
from bridge_funder.interfaces.subscriber import LogSubscriber, LogSubscription

__all__ = [
    "ChainClient",
    "LogSubscriber", "LogSubscription",
    "FundingPolicy",
    "FundDispatcher",
    "Notifier",
]
