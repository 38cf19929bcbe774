"""Configuration model for the funder daemon."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_EXPLORER_TX_URL = "https://ubiqscan.io/tx/{tx_hash}"


@dataclass
class FunderConfig:
    """Complete daemon configuration."""

    # Daemon
    log_level: str = "info"
    poll_interval: float = 1.0  # seconds the consumer waits before re-checking stop
    channel_capacity: int = 100  # max buffered log records

    # Chain
    rpc_url: str = "http://127.0.0.1:8545"
    ws_rpc_url: str = "ws://127.0.0.1:8546"
    contract_address: str = ""  # wrapped token emitting Transfer events
    handler_address: str = ""  # bridge ERC-20 handler
    sender_private_key: str = ""  # loaded from env var BRIDGE_FUNDER_SENDER_PRIVATE_KEY
    subscribe_timeout: float = 10.0  # seconds
    reconnect_delay: float = 2.0  # seconds between resubscribe attempts

    # Funding
    base_asset: str = "ETH"
    fund_limit_wei: int = 0  # fund only if balance <= this
    fund_amount_wei: int = 0
    value_decimals: int = 8  # decimals shown in notifications

    # Notifier
    webhook_url: str = ""
    avatar_username: str = ""
    avatar_url: str = ""
    explorer_tx_url: str = DEFAULT_EXPLORER_TX_URL
    notify_timeout: float = 10.0  # seconds
