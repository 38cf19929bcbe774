"""Shared fixtures for bridge_funder tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from bridge_funder.daemon import FunderDaemon
from bridge_funder.evm.dispatcher import EvmFundDispatcher
from bridge_funder.models.config import FunderConfig
from bridge_funder.policy.funding import BalanceCeilingPolicy

from tests.mocks import MockChainClient, MockNotifier

# Well-known local devnet account #0
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_SENDER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

HANDLER_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
CONTRACT_ADDRESS = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
RECIPIENT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
OTHER_ADDRESS = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"

NETWORK_ID = 1337
EXPLORER_TX_URL = "https://ubiqscan.io/tx/{tx_hash}"


# ── Report metadata ──────────────────────────────────────────────


def pytest_configure(config):
    """Add chain info to the HTML report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Network ID"] = str(NETWORK_ID)
    meta["Token Contract"] = CONTRACT_ADDRESS
    meta["Bridge Handler"] = HANDLER_ADDRESS
    meta["Funding Account"] = TEST_SENDER


def pytest_html_results_summary(prefix, summary, postfix):
    """Inject the funding account explorer link into the report summary."""
    url = EXPLORER_TX_URL.replace("/tx/{tx_hash}", f"/address/{TEST_SENDER}")
    prefix.append(
        '<div style="margin:8px 0;padding:10px;background:#f8f9fa;border:1px solid #dee2e6;'
        'border-radius:4px;font-family:monospace;font-size:13px;">'
        "<strong>Funding Account</strong><br/>"
        f'<a href="{url}" target="_blank">{TEST_SENDER}</a>'
        "</div>"
    )


def make_test_config(**overrides) -> FunderConfig:
    """Build a FunderConfig suitable for testing."""
    defaults = dict(
        poll_interval=0.05,
        channel_capacity=10,
        rpc_url="http://127.0.0.1:8545",
        ws_rpc_url="ws://127.0.0.1:8546",
        contract_address=CONTRACT_ADDRESS,
        handler_address=HANDLER_ADDRESS,
        sender_private_key=TEST_PRIVATE_KEY,
        subscribe_timeout=1.0,
        reconnect_delay=0.0,
        base_asset="UBQ",
        fund_limit_wei=100,
        fund_amount_wei=50,
        value_decimals=17,
        webhook_url="https://discord.example/api/webhooks/1/abc",
        explorer_tx_url=EXPLORER_TX_URL,
    )
    defaults.update(overrides)
    return FunderConfig(**defaults)


@pytest.fixture
def test_config():
    """Default FunderConfig for tests."""
    return make_test_config()


@pytest.fixture
def mock_chain():
    return MockChainClient(network_id=NETWORK_ID)


@pytest.fixture
def mock_notifier():
    return MockNotifier()


def wire_daemon(cfg: FunderConfig, chain, notifier) -> FunderDaemon:
    """Build a FunderDaemon whose chain-facing components use the given mocks."""
    d = FunderDaemon(cfg)
    d.chain = chain
    d.policy = BalanceCeilingPolicy(chain, cfg.fund_limit_wei)
    d.dispatcher = EvmFundDispatcher(chain, cfg.sender_private_key, cfg.fund_amount_wei)
    d.notifier = notifier
    return d


@pytest.fixture
def daemon(test_config, mock_chain, mock_notifier):
    """Fully wired FunderDaemon with mocked chain and notifier."""
    return wire_daemon(test_config, mock_chain, mock_notifier)
