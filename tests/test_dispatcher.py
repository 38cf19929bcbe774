"""Funding dispatcher: EIP-155 signing, broadcast, named errors."""

from __future__ import annotations

import pytest
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import keccak
from web3 import Web3

from bridge_funder.evm.dispatcher import (
    ERROR_GAS_PRICE,
    ERROR_NETWORK_ID,
    ERROR_NONCE,
    ERROR_SEND,
    TRANSFER_GAS_LIMIT,
    EvmFundDispatcher,
)
from tests.conftest import NETWORK_ID, RECIPIENT, TEST_PRIVATE_KEY, TEST_SENDER
from tests.mocks import MockChainClient


@pytest.fixture
def chain():
    return MockChainClient(nonce=3, gas_price=2_000_000_000, network_id=NETWORK_ID)


@pytest.fixture
def dispatcher(chain):
    return EvmFundDispatcher(chain, TEST_PRIVATE_KEY, amount_wei=50)


def test_sender_derived_from_private_key(dispatcher):
    assert dispatcher.sender_address == TEST_SENDER


def test_private_key_without_prefix(chain):
    d = EvmFundDispatcher(chain, TEST_PRIVATE_KEY[2:], amount_wei=50)
    assert d.sender_address == TEST_SENDER


async def test_fund_signs_and_broadcasts(dispatcher, chain):
    result = await dispatcher.fund(RECIPIENT.lower())

    assert result.success
    assert result.recipient == RECIPIENT
    assert result.amount_wei == 50
    assert result.nonce == 3
    assert result.gas_price == 2_000_000_000
    assert result.chain_id == NETWORK_ID

    assert len(chain.sent) == 1
    raw = chain.sent[0]
    assert result.tx_hash == Web3.to_hex(keccak(raw))
    assert Account.recover_transaction(raw) == TEST_SENDER


async def test_fund_queries_in_order(dispatcher, chain):
    await dispatcher.fund(RECIPIENT)

    assert chain.calls == [
        "pending_nonce",
        "suggested_gas_price",
        "network_id",
        "send_raw_transaction",
    ]


async def test_transaction_fields(dispatcher, monkeypatch):
    """Legacy value transfer with the fixed 21000 gas limit and empty data."""
    signed_txs = []
    original = LocalAccount.sign_transaction

    def capture(account, tx):
        signed_txs.append(dict(tx))
        return original(account, tx)

    monkeypatch.setattr(LocalAccount, "sign_transaction", capture)

    await dispatcher.fund(RECIPIENT)

    assert signed_txs == [{
        "nonce": 3,
        "to": RECIPIENT,
        "value": 50,
        "gas": TRANSFER_GAS_LIMIT,
        "gasPrice": 2_000_000_000,
        "data": b"",
        "chainId": NETWORK_ID,
    }]
    assert TRANSFER_GAS_LIMIT == 21_000


async def test_signature_is_bound_to_network_id(chain):
    """Same nonce/price on two networks yields two different transactions."""
    other = MockChainClient(nonce=3, gas_price=2_000_000_000, network_id=NETWORK_ID + 1)

    a = await EvmFundDispatcher(chain, TEST_PRIVATE_KEY, 50).fund(RECIPIENT)
    b = await EvmFundDispatcher(other, TEST_PRIVATE_KEY, 50).fund(RECIPIENT)

    assert a.tx_hash != b.tx_hash


@pytest.mark.parametrize(
    "operation, error",
    [
        ("pending_nonce", ERROR_NONCE),
        ("suggested_gas_price", ERROR_GAS_PRICE),
        ("network_id", ERROR_NETWORK_ID),
        ("send_raw_transaction", ERROR_SEND),
    ],
)
async def test_node_failures_return_named_errors(operation, error):
    chain = MockChainClient(fail={operation})
    result = await EvmFundDispatcher(chain, TEST_PRIVATE_KEY, 50).fund(RECIPIENT)

    assert not result.success
    assert result.error == error
    assert result.tx_hash is None
    # exactly one attempt, no retry
    assert chain.calls.count(operation) == 1
