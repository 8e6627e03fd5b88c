"""
Tests for transaction submission and progress observers.
"""
import pytest
from unittest.mock import MagicMock
from web3.exceptions import ContractLogicError

from brandedtoken_sdk.exceptions import InvalidParameterError, TransactionError
from brandedtoken_sdk.models import TxReceipt
from brandedtoken_sdk.transaction import ERROR, RECEIPT, TRANSACTION_HASH, TransactionSender
from tests.test_helpers import FakeContractCall, TEST_GATEWAY, TEST_OWNER, TEST_VALUE_TOKEN


@pytest.fixture
def tx(chain):
    return FakeContractCall(chain, TEST_VALUE_TOKEN, "approve", (TEST_OWNER, 10))


def test_send_through_node(w3, chain, tx):
    """Without a signer the node signs for the from account"""
    sender = TransactionSender(w3)

    receipt = sender.send(tx, {"from": TEST_OWNER, "gas": 100000})

    assert isinstance(receipt, TxReceipt)
    assert receipt.tx_hash == "0x" + "00" * 31 + "01"
    assert chain.kinds() == ["transact", "wait_for_transaction_receipt"]
    assert chain.events[0]["transaction"] == {"from": TEST_OWNER, "gas": 100000}


def test_receipt_wait_uses_configured_timeouts(w3, tx):
    sender = TransactionSender(w3, receipt_timeout=30, poll_latency=0.5)

    sender.send(tx, {"from": TEST_OWNER})

    _, kwargs = w3.eth.wait_for_transaction_receipt.call_args
    assert kwargs == {"timeout": 30, "poll_latency": 0.5}


def test_send_with_custom_signer(w3, chain, tx):
    signer = MagicMock()
    signer.address = TEST_OWNER
    signer.sign_transaction.return_value = MagicMock(raw_transaction=b"\x01\x02")
    sender = TransactionSender(w3, signer=signer)

    sender.send(tx, {"gas": 100000})

    assert chain.kinds() == [
        "get_transaction_count", "build_transaction",
        "send_raw_transaction", "wait_for_transaction_receipt",
    ]
    built = signer.sign_transaction.call_args[0][0]
    assert built["from"] == TEST_OWNER
    assert built["nonce"] == 7
    assert built["gas"] == 100000
    w3.eth.send_raw_transaction.assert_called_once_with(b"\x01\x02")


def test_send_with_signer_keeps_caller_nonce(w3, chain, tx):
    signer = MagicMock()
    signer.address = TEST_OWNER
    signer.sign_transaction.return_value = MagicMock(raw_transaction=b"\x01")
    sender = TransactionSender(w3, signer=signer)

    sender.send(tx, {"from": TEST_OWNER, "nonce": 42})

    assert "get_transaction_count" not in chain.kinds()
    assert signer.sign_transaction.call_args[0][0]["nonce"] == 42


def test_send_with_local_account(w3, chain, tx, local_account):
    """An eth_account LocalAccount signs locally"""
    sender = TransactionSender(w3, signer=local_account)

    receipt = sender.send(tx, {"from": local_account.address, "gas": 100000, "gasPrice": 1000000000})

    assert receipt.status == 1
    raw = w3.eth.send_raw_transaction.call_args[0][0]
    assert isinstance(raw, bytes) and len(raw) > 0


def test_signing_failure_raises_transaction_error(w3, chain, tx):
    signer = MagicMock()
    signer.address = TEST_OWNER
    signer.sign_transaction.side_effect = ValueError("bad key")
    sender = TransactionSender(w3, signer=signer)

    with pytest.raises(TransactionError, match="Failed to sign transaction: bad key"):
        sender.send(tx, {"from": TEST_OWNER})
    assert "send_raw_transaction" not in chain.kinds()


def test_observers_are_notified_in_order(w3, tx):
    sender = TransactionSender(w3)
    seen = []

    receipt = (
        sender.submit(tx, {"from": TEST_OWNER})
        .on(TRANSACTION_HASH, lambda value: seen.append((TRANSACTION_HASH, value)))
        .on(RECEIPT, lambda value: seen.append((RECEIPT, value)))
        .on(ERROR, lambda value: seen.append((ERROR, value)))
        .wait()
    )

    assert seen == [(TRANSACTION_HASH, receipt.tx_hash), (RECEIPT, receipt)]


def test_error_observer_sees_original_exception(w3, chain, tx):
    revert = ContractLogicError("execution reverted")
    chain.transact_error = revert
    errors = []

    pending = TransactionSender(w3).submit(tx, {"from": TEST_OWNER}).on(ERROR, errors.append)

    with pytest.raises(ContractLogicError) as excinfo:
        pending.wait()
    assert excinfo.value is revert
    assert errors == [revert]


def test_submit_does_not_send(w3, chain, tx):
    TransactionSender(w3).submit(tx, {"from": TEST_OWNER})
    assert chain.events == []


def test_pending_transaction_is_sent_once(w3, tx):
    pending = TransactionSender(w3).submit(tx, {"from": TEST_OWNER})
    pending.wait()

    with pytest.raises(TransactionError, match="already been submitted"):
        pending.wait()


def test_unknown_event_rejected(w3, tx):
    pending = TransactionSender(w3).submit(tx, {"from": TEST_OWNER})

    with pytest.raises(InvalidParameterError, match="Unknown transaction event"):
        pending.on("confirmation", lambda value: None)


def test_submit_copies_options(w3, tx):
    options = {"from": TEST_OWNER}
    pending = TransactionSender(w3).submit(tx, options)
    pending.tx_options["gas"] = 1

    assert options == {"from": TEST_OWNER}


def test_signed_send_drops_matching_to(w3, chain, tx):
    signer = MagicMock()
    signer.address = TEST_OWNER
    signer.sign_transaction.return_value = MagicMock(raw_transaction=b"\x01")
    options = {"from": TEST_OWNER, "to": TEST_VALUE_TOKEN, "nonce": 1}

    TransactionSender(w3, signer=signer).send(tx, options)

    assert "to" not in chain.sent()[0]["transaction"]
    assert signer.sign_transaction.call_args[0][0]["to"] == TEST_VALUE_TOKEN


def test_signed_send_rejects_mismatched_to(w3, chain, tx):
    signer = MagicMock()
    signer.address = TEST_OWNER

    with pytest.raises(InvalidParameterError, match="does not match contract address"):
        TransactionSender(w3, signer=signer).send(tx, {"from": TEST_OWNER, "to": TEST_GATEWAY, "nonce": 1})
    assert "build_transaction" not in chain.kinds()
    signer.sign_transaction.assert_not_called()


def test_node_send_keeps_to(w3, chain, tx):
    TransactionSender(w3).send(tx, {"from": TEST_OWNER, "to": TEST_VALUE_TOKEN})
    assert chain.sent()[0]["transaction"]["to"] == TEST_VALUE_TOKEN
