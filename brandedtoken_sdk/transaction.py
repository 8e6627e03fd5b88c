"""
Transaction submission.

A :class:`TransactionSender` takes a prepared contract call (a web3
``ContractFunction`` or ``ContractConstructor``) and submits it, either by
signing locally and sending the raw transaction or by asking the node to
sign for the ``from`` account.
"""
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from web3 import Web3

from .exceptions import InvalidParameterError, TransactionError
from .models import TxReceipt
from .utils import receipt_to_model

DEFAULT_RECEIPT_TIMEOUT = 120
DEFAULT_POLL_LATENCY = 0.1

TRANSACTION_HASH = "transactionHash"
RECEIPT = "receipt"
ERROR = "error"
EVENTS = (TRANSACTION_HASH, RECEIPT, ERROR)


class Signer(Protocol):
    """Protocol for custom signers"""
    address: str

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object"""
        ...


class PendingTransaction:
    """
    A prepared transaction that has not been sent yet.

    Observers registered with :meth:`on` are notified as the submission
    progresses: ``transactionHash`` with the hex hash once the node accepted
    the transaction, ``receipt`` with the :class:`TxReceipt` once mined, and
    ``error`` with the exception if anything fails. Observers only watch;
    the outcome of :meth:`wait` is the same with or without them.
    """

    def __init__(self, sender: "TransactionSender", tx: Any, tx_options: Optional[Mapping[str, Any]]):
        self.sender = sender
        self.tx = tx
        self.tx_options = dict(tx_options or {})
        self._observers: Dict[str, List[Callable[[Any], None]]] = {event: [] for event in EVENTS}
        self._submitted = False

    def on(self, event: str, callback: Callable[[Any], None]) -> "PendingTransaction":
        if event not in self._observers:
            raise InvalidParameterError(f"Unknown transaction event: {event}")
        self._observers[event].append(callback)
        return self

    def _notify(self, event: str, value: Any) -> None:
        for callback in self._observers[event]:
            callback(value)

    def wait(self) -> TxReceipt:
        """
        Send the transaction and block until its receipt is available.

        Returns:
            Transaction receipt

        Raises:
            TransactionError: If signing fails or the transaction was already sent
            Web3Exception: Transport or revert errors from the connection
        """
        if self._submitted:
            raise TransactionError("Transaction has already been submitted")
        self._submitted = True

        try:
            tx_hash = self.sender._dispatch(self.tx, self.tx_options)
            tx_hash_hex = Web3.to_hex(tx_hash)
            self.sender.logger.info(f"Transaction sent: {tx_hash_hex}")
            self._notify(TRANSACTION_HASH, tx_hash_hex)

            receipt = self.sender.wait_for_receipt(tx_hash)
            self._notify(RECEIPT, receipt)
            return receipt
        except Exception as e:
            self.sender.logger.error(f"Transaction failed: {e}")
            self._notify(ERROR, e)
            raise


class TransactionSender:
    """
    Submits prepared contract calls and waits for their receipts.

    Args:
        w3: Web3 connection
        signer: Optional local signer (e.g. an ``eth_account`` LocalAccount).
            Without one, the node signs for the ``from`` address.
        receipt_timeout: Seconds to wait for a receipt
        poll_latency: Receipt polling interval in seconds
        logger: Optional logger instance
    """

    def __init__(
        self,
        w3: Web3,
        signer: Optional[Signer] = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_latency: float = DEFAULT_POLL_LATENCY,
        logger: Optional[logging.Logger] = None,
    ):
        self.w3 = w3
        self.signer = signer
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency
        self.logger = logger or logging.getLogger(__name__)

    def submit(self, tx: Any, tx_options: Optional[Mapping[str, Any]]) -> PendingTransaction:
        return PendingTransaction(self, tx, tx_options)

    def send(self, tx: Any, tx_options: Optional[Mapping[str, Any]]) -> TxReceipt:
        return self.submit(tx, tx_options).wait()

    def _dispatch(self, tx: Any, tx_options: Dict[str, Any]) -> bytes:
        if self.signer is None:
            return tx.transact(tx_options)

        tx_options.setdefault("from", self.signer.address)
        if "nonce" not in tx_options:
            tx_options["nonce"] = self.w3.eth.get_transaction_count(tx_options["from"])

        built = tx.build_transaction(self._without_target(tx, tx_options))
        try:
            signed = self.signer.sign_transaction(built)
        except Exception as e:
            self.logger.error(f"Transaction signing failed: {e}")
            raise TransactionError(f"Failed to sign transaction: {str(e)}") from e

        return self.w3.eth.send_raw_transaction(signed.raw_transaction)

    def _without_target(self, tx: Any, tx_options: Dict[str, Any]) -> Dict[str, Any]:
        """
        Drop ``to`` from options bound for ``build_transaction``.

        web3 refuses a ``to`` field when the contract call already carries
        an address, so a ``to`` matching that address is removed.

        Raises:
            InvalidParameterError: If ``to`` names a different contract
        """
        address = getattr(tx, "address", None)
        if not address or "to" not in tx_options:
            return tx_options

        options = dict(tx_options)
        target = options.pop("to")
        if str(target).lower() != str(address).lower():
            message = f"Transaction option 'to' {target} does not match contract address {address}."
            self.logger.error(message)
            raise InvalidParameterError(message)
        return options

    def wait_for_receipt(self, tx_hash: bytes) -> TxReceipt:
        receipt = self.w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=self.receipt_timeout,
            poll_latency=self.poll_latency,
        )
        return receipt_to_model(receipt)
