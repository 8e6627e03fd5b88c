"""
Validation and conversion helpers shared by the contract interacts.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from web3 import Web3

from .exceptions import InvalidParameterError
from .models import TxReceipt

logger = logging.getLogger(__name__)


def is_address(value: Any) -> bool:
    """
    Return True if ``value`` is a well-formed chain address.

    Mixed-case hex strings must carry a valid EIP-55 checksum.
    """
    if not isinstance(value, (str, bytes)):
        return False
    if not Web3.is_address(value):
        return False
    if isinstance(value, bytes):
        return True

    digits = value[2:] if value[:2].lower() == "0x" else value
    if digits == digits.lower() or digits == digits.upper():
        return True
    return Web3.is_checksum_address(value)


def _fail(message: str, log: Optional[logging.Logger] = None) -> None:
    (log or logger).error(message)
    raise InvalidParameterError(message)


def validate_connection(w3: Any, log: Optional[logging.Logger] = None) -> None:
    """
    Ensure ``w3`` is a web3 connection.

    Raises:
        InvalidParameterError: If ``w3`` is not a ``Web3`` instance
    """
    if not isinstance(w3, Web3):
        _fail(f"Mandatory Parameter 'web3' is missing or invalid: {w3}", log)


def validate_address(value: Any, name: str, log: Optional[logging.Logger] = None) -> None:
    """
    Ensure ``value`` is a well-formed address.

    Raises:
        InvalidParameterError: If the address is malformed
    """
    if not is_address(value):
        _fail(f"Invalid {name} address: {value}.", log)


def validate_tx_options(tx_options: Optional[Mapping[str, Any]], log: Optional[logging.Logger] = None) -> None:
    """
    Ensure transaction options are present and carry a valid ``from`` address.

    Raises:
        InvalidParameterError: If options are missing or ``from`` is malformed
    """
    if not tx_options or not isinstance(tx_options, Mapping):
        _fail(f"Invalid transaction options: {tx_options}.", log)
    if not is_address(tx_options.get("from")):
        _fail(f"Invalid from address {tx_options.get('from')} in transaction options.", log)


def require(value: Any, message: str, log: Optional[logging.Logger] = None) -> None:
    """Raise ``InvalidParameterError`` with ``message`` if ``value`` is falsy."""
    if not value:
        _fail(message, log)


def merge_tx_options(defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a new options dict with ``overrides`` applied over ``defaults``."""
    merged = dict(defaults)
    if overrides:
        merged.update(overrides)
    return merged


def to_checksum(address: Optional[str]) -> Optional[str]:
    if address is None:
        return None
    return Web3.to_checksum_address(address)


def receipt_to_model(web3_receipt: Mapping[str, Any]) -> TxReceipt:
    """
    Convert a web3 receipt to our TxReceipt model

    Args:
        web3_receipt: The web3 transaction receipt

    Returns:
        Our TxReceipt model
    """
    receipt_dict = dict(web3_receipt)

    # Convert bytes to hex strings
    for key, value in list(receipt_dict.items()):
        if isinstance(value, bytes):
            receipt_dict[key] = Web3.to_hex(value)

    receipt_dict["logs"] = [dict(log) for log in receipt_dict.get("logs") or []]

    return TxReceipt.model_validate(receipt_dict)
