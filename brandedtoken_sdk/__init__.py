"""
BrandedToken SDK.

Client wrappers for the BrandedToken and GatewayComposer contracts.
"""
from .branded_token import BrandedToken
from .exceptions import BrandedTokenError, ContractNotFoundError, InvalidParameterError, TransactionError
from .models import GatewayComposerStakeRequest, StakeRequest, TxReceipt
from .registry import ContractRegistry
from .stake import Staker
from .transaction import PendingTransaction, TransactionSender
from .version import __version__

__all__ = [
    "BrandedToken",
    "Staker",
    "ContractRegistry",
    "TransactionSender",
    "PendingTransaction",
    "TxReceipt",
    "StakeRequest",
    "GatewayComposerStakeRequest",
    "BrandedTokenError",
    "InvalidParameterError",
    "ContractNotFoundError",
    "TransactionError",
    "__version__",
]
