"""
Exceptions for the BrandedToken SDK.

Errors coming from the chain connection (transport failures, reverted
transactions) are web3 exceptions and are propagated to the caller as-is.
"""
from typing import Optional


class BrandedTokenError(Exception):
    """Base exception for all SDK errors."""
    pass


class InvalidParameterError(BrandedTokenError, ValueError):
    """Raised when a parameter fails validation, before any network call."""
    pass


class ContractNotFoundError(BrandedTokenError):
    """Raised when a contract ABI or binary cannot be located."""

    def __init__(self, message: str, contract_name: Optional[str] = None):
        self.contract_name = contract_name
        super().__init__(message)


class TransactionError(BrandedTokenError):
    """Raised when a transaction cannot be signed or was already submitted."""
    pass
