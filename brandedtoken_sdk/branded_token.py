"""
Contract interact for BrandedToken.

Every state-changing call comes in two forms: ``<operation>_raw_tx`` builds
and returns the unsent contract call, and ``<operation>`` validates the
transaction options, builds the raw transaction and submits it through the
:class:`TransactionSender`, returning the receipt.

Conversion-rate math, signature checks and restriction rules all run inside
the contract; this class only marshals parameters.
"""
import logging
from typing import Any, Dict, List, Optional

from web3 import Web3

from . import contracts
from .exceptions import ContractNotFoundError, InvalidParameterError
from .models import StakeRequest, TxReceipt
from .registry import ContractRegistry, get_default_registry
from .transaction import TransactionSender
from .utils import is_address, require, validate_address, validate_connection, validate_tx_options

logger = logging.getLogger(__name__)

MAX_CONVERSION_RATE_DECIMALS = 5


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class BrandedToken:
    """
    Client for a deployed BrandedToken contract.

    Args:
        w3: Web3 connection
        address: BrandedToken contract address
        sender: Transaction sender (defaults to one signing through the node)
        registry: Contract registry (defaults to the shared registry)
        logger: Optional logger instance

    Raises:
        InvalidParameterError: If ``w3`` or ``address`` is invalid
        ContractNotFoundError: If the contract cannot be loaded
    """

    def __init__(
        self,
        w3: Web3,
        address: str,
        sender: Optional[TransactionSender] = None,
        registry: Optional[ContractRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        validate_connection(w3, self.logger)
        if not is_address(address):
            message = f"Mandatory Parameter 'address' is missing or invalid: {address}"
            self.logger.error(message)
            raise InvalidParameterError(message)

        self.w3 = w3
        self.address = address
        self.registry = registry or get_default_registry()
        self.sender = sender or TransactionSender(w3, logger=self.logger)

        self.contract = contracts.get_branded_token(self.w3, self.address, registry=self.registry)
        if not self.contract:
            message = f"Could not load branded token contract for: {self.address}"
            self.logger.error(message)
            raise ContractNotFoundError(message, contract_name=contracts.BRANDED_TOKEN)

    @classmethod
    def deploy(
        cls,
        w3: Web3,
        value_token: str,
        symbol: str,
        name: str,
        decimals: int,
        conversion_rate: int,
        conversion_rate_decimals: int,
        organization: str,
        tx_options: Dict[str, Any],
        sender: Optional[TransactionSender] = None,
        registry: Optional[ContractRegistry] = None,
    ) -> "BrandedToken":
        """
        Deploy a BrandedToken contract.

        Conversion parameters give the rate and its scale. For example, if
        1 value token is worth 3.5 branded tokens, ``conversion_rate`` is 35
        and ``conversion_rate_decimals`` is 1.

        Args:
            w3: Origin chain web3 connection
            value_token: Address of the value token
            symbol: Branded token symbol
            name: Branded token name
            decimals: Branded token decimals
            conversion_rate: Conversion rate, greater than zero
            conversion_rate_decimals: Conversion rate scale, at most 5
            organization: Organization contract address
            tx_options: Transaction options, ``from`` is required
            sender: Transaction sender to deploy with
            registry: Registry holding the BrandedToken binary

        Returns:
            BrandedToken bound to the deployed address

        Raises:
            InvalidParameterError: If any parameter is invalid
        """
        validate_tx_options(tx_options, logger)

        tx = cls.deploy_raw_tx(
            w3,
            value_token,
            symbol,
            name,
            decimals,
            conversion_rate,
            conversion_rate_decimals,
            organization,
            registry=registry,
        )

        sender = sender or TransactionSender(w3)
        receipt = sender.send(tx, tx_options)
        logger.info(f"BrandedToken deployed at {receipt.contract_address}")
        return cls(w3, receipt.contract_address, sender=sender, registry=registry)

    @classmethod
    def deploy_raw_tx(
        cls,
        w3: Web3,
        value_token: str,
        symbol: str,
        name: str,
        decimals: int,
        conversion_rate: int,
        conversion_rate_decimals: int,
        organization: str,
        registry: Optional[ContractRegistry] = None,
    ):
        """
        Raw transaction for :meth:`deploy`.

        Returns:
            Unsent contract constructor call
        """
        validate_connection(w3, logger)
        validate_address(value_token, "valueToken", logger)
        validate_address(organization, "organization", logger)

        rate = _to_int(conversion_rate)
        require(
            rate is not None and rate > 0,
            f"Invalid conversion rate: {conversion_rate}. It should be greater than zero",
            logger,
        )
        rate_decimals = _to_int(conversion_rate_decimals)
        require(
            rate_decimals is not None and 0 <= rate_decimals <= MAX_CONVERSION_RATE_DECIMALS,
            f"Invalid conversion rate decimal: {conversion_rate_decimals}. "
            f"It should not be greater than {MAX_CONVERSION_RATE_DECIMALS}",
            logger,
        )

        registry = registry or get_default_registry()
        bin_ = registry.get_bin(contracts.BRANDED_TOKEN)

        args = [
            value_token,
            symbol,
            name,
            decimals,
            conversion_rate,
            conversion_rate_decimals,
            organization,
        ]

        contract = contracts.get_branded_token(w3, options={"bytecode": bin_}, registry=registry)
        return contract.constructor(*args)

    def convert_to_branded_tokens(self, value_tokens: int) -> int:
        """Amount of branded tokens equivalent to ``value_tokens``."""
        return self.contract.functions.convertToBrandedTokens(value_tokens).call()

    def convert_to_value_tokens(self, branded_tokens: int) -> int:
        """Amount of value tokens equivalent to ``branded_tokens``."""
        return self.contract.functions.convertToValueTokens(branded_tokens).call()

    def request_stake(self, stake_amount: int, tx_options: Dict[str, Any]) -> TxReceipt:
        """
        Request stake for the given amount. The branded token must already be
        approved to transfer ``stake_amount`` of value tokens from the staker.

        The mint amount is read from the contract's own conversion.
        """
        validate_tx_options(tx_options, self.logger)

        mint_amount = self.convert_to_branded_tokens(stake_amount)
        tx = self.request_stake_raw_tx(stake_amount, mint_amount)
        return self.sender.send(tx, tx_options)

    def request_stake_raw_tx(self, stake_amount: int, mint_amount: int):
        return self.contract.functions.requestStake(stake_amount, mint_amount)

    def accept_stake_request(
        self,
        stake_request_hash: str,
        r: str,
        s: str,
        v: int,
        tx_options: Dict[str, Any],
    ) -> TxReceipt:
        """
        Accept an open stake request.

        Args:
            stake_request_hash: EIP-712 hash of the stake request
            r: R of the worker signature
            s: S of the worker signature
            v: V of the worker signature
            tx_options: Transaction options, ``from`` is required
        """
        validate_tx_options(tx_options, self.logger)

        tx = self.accept_stake_request_raw_tx(stake_request_hash, r, s, v)
        return self.sender.send(tx, tx_options)

    def accept_stake_request_raw_tx(self, stake_request_hash: str, r: str, s: str, v: int):
        require(stake_request_hash, f"Invalid stakeRequestHash: {stake_request_hash}.", self.logger)
        require(r, f"Invalid r of signature: {r}.", self.logger)
        require(s, f"Invalid s of signature: {s}.", self.logger)
        require(v, f"Invalid v of signature: {v}.", self.logger)

        return self.contract.functions.acceptStakeRequest(stake_request_hash, r, s, v)

    def reject_stake_request(self, stake_request_hash: str, tx_options: Dict[str, Any]) -> TxReceipt:
        """Reject a stake request. Must be called by an organization worker."""
        validate_tx_options(tx_options, self.logger)

        tx = self.reject_stake_request_raw_tx(stake_request_hash)
        return self.sender.send(tx, tx_options)

    def reject_stake_request_raw_tx(self, stake_request_hash: str):
        require(stake_request_hash, f"Invalid stakeRequestHash: {stake_request_hash}.", self.logger)

        return self.contract.functions.rejectStakeRequest(stake_request_hash)

    def lift_restriction(self, addresses: List[str], tx_options: Dict[str, Any]) -> TxReceipt:
        """Lift transfer restrictions for the given addresses."""
        validate_tx_options(tx_options, self.logger)

        tx = self.lift_restriction_raw_tx(addresses)
        return self.sender.send(tx, tx_options)

    def lift_restriction_raw_tx(self, addresses: List[str]):
        require(addresses, f"At least one address must be defined: {addresses}", self.logger)

        return self.contract.functions.liftRestriction(list(addresses))

    def is_unrestricted(self, address: str) -> bool:
        return self.contract.functions.isUnrestricted(address).call()

    def redeem(self, amount: int, tx_options: Dict[str, Any]) -> TxReceipt:
        """
        Redeem branded tokens for the equivalent staked value tokens, returned
        to the same address.

        Args:
            amount: Branded tokens to redeem, in wei
            tx_options: Transaction options, ``from`` is required
        """
        validate_tx_options(tx_options, self.logger)

        tx = self.redeem_raw_tx(amount)
        return self.sender.send(tx, tx_options)

    def redeem_raw_tx(self, amount: int):
        require(amount, f"Invalid redeemAmount: {amount}.", self.logger)

        return self.contract.functions.redeem(amount)

    def stake_request_hash(self, staker: str) -> bytes:
        """Hash of the open stake request of ``staker`` (zero if none)."""
        return self.contract.functions.stakeRequestHashes(staker).call()

    def stake_request(self, stake_request_hash: str) -> StakeRequest:
        result = self.contract.functions.stakeRequests(stake_request_hash).call()
        return StakeRequest.from_call_result(result)
