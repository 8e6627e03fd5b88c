"""
BrandedToken stake requests routed through a GatewayComposer.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from web3 import Web3

from .. import contracts
from ..models import GatewayComposerStakeRequest, StakeRequest, TxReceipt
from ..registry import ContractRegistry, get_default_registry
from ..transaction import ERROR, RECEIPT, TRANSACTION_HASH, TransactionSender
from ..utils import merge_tx_options, require, validate_address, validate_tx_options

logger = logging.getLogger(__name__)

DEFAULT_COMPOSER_GAS = 8000000


class Staker:
    """
    Performs BrandedToken requestStake through GatewayComposer.

    Args:
        w3: Origin chain web3 connection
        value_token: Value token contract address
        branded_token: BrandedToken contract address
        gateway_composer: GatewayComposer contract address
        tx_options: Default transaction options
        sender: Transaction sender (defaults to one signing through the node)
        registry: Contract registry (defaults to the shared registry)
        logger: Optional logger instance
    """

    def __init__(
        self,
        w3: Web3,
        value_token: str,
        branded_token: str,
        gateway_composer: str,
        tx_options: Optional[Dict[str, Any]] = None,
        sender: Optional[TransactionSender] = None,
        registry: Optional[ContractRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.w3 = w3
        self.value_token = value_token
        self.branded_token = branded_token
        self.gateway_composer = gateway_composer
        self.tx_options = dict(tx_options or {})
        self.logger = logger or logging.getLogger(__name__)
        self.registry = registry or get_default_registry()
        self.sender = sender or TransactionSender(w3, logger=self.logger)

    def stake(
        self,
        value_token_abi: List[Dict[str, Any]],
        owner: str,
        stake_vt_amount: int,
        mint_bt_amount: int,
        gateway: str,
        gas_price: int,
        gas_limit: int,
        beneficiary: str,
        staker_gateway_nonce: int,
        tx_options: Optional[Dict[str, Any]] = None,
    ) -> TxReceipt:
        """
        Approve the composer for ``stake_vt_amount`` value tokens, then request
        stake through it. The approval receipt is awaited before the stake
        request is sent, since the composer checks the allowance on-chain.

        Returns:
            Receipt of the composer request stake transaction
        """
        validate_address(owner, "owner", self.logger)
        approve_options = merge_tx_options({"from": owner}, merge_tx_options(self.tx_options, tx_options))
        validate_tx_options(approve_options, self.logger)

        approve_tx = self.approve_for_value_token(value_token_abi, stake_vt_amount)
        self.logger.info(f"Approving GatewayComposer {self.gateway_composer} for {stake_vt_amount} value tokens")
        self.sender.send(approve_tx, approve_options)

        return self.request_stake(
            owner,
            stake_vt_amount,
            mint_bt_amount,
            gateway,
            gas_price,
            gas_limit,
            beneficiary,
            staker_gateway_nonce,
            self.w3,
            merge_tx_options(self.tx_options, tx_options),
        )

    def convert_to_bt_token(
        self,
        vt_amount: int,
        branded_token: Optional[str] = None,
        w3: Optional[Web3] = None,
        tx_options: Optional[Dict[str, Any]] = None,
    ) -> int:
        """
        Amount of branded tokens equivalent to ``vt_amount`` value tokens.

        ``branded_token`` and ``w3`` default to the instance values.
        """
        contract = contracts.get_branded_token(
            w3 or self.w3,
            branded_token or self.branded_token,
            registry=self.registry,
        )

        self.logger.debug("Getting Branded tokens equivalent to Value tokens")
        return contract.functions.convertToBrandedTokens(vt_amount).call(tx_options)

    def approve_for_value_token(
        self,
        value_token_abi: List[Dict[str, Any]],
        stake_vt_amount: int,
        w3: Optional[Web3] = None,
    ):
        """
        Raw transaction approving the composer to transfer value tokens.

        Raises:
            InvalidParameterError: If ``value_token_abi`` is empty
        """
        require(value_token_abi, "Value token abi is not provided", self.logger)

        contract = (w3 or self.w3).eth.contract(
            address=Web3.to_checksum_address(self.value_token),
            abi=value_token_abi,
        )
        return contract.functions.approve(self.gateway_composer, stake_vt_amount)

    def request_stake(
        self,
        owner: str,
        stake_vt_amount: int,
        mint_bt_amount: int,
        gateway: str,
        gas_price: int,
        gas_limit: int,
        beneficiary: str,
        staker_gateway_nonce: int,
        w3: Optional[Web3] = None,
        tx_options: Optional[Dict[str, Any]] = None,
    ) -> TxReceipt:
        """
        Request stake on the GatewayComposer.

        Args:
            owner: Owner of the GatewayComposer contract
            stake_vt_amount: Value token amount to stake
            mint_bt_amount: Branded token amount to mint
            gateway: Gateway contract address
            gas_price: Gas price the staker pays for stake and mint
            gas_limit: Gas limit the staker pays for stake and mint
            beneficiary: Auxiliary chain address receiving utility tokens
            staker_gateway_nonce: Nonce of the staker stored in Gateway
            w3: Origin chain web3 connection
            tx_options: Transaction options, merged over the defaults
        """
        validate_address(owner, "owner", self.logger)
        validate_tx_options(merge_tx_options({"from": owner}, tx_options), self.logger)

        tx, options = self._request_stake_raw_tx(
            owner,
            stake_vt_amount,
            mint_bt_amount,
            gateway,
            beneficiary,
            gas_price,
            gas_limit,
            staker_gateway_nonce,
            w3,
            tx_options,
        )

        return (
            self.sender.submit(tx, options)
            .on(TRANSACTION_HASH, lambda tx_hash: self.logger.info(f"Request stake transaction hash: {tx_hash}"))
            .on(RECEIPT, lambda receipt: self.logger.info(f"Request stake receipt: {receipt.model_dump_json()}"))
            .on(ERROR, lambda error: self.logger.error(f"Request stake failed: {error}"))
            .wait()
        )

    def _request_stake_raw_tx(
        self,
        owner: str,
        stake_vt_amount: int,
        mint_bt_amount: int,
        gateway: str,
        beneficiary: str,
        gas_price: int,
        gas_limit: int,
        nonce: int,
        w3: Optional[Web3] = None,
        tx_options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Any, Dict[str, Any]]:
        """
        Build the GatewayComposer requestStake call.

        Returns:
            Tuple of (unsent contract call, merged transaction options)
        """
        default_options = {
            "from": owner,
            "to": self.gateway_composer,
            "gas": DEFAULT_COMPOSER_GAS,
        }
        options = merge_tx_options(default_options, tx_options)

        contract = contracts.get_gateway_composer(w3 or self.w3, self.gateway_composer, registry=self.registry)

        self.logger.debug("Constructed tx for GatewayComposer.requestStake")
        tx = contract.functions.requestStake(
            stake_vt_amount,
            mint_bt_amount,
            gateway,
            beneficiary,
            gas_price,
            gas_limit,
            nonce,
        )
        return tx, options

    def _get_stake_request_hash_for_staker_raw_tx(self, staker: str, w3: Optional[Web3] = None, tx_options=None):
        contract = contracts.get_branded_token(w3 or self.w3, self.branded_token, registry=self.registry)
        return contract.functions.stakeRequestHashes(staker).call(tx_options)

    def _get_stake_request_raw_tx(self, stake_request_hash: str, w3: Optional[Web3] = None, tx_options=None):
        contract = contracts.get_branded_token(w3 or self.w3, self.branded_token, registry=self.registry)
        return contract.functions.stakeRequests(stake_request_hash).call(tx_options)

    def _get_gc_stake_request_raw_tx(self, stake_request_hash: str, w3: Optional[Web3] = None, tx_options=None):
        contract = contracts.get_gateway_composer(w3 or self.w3, self.gateway_composer, registry=self.registry)
        return contract.functions.stakeRequests(stake_request_hash).call(tx_options)

    def get_stake_request_hash_for_staker(self, staker: str) -> bytes:
        return self._get_stake_request_hash_for_staker_raw_tx(staker)

    def get_stake_request(self, stake_request_hash: str) -> StakeRequest:
        return StakeRequest.from_call_result(self._get_stake_request_raw_tx(stake_request_hash))

    def get_gateway_composer_stake_request(self, stake_request_hash: str) -> GatewayComposerStakeRequest:
        return GatewayComposerStakeRequest.from_call_result(self._get_gc_stake_request_raw_tx(stake_request_hash))
