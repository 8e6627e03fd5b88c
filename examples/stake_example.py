#!/usr/bin/env python3
"""
Example of staking value tokens for branded tokens through a GatewayComposer.
"""
import json
import logging
import os

from eth_account import Account
from web3 import Web3

from brandedtoken_sdk import BrandedToken, Staker, TransactionSender
from brandedtoken_sdk.registry import get_default_registry


def main():
    """
    Demonstrate the staking flow.

    This example shows how to:
    1. Read the branded token equivalent of a value token amount
    2. Approve the GatewayComposer and request stake through it
    3. Look up the resulting stake request
    """
    logging.basicConfig(level=logging.INFO)

    # Read environment variables
    RPC_URL = os.environ.get("RPC_URL", "http://localhost:8545")
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    VALUE_TOKEN = os.environ.get("VALUE_TOKEN")
    BRANDED_TOKEN = os.environ.get("BRANDED_TOKEN")
    GATEWAY_COMPOSER = os.environ.get("GATEWAY_COMPOSER")
    GATEWAY = os.environ.get("GATEWAY")
    BENEFICIARY = os.environ.get("BENEFICIARY")

    # Verify configuration
    missing = [
        name for name, value in [
            ("PRIVATE_KEY", PRIVATE_KEY),
            ("VALUE_TOKEN", VALUE_TOKEN),
            ("BRANDED_TOKEN", BRANDED_TOKEN),
            ("GATEWAY_COMPOSER", GATEWAY_COMPOSER),
            ("GATEWAY", GATEWAY),
            ("BENEFICIARY", BENEFICIARY),
        ] if not value
    ]
    if missing:
        print(f"ERROR: missing environment variables: {', '.join(missing)}")
        return

    w3 = Web3(Web3.HTTPProvider(RPC_URL))
    account = Account.from_key(PRIVATE_KEY)
    sender = TransactionSender(w3, signer=account)
    print(f"Staker address: {account.address}")

    staker = Staker(w3, VALUE_TOKEN, BRANDED_TOKEN, GATEWAY_COMPOSER, sender=sender)

    stake_amount = Web3.to_wei(1, "ether")
    mint_amount = staker.convert_to_bt_token(stake_amount)
    print(f"Staking {stake_amount} value tokens for {mint_amount} branded tokens")

    value_token_abi = get_default_registry().get_abi("EIP20Token")
    receipt = staker.stake(
        value_token_abi,
        account.address,
        stake_amount,
        mint_amount,
        GATEWAY,
        0,
        0,
        BENEFICIARY,
        0,
    )
    print(f"Request stake mined in block {receipt.block_number}: {receipt.tx_hash}")

    # The branded token records the request under the composer address
    branded_token = BrandedToken(w3, BRANDED_TOKEN, sender=sender)
    request_hash = branded_token.stake_request_hash(GATEWAY_COMPOSER)
    stake_request = branded_token.stake_request(request_hash)
    print(json.dumps(stake_request.model_dump(), indent=2))


if __name__ == "__main__":
    main()
