"""
Pytest fixtures for the BrandedToken SDK tests.
"""
import pytest
from eth_account import Account

import brandedtoken_sdk.registry as registry_module
from brandedtoken_sdk import BrandedToken, Staker
from brandedtoken_sdk.registry import ContractRegistry
from brandedtoken_sdk.transaction import TransactionSender
from tests.test_helpers import (
    RecordingChain, TEST_BIN, TEST_BRANDED_TOKEN, TEST_GATEWAY_COMPOSER,
    TEST_OWNER, TEST_PRIV_KEY, TEST_VALUE_TOKEN,
)


@pytest.fixture(autouse=True)
def _isolated_registry(monkeypatch):
    """Keep every test away from the developer's contracts folder and shared registry state."""
    monkeypatch.delenv(registry_module.CONTRACTS_PATH_ENV, raising=False)
    monkeypatch.setattr(registry_module, "_default_registry", None)


@pytest.fixture
def chain():
    """Recording connection double"""
    return RecordingChain()


@pytest.fixture
def w3(chain):
    return chain.w3


@pytest.fixture
def registry():
    """Registry with a BrandedToken binary registered"""
    reg = ContractRegistry()
    reg.add_bin("BrandedToken", TEST_BIN)
    return reg


@pytest.fixture
def tx_options():
    return {"from": TEST_OWNER, "gas": 7500000, "gasPrice": 1000000000}


@pytest.fixture
def branded_token(w3, registry):
    return BrandedToken(w3, TEST_BRANDED_TOKEN, registry=registry)


@pytest.fixture
def staker(w3, registry):
    return Staker(
        w3,
        TEST_VALUE_TOKEN,
        TEST_BRANDED_TOKEN,
        TEST_GATEWAY_COMPOSER,
        registry=registry,
    )


@pytest.fixture
def local_account():
    """Create a deterministic test account"""
    return Account.from_key(TEST_PRIV_KEY)


@pytest.fixture
def signing_sender(w3, local_account):
    return TransactionSender(w3, signer=local_account)
