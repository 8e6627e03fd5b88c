"""
Shared constants and doubles for the BrandedToken SDK tests.
"""
from .chain import DEPLOYED_ADDRESS, FakeContractCall, RecordingChain

# Test constants used throughout tests
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_OWNER = "0x1234567890123456789012345678901234567890"
TEST_VALUE_TOKEN = "0x2345678901234567890123456789012345678901"
TEST_BRANDED_TOKEN = "0x3456789012345678901234567890123456789012"
TEST_GATEWAY_COMPOSER = "0x4567890123456789012345678901234567890123"
TEST_ORGANIZATION = "0x5678901234567890123456789012345678901234"
TEST_GATEWAY = "0x6789012345678901234567890123456789012345"
TEST_BENEFICIARY = "0x7890123456789012345678901234567890123456"
TEST_BIN = "0x608060405234801561001057600080fd5b50"

TEST_STAKE_REQUEST_HASH = "0x" + "ab" * 32
TEST_R = "0x" + "11" * 32
TEST_S = "0x" + "22" * 32
TEST_V = 27

__all__ = [
    "RecordingChain",
    "FakeContractCall",
    "DEPLOYED_ADDRESS",
    "TEST_PRIV_KEY",
    "TEST_OWNER",
    "TEST_VALUE_TOKEN",
    "TEST_BRANDED_TOKEN",
    "TEST_GATEWAY_COMPOSER",
    "TEST_ORGANIZATION",
    "TEST_GATEWAY",
    "TEST_BENEFICIARY",
    "TEST_BIN",
    "TEST_STAKE_REQUEST_HASH",
    "TEST_R",
    "TEST_S",
    "TEST_V",
]
