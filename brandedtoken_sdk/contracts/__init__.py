"""
Contract handle factories.

Each factory binds a registry ABI to a connection and, when given, a deployed
address. Without an address the handle is undeployed and can only be used to
build a deployment.
"""
from typing import Any, Dict, Optional

from web3 import Web3

from ..registry import ContractRegistry, get_default_registry
from ..utils import to_checksum

__all__ = [
    'BRANDED_TOKEN',
    'GATEWAY_COMPOSER',
    'EIP20_TOKEN',
    'get_contract',
    'get_branded_token',
    'get_gateway_composer',
    'get_eip20_token',
]

BRANDED_TOKEN = "BrandedToken"
GATEWAY_COMPOSER = "GatewayComposer"
EIP20_TOKEN = "EIP20Token"


def get_contract(
    w3: Web3,
    contract_name: str,
    address: Optional[str] = None,
    options: Optional[Dict[str, Any]] = None,
    registry: Optional[ContractRegistry] = None,
):
    """
    Build a contract handle for ``contract_name``.

    Args:
        w3: Web3 connection
        contract_name: Registry name of the contract
        address: Deployed contract address (None for an undeployed handle)
        options: Extra keyword arguments for ``w3.eth.contract`` (e.g. bytecode)
        registry: Registry to read the ABI from (defaults to the shared one)

    Raises:
        ContractNotFoundError: If the registry has no ABI for ``contract_name``
    """
    abi = (registry or get_default_registry()).get_abi(contract_name)
    kwargs = dict(options or {})
    kwargs["abi"] = abi
    if address is not None:
        kwargs["address"] = to_checksum(address)
    return w3.eth.contract(**kwargs)


def get_branded_token(w3: Web3, address: Optional[str] = None, options=None, registry=None):
    return get_contract(w3, BRANDED_TOKEN, address, options, registry)


def get_gateway_composer(w3: Web3, address: Optional[str] = None, options=None, registry=None):
    return get_contract(w3, GATEWAY_COMPOSER, address, options, registry)


def get_eip20_token(w3: Web3, address: Optional[str] = None, options=None, registry=None):
    return get_contract(w3, EIP20_TOKEN, address, options, registry)
