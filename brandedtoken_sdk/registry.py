"""
Contract registry: ABI and binary lookup by contract name.

ABIs for the contracts this SDK talks to ship with the package. Binaries are
not packaged; register them with :meth:`ContractRegistry.add_bin` or point the
registry at a build output folder holding ``<ContractName>.bin`` files.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import ContractNotFoundError, InvalidParameterError

logger = logging.getLogger(__name__)

CONTRACTS_PATH_ENV = "BRANDEDTOKEN_CONTRACTS_PATH"
PACKAGED_ABI_PATH = Path(__file__).parent / "contracts" / "abi"

ABI_EXTENSION = ".abi"
BIN_EXTENSION = ".bin"


class ContractRegistry:
    """
    Looks up contract ABIs and binaries.

    Lookup order for a name:
    1. Values registered through ``add_abi`` / ``add_bin``
    2. ``abi_folder_path`` / ``bin_folder_path``
    3. The folder named by ``BRANDEDTOKEN_CONTRACTS_PATH``
    4. Packaged ABIs
    """

    def __init__(
        self,
        abi_folder_path: Optional[Union[str, Path]] = None,
        bin_folder_path: Optional[Union[str, Path]] = None,
    ):
        self.abi_folder_path = Path(abi_folder_path) if abi_folder_path else None
        self.bin_folder_path = Path(bin_folder_path) if bin_folder_path else None
        self._custom_abis: Dict[str, List[Dict[str, Any]]] = {}
        self._custom_bins: Dict[str, str] = {}

    def _search_paths(self, folder: Optional[Path], include_packaged: bool) -> List[Path]:
        paths = []
        if folder:
            paths.append(folder)
        env_path = os.environ.get(CONTRACTS_PATH_ENV)
        if env_path:
            paths.append(Path(env_path))
        if include_packaged:
            paths.append(PACKAGED_ABI_PATH)
        return paths

    def _find_abi(self, contract_name: str) -> Optional[List[Dict[str, Any]]]:
        if contract_name in self._custom_abis:
            return self._custom_abis[contract_name]
        for folder in self._search_paths(self.abi_folder_path, include_packaged=True):
            path = folder / f"{contract_name}{ABI_EXTENSION}"
            if path.is_file():
                logger.debug(f"Loading ABI for {contract_name} from {path}")
                with open(path, "r", encoding="utf-8") as f:
                    return json.load(f)
        return None

    def _find_bin(self, contract_name: str) -> Optional[str]:
        if contract_name in self._custom_bins:
            return self._custom_bins[contract_name]
        for folder in self._search_paths(self.bin_folder_path, include_packaged=False):
            path = folder / f"{contract_name}{BIN_EXTENSION}"
            if path.is_file():
                logger.debug(f"Loading BIN for {contract_name} from {path}")
                return _normalize_bin(path.read_text(encoding="utf-8"))
        return None

    def get_abi(self, contract_name: str) -> List[Dict[str, Any]]:
        """
        Get the ABI of a contract.

        Raises:
            ContractNotFoundError: If no ABI is known for ``contract_name``
        """
        abi = self._find_abi(contract_name)
        if abi is None:
            message = f"Could not find ABI for contract: {contract_name}"
            logger.error(message)
            raise ContractNotFoundError(message, contract_name=contract_name)
        return abi

    def get_bin(self, contract_name: str) -> str:
        """
        Get the deployable binary of a contract as a 0x-prefixed hex string.

        Raises:
            ContractNotFoundError: If no binary is known for ``contract_name``
        """
        bin_ = self._find_bin(contract_name)
        if bin_ is None:
            message = f"Could not find BIN for contract: {contract_name}"
            logger.error(message)
            raise ContractNotFoundError(message, contract_name=contract_name)
        return bin_

    def add_abi(self, contract_name: str, abi: Union[str, List[Dict[str, Any]]]) -> None:
        """
        Register an ABI. ``abi`` may be a JSON string or a parsed list.

        Raises:
            InvalidParameterError: If an ABI for ``contract_name`` already exists
        """
        if self._find_abi(contract_name) is not None:
            raise InvalidParameterError(f"ABI for contract {contract_name} already exists")
        if isinstance(abi, str):
            abi = json.loads(abi)
        self._custom_abis[contract_name] = abi

    def add_bin(self, contract_name: str, bin_: str) -> None:
        """
        Register a deployable binary.

        Raises:
            InvalidParameterError: If a binary for ``contract_name`` already exists
        """
        if self._find_bin(contract_name) is not None:
            raise InvalidParameterError(f"BIN for contract {contract_name} already exists")
        self._custom_bins[contract_name] = _normalize_bin(bin_)


def _normalize_bin(bin_: str) -> str:
    bin_ = bin_.strip()
    if not bin_.startswith("0x"):
        bin_ = "0x" + bin_
    return bin_


_default_registry: Optional[ContractRegistry] = None


def get_default_registry() -> ContractRegistry:
    """Get or create the module-level registry instance"""
    global _default_registry
    if _default_registry is None:
        _default_registry = ContractRegistry()
    return _default_registry
