"""
Package version, read from the installed distribution or the source tree.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION_NAME = "brandedtoken-sdk"
FALLBACK_VERSION = "0.1.0"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def source_tree_version(pyproject: pathlib.Path = PYPROJECT_PATH) -> str:
    """Version declared in ``pyproject.toml``, or the fallback if unreadable."""
    try:
        with pyproject.open("rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return FALLBACK_VERSION


def get_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        # uninstalled checkout
        return source_tree_version()


__version__ = get_version()
