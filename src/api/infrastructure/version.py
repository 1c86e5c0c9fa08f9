"""Gateway version, reported as the HTTP apps' version."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

PACKAGE_NAME = "mcp-graphql"

# src/api/infrastructure/version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[3] / "pyproject.toml"


def get_version() -> str:
    """Installed package version, else the version in pyproject.toml.

    Returns "0.0.0" when neither is available (e.g. a bare source copy).
    """
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        pass

    try:
        with _PYPROJECT.open("rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "0.0.0"


__version__ = get_version()
