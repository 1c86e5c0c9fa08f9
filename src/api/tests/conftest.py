"""Fixtures shared by unit and integration tests."""

import pytest

from infrastructure.settings import get_settings

GATEWAY_ENV_VARS = (
    "NAME",
    "ENDPOINT",
    "ALLOW_MUTATIONS",
    "HEADERS",
    "SCHEMA",
    "TRANSPORT",
    "PORT",
    "HOST",
)


@pytest.fixture(autouse=True)
def isolated_gateway_env(monkeypatch, tmp_path):
    """Keep gateway configuration from the test runner's environment out."""
    for key in GATEWAY_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    # No stray .env file is picked up from the working directory
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
