"""Shared pytest fixtures for plaidbridge tests.

This module isolates every test from the developer's environment (working
directory, Plaid variables, cached settings) and provides sample Plaid data.
"""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from plaidbridge.config import (
    PlaidBridgeSettings,
    PlaidConfig,
    clear_settings_cache,
)

PLAID_ENV_VARS = ("PLAID_CLIENT_ID", "PLAID_SECRET", "PLAID_ENV", "ACCESS_TOKEN")


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Run each test in an empty directory with no Plaid configuration.

    This fixture:
    - Changes into a temporary directory so .env, logs and CSV output stay local
    - Removes Plaid variables inherited from the shell
    - Disables file logging
    - Clears the settings cache before and after the test
    """
    monkeypatch.chdir(tmp_path)
    for name in PLAID_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_TO_FILE", "false")

    clear_settings_cache()
    yield tmp_path
    clear_settings_cache()


@pytest.fixture
def plaid_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide dummy Plaid credentials through the environment."""
    monkeypatch.setenv("PLAID_CLIENT_ID", "dummy-client")
    monkeypatch.setenv("PLAID_SECRET", "dummy-secret")
    monkeypatch.setenv("PLAID_ENV", "sandbox")


@pytest.fixture
def plaid_config() -> PlaidConfig:
    """Sandbox Plaid configuration with dummy credentials."""
    return PlaidConfig(client_id="dummy-client", secret="dummy-secret")


@pytest.fixture
def settings(plaid_config: PlaidConfig) -> PlaidBridgeSettings:
    """Application settings built around the dummy Plaid configuration."""
    return PlaidBridgeSettings(plaid=plaid_config)


@pytest.fixture
def sample_transactions() -> list[dict[str, Any]]:
    """Transactions shaped like the /transactions/get payload."""
    return [
        {
            "transaction_id": "tx_001",
            "account_id": "acc_checking",
            "amount": 4.33,
            "iso_currency_code": "USD",
            "date": "2023-05-01",
            "name": "Starbucks",
            "merchant_name": "Starbucks",
            "category": ["Food and Drink", "Restaurants", "Coffee Shop"],
            "category_id": "13005043",
            "payment_channel": "in store",
            "pending": False,
            "location": {"city": "Seattle", "region": "WA"},
        },
        {
            "transaction_id": "tx_002",
            "account_id": "acc_credit",
            "amount": -500,
            "iso_currency_code": "USD",
            "date": "2023-05-03",
            "name": "United Airlines",
            "category": None,
            "pending": True,
        },
    ]
