# ruff: noqa: S101,S106
"""Tests for the settings layer."""

from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from plaidbridge.config import (
    ExportConfig,
    PlaidBridgeSettings,
    PlaidConfig,
    get_plaid_config,
    get_settings,
    reload_settings,
)


class TestPlaidBridgeSettings:
    """Tests for PlaidBridgeSettings construction."""

    @pytest.mark.unit
    def test_reads_plain_plaid_variables(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """PLAID_* and ACCESS_TOKEN populate the Plaid section."""
        monkeypatch.setenv("PLAID_CLIENT_ID", "client-123")
        monkeypatch.setenv("PLAID_SECRET", "secret-456")
        monkeypatch.setenv("PLAID_ENV", "Development")
        monkeypatch.setenv("ACCESS_TOKEN", "access-development-789")

        settings = PlaidBridgeSettings()

        assert settings.plaid.client_id == "client-123"
        assert settings.plaid.secret == "secret-456"
        assert settings.plaid.environment == "development"
        assert settings.plaid.access_token == "access-development-789"

    @pytest.mark.unit
    def test_unknown_plaid_env_falls_back_to_sandbox(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PLAID_CLIENT_ID", "client-123")
        monkeypatch.setenv("PLAID_SECRET", "secret-456")
        monkeypatch.setenv("PLAID_ENV", "staging")

        assert PlaidBridgeSettings().plaid.environment == "sandbox"

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """Defaults describe the stock export and server behaviour."""
        settings = PlaidBridgeSettings(plaid=PlaidConfig())

        assert settings.export.start_date == date(2022, 1, 1)
        assert settings.export.end_date == date(2024, 12, 31)
        assert settings.export.count == 100
        assert settings.export.offset == 0
        assert settings.export.output_path == Path("transactions.csv")
        assert settings.server.port == 3003
        assert settings.server.products == ["auth", "transactions"]
        assert settings.server.country_codes == ["US"]
        assert settings.server.transactions_start_date == date(2023, 1, 1)
        assert settings.server.transactions_end_date == date(2024, 1, 1)
        assert settings.plaid.access_token is None

    @pytest.mark.unit
    def test_nested_prefixed_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLAIDBRIDGE_SERVER__PORT", "8080")
        monkeypatch.setenv("PLAIDBRIDGE_EXPORT__OUTPUT_PATH", "out/tx.csv")

        settings = PlaidBridgeSettings()

        assert settings.server.port == 8080
        assert settings.export.output_path == Path("out/tx.csv")

    @pytest.mark.unit
    def test_missing_credentials_are_listed(self) -> None:
        settings = PlaidBridgeSettings()

        with pytest.raises(ValueError) as exc_info:
            settings.validate_required_credentials()

        assert "PLAID_CLIENT_ID is required" in str(exc_info.value)
        assert "PLAID_SECRET is required" in str(exc_info.value)


class TestExportConfig:
    """Tests for export range validation."""

    @pytest.mark.unit
    def test_rejects_inverted_range(self) -> None:
        with pytest.raises(ValidationError):
            ExportConfig(start_date=date(2024, 1, 1), end_date=date(2023, 1, 1))

    @pytest.mark.unit
    def test_rejects_oversized_page(self) -> None:
        with pytest.raises(ValidationError):
            ExportConfig(count=501)


class TestGetSettings:
    """Tests for the cached settings accessors."""

    @pytest.mark.unit
    def test_caches_instance(self, plaid_env: None) -> None:
        assert get_settings() is get_settings()

    @pytest.mark.unit
    def test_missing_credentials_raise(self) -> None:
        with pytest.raises(ValueError, match="Configuration error"):
            get_settings()

    @pytest.mark.unit
    def test_reload_picks_up_changes(
        self, plaid_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        assert get_plaid_config().access_token is None

        monkeypatch.setenv("ACCESS_TOKEN", "access-sandbox-new")

        assert get_plaid_config().access_token is None
        assert reload_settings().plaid.access_token == "access-sandbox-new"

    @pytest.mark.unit
    def test_loads_dotenv_from_working_directory(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text(
            "PLAID_CLIENT_ID=from-dotenv\nPLAID_SECRET=dotenv-secret\n",
            encoding="utf-8",
        )

        plaid = get_plaid_config()

        assert plaid.client_id == "from-dotenv"
        assert plaid.secret == "dotenv-secret"
