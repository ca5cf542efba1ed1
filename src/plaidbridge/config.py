"""Centralized configuration management for plaidbridge.

This module provides a Pydantic Settings-based configuration system shared by
the transaction export command and the Plaid passthrough server, with
environment variable integration, type validation, and clear error handling.
"""

import os
from datetime import date
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PlaidEnvironmentName = Literal["sandbox", "development", "production"]
_PLAID_ENVIRONMENTS: tuple[str, ...] = ("sandbox", "development", "production")


class PlaidConfig(BaseModel):
    """Plaid API configuration settings."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(default="", description="Plaid client ID")
    secret: str = Field(default="", description="Plaid secret key")
    environment: PlaidEnvironmentName = Field(
        default="sandbox", description="Plaid environment"
    )
    access_token: str | None = Field(
        default=None, description="Access token for a previously linked item"
    )


class ExportConfig(BaseModel):
    """Settings for the one-shot transaction CSV export."""

    model_config = ConfigDict(frozen=True)

    start_date: date = Field(
        default=date(2022, 1, 1), description="First day of the export range"
    )
    end_date: date = Field(
        default=date(2024, 12, 31), description="Last day of the export range"
    )
    count: int = Field(
        default=100, ge=1, le=500, description="Transactions requested per call"
    )
    offset: int = Field(default=0, ge=0, description="Offset of the first record")
    output_path: Path = Field(
        default=Path("transactions.csv"), description="CSV file to write"
    )

    @field_validator("end_date")
    @classmethod
    def validate_date_range(cls, v: date, info: ValidationInfo) -> date:
        """Ensure the export range is not inverted."""
        start = info.data.get("start_date")
        if start is not None and v < start:
            raise ValueError("end_date must not be before start_date")
        return v


class ServerConfig(BaseModel):
    """Settings for the Plaid Link passthrough HTTP server."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="127.0.0.1", description="Interface to bind")
    port: int = Field(default=3003, ge=1, le=65535, description="Port to listen on")
    client_name: str = Field(
        default="FBLA Coding Programming App",
        description="Application name shown inside Plaid Link",
    )
    client_user_id: str = Field(
        default="user-id", description="Stable identifier of the end user"
    )
    products: list[str] = Field(default_factory=lambda: ["auth", "transactions"])
    country_codes: list[str] = Field(default_factory=lambda: ["US"])
    language: str = Field(default="en", description="Plaid Link display language")
    transactions_start_date: date = Field(default=date(2023, 1, 1))
    transactions_end_date: date = Field(default=date(2024, 1, 1))


class PlaidBridgeSettings(BaseSettings):
    """Main application settings with environment variable integration.

    Environment variables are loaded with the PLAIDBRIDGE_ prefix.
    For nested configs, use double underscores: PLAIDBRIDGE_SERVER__PORT=8000

    The plain Plaid variables (PLAID_CLIENT_ID, PLAID_SECRET, PLAID_ENV and
    ACCESS_TOKEN) are honoured as well.
    """

    plaid: PlaidConfig = Field(default_factory=PlaidConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PLAIDBRIDGE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    def __init__(self, **kwargs: Any):
        """Initialize settings with the plain Plaid environment variables.

        Args:
            **kwargs: Additional configuration overrides
        """
        if "plaid" not in kwargs:
            plaid_config: dict[str, Any] = {}
            client_id = os.getenv("PLAID_CLIENT_ID")
            secret = os.getenv("PLAID_SECRET")
            env = os.getenv("PLAID_ENV", "sandbox").lower()
            access_token = os.getenv("ACCESS_TOKEN")

            if client_id:
                plaid_config["client_id"] = client_id
            if secret:
                plaid_config["secret"] = secret
            if env in _PLAID_ENVIRONMENTS:
                plaid_config["environment"] = env
            if access_token:
                plaid_config["access_token"] = access_token

            if client_id or secret or access_token:
                kwargs["plaid"] = PlaidConfig(**plaid_config)

        super().__init__(**kwargs)

    def validate_required_credentials(self) -> None:
        """Validate that required credentials are present."""
        errors: list[str] = []

        if not self.plaid.client_id:
            errors.append("PLAID_CLIENT_ID is required")
        if not self.plaid.secret:
            errors.append("PLAID_SECRET is required")

        if errors:
            raise ValueError(f"Missing required configuration: {', '.join(errors)}")


# Global settings instance - lazy loaded
_settings: PlaidBridgeSettings | None = None


def get_settings() -> PlaidBridgeSettings:
    """Get the settings instance.

    Values from a .env file in the working directory are loaded into the
    process environment first; variables already set take precedence.

    Returns:
        PlaidBridgeSettings: The configuration instance

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    global _settings

    if _settings is not None:
        return _settings

    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file)

    try:
        settings = PlaidBridgeSettings()
        settings.validate_required_credentials()
    except Exception as e:
        raise ValueError(f"Configuration error: {e}") from e

    _settings = settings
    return settings


def reload_settings() -> PlaidBridgeSettings:
    """Reload settings from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        PlaidBridgeSettings: The reloaded configuration instance
    """
    clear_settings_cache()
    return get_settings()


def clear_settings_cache() -> None:
    """Drop the cached settings so the next access reloads them."""
    global _settings
    _settings = None


def get_plaid_config() -> PlaidConfig:
    """Get the Plaid configuration.

    Returns:
        PlaidConfig: The Plaid configuration
    """
    return get_settings().plaid

