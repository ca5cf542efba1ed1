"""Export commands for plaidbridge CLI.

This module provides the one-shot command that fetches Plaid transactions
and writes them to a CSV file.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer

from plaidbridge.config import get_settings
from plaidbridge.extractors.transaction_export import (
    TransactionExportConfig,
    TransactionExporter,
)
from plaidbridge.logging import setup_logging
from plaidbridge.utils.env_setup import setup_sample_environment

app = typer.Typer(help="Export data from Plaid to files")
logger = logging.getLogger(__name__)


@app.callback()
def export_callback() -> None:
    """Export data from Plaid to files."""


@app.command("transactions")
def export_transactions(
    start_date: Annotated[
        datetime | None,
        typer.Option(
            "--start-date", formats=["%Y-%m-%d"], help="First day to export"
        ),
    ] = None,
    end_date: Annotated[
        datetime | None,
        typer.Option("--end-date", formats=["%Y-%m-%d"], help="Last day to export"),
    ] = None,
    count: Annotated[
        int | None,
        typer.Option("--count", min=1, max=500, help="Transactions to request"),
    ] = None,
    offset: Annotated[
        int | None,
        typer.Option("--offset", min=0, help="Offset of the first transaction"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="CSV file to write"),
    ] = None,
    access_token: Annotated[
        str | None,
        typer.Option(
            "--access-token", help="Plaid access token (defaults to ACCESS_TOKEN)"
        ),
    ] = None,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
    setup_env: bool = typer.Option(
        False, "--setup-env", help="Create sample .env file and exit"
    ),
) -> None:
    """Export Plaid transactions to a CSV file.

    This command will:
    1. Load Plaid credentials and the access token
    2. Request one page of transactions for the date range
    3. Write transaction_id, date, name, amount, category and account_id
       to the output file, replacing it if it exists

    Args:
        start_date: First day to export (defaults to configuration)
        end_date: Last day to export (defaults to configuration)
        count: Number of transactions to request
        offset: Offset of the first transaction
        output: CSV file to write
        access_token: Plaid access token overriding ACCESS_TOKEN
        verbose: Enable debug level logging
        setup_env: Create sample .env file and exit
    """
    setup_logging(cli_mode=True, verbose=verbose)

    if setup_env:
        setup_sample_environment()
        return

    try:
        settings = get_settings()
        defaults = TransactionExportConfig.from_settings(settings.export)
        config = TransactionExportConfig(
            start_date=start_date.date() if start_date else defaults.start_date,
            end_date=end_date.date() if end_date else defaults.end_date,
            count=count if count is not None else defaults.count,
            offset=offset if offset is not None else defaults.offset,
            output_path=output or defaults.output_path,
        )
        if config.end_date < config.start_date:
            raise ValueError("--end-date must not be before --start-date")

        exporter = TransactionExporter(config=config, plaid_config=settings.plaid)
        exporter.export(access_token or settings.plaid.access_token)

    except Exception as e:
        logger.error(f"❌ Transaction export failed: {e}")
        raise typer.Exit(1) from e
