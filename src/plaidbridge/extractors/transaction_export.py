"""Export Plaid transactions to a CSV file.

This module performs a single /transactions/get call for a fixed date range
and page size, keeps six fields of every record, and writes them to disk
with polars. The output file is overwritten on every run.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

import polars as pl
from plaid.exceptions import ApiException
from plaid.model.transactions_get_request import TransactionsGetRequest
from plaid.model.transactions_get_request_options import TransactionsGetRequestOptions

from ..config import ExportConfig, PlaidConfig, get_plaid_config
from ..connectors.plaid_client import create_plaid_client, get_response_field
from .plaid_schemas import CSV_FIELDS, TransactionSchema

logger = logging.getLogger(__name__)

CSV_SCHEMA: dict[str, Any] = {
    "transaction_id": pl.Utf8,
    "date": pl.Utf8,
    "name": pl.Utf8,
    "amount": pl.Float64,
    "category": pl.Utf8,
    "account_id": pl.Utf8,
}


@dataclass
class TransactionExportConfig:
    """Configuration for one transaction export run."""

    start_date: date = date(2022, 1, 1)
    end_date: date = date(2024, 12, 31)
    count: int = 100
    offset: int = 0
    output_path: Path = Path("transactions.csv")

    @classmethod
    def from_settings(cls, config: ExportConfig) -> "TransactionExportConfig":
        """Build an export configuration from application settings."""
        return cls(
            start_date=config.start_date,
            end_date=config.end_date,
            count=config.count,
            offset=config.offset,
            output_path=config.output_path,
        )


class TransactionExporter:
    """Fetch one page of Plaid transactions and write it to CSV."""

    def __init__(
        self,
        config: TransactionExportConfig | None = None,
        plaid_config: PlaidConfig | None = None,
        client: Any | None = None,
    ):
        """Initialize the exporter.

        Args:
            config: Date range, page size and output path
            plaid_config: Plaid credentials; loaded from settings when omitted
            client: Pre-built Plaid client, mainly for tests
        """
        self.config = config or TransactionExportConfig()
        self.plaid_config = plaid_config or get_plaid_config()
        self.client: Any = client or create_plaid_client(self.plaid_config)

        logger.info(
            f"Initialized transaction exporter for {self.plaid_config.environment} environment"
        )

    def fetch_transactions(self, access_token: str | None) -> list[TransactionSchema]:
        """Fetch transactions for the configured range with one API call.

        Args:
            access_token: Plaid access token for the linked item

        Returns:
            list[TransactionSchema]: Validated transaction records

        Raises:
            ValueError: If no access token is available
            ApiException: If the Plaid API rejects the request
        """
        if not access_token:
            raise ValueError(
                "An access token is required; set ACCESS_TOKEN or pass --access-token"
            )

        request = TransactionsGetRequest(
            access_token=access_token,
            start_date=self.config.start_date,
            end_date=self.config.end_date,
            options=TransactionsGetRequestOptions(
                count=self.config.count, offset=self.config.offset
            ),
        )

        logger.debug(
            f"Requesting transactions {self.config.start_date} to {self.config.end_date} "
            f"(count={self.config.count}, offset={self.config.offset})"
        )
        try:
            response: Any = self.client.transactions_get(request)
        except ApiException as e:
            logger.error(f"Plaid rejected the transactions request: {e.status} {e.reason}")
            raise

        raw_transactions = get_response_field(response, "transactions") or []
        transactions = [TransactionSchema.model_validate(tx) for tx in raw_transactions]

        total = get_response_field(response, "total_transactions")
        if isinstance(total, int) and total > self.config.offset + len(transactions):
            logger.warning(
                f"Plaid reports {total} transactions in range; "
                f"exporting {len(transactions)} starting at offset {self.config.offset}"
            )

        logger.info(f"Fetched {len(transactions)} transactions")
        return transactions

    def write_csv(
        self,
        transactions: Iterable[TransactionSchema],
        output_path: Path | None = None,
    ) -> Path:
        """Write transactions to CSV, replacing any existing file.

        Args:
            transactions: Validated transaction records
            output_path: Destination file; defaults to the configured path

        Returns:
            Path: The file that was written
        """
        path = output_path or self.config.output_path
        rows = [tx.to_csv_row() for tx in transactions]

        if rows:
            df = pl.from_dicts(rows, schema=CSV_SCHEMA)
        else:
            df = pl.DataFrame(schema=CSV_SCHEMA)

        path.parent.mkdir(parents=True, exist_ok=True)
        df.select(list(CSV_FIELDS)).write_csv(path)
        logger.debug(f"Wrote {df.height} rows to {path}")
        return path

    def export(self, access_token: str | None) -> Path:
        """Fetch transactions and write them to the configured CSV file.

        Args:
            access_token: Plaid access token for the linked item

        Returns:
            Path: The CSV file that was written
        """
        try:
            transactions = self.fetch_transactions(access_token)
            output_path = self.write_csv(transactions)
        except Exception as e:
            logger.error(f"Failed to export transactions: {e}")
            raise

        logger.info(f"Transactions exported to {output_path}")
        return output_path
