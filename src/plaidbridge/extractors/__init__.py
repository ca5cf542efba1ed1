"""Transaction export from the Plaid API.

This module contains the schemas and the exporter that fetch Plaid
transactions and write them to CSV.
"""

from .plaid_schemas import CSV_FIELDS, TransactionSchema
from .transaction_export import TransactionExportConfig, TransactionExporter

__all__ = [
    "CSV_FIELDS",
    "TransactionExportConfig",
    "TransactionExporter",
    "TransactionSchema",
]
