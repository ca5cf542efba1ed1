"""Pydantic schemas for Plaid transaction data.

This module validates the transaction records returned by Plaid's
/transactions/get endpoint and projects them onto the fixed set of CSV
columns written by the export command.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

CSV_FIELDS: tuple[str, ...] = (
    "transaction_id",
    "date",
    "name",
    "amount",
    "category",
    "account_id",
)


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        extra="ignore",
        use_enum_values=True,
        from_attributes=True,
        populate_by_name=True,
    )


class TransactionSchema(BaseSchema):
    """Schema for a Plaid transaction record."""

    transaction_id: str = Field(..., description="Plaid transaction ID")
    account_id: str = Field(..., description="Associated account ID")
    amount: Decimal = Field(..., description="Transaction amount")
    iso_currency_code: str | None = Field(None, max_length=3)

    transaction_date: date = Field(..., description="Transaction date", alias="date")
    authorized_date: date | None = None

    name: str | None = None
    merchant_name: str | None = None

    category: list[str] = Field(default_factory=list)
    category_id: str | None = None

    payment_channel: str | None = None
    pending: bool = False

    @field_validator("payment_channel", mode="before")
    @classmethod
    def coerce_payment_channel(cls, v: Any) -> Any:
        """Coerce Plaid SDK enum-like values into strings."""
        if v is None:
            return None
        if isinstance(v, Enum):
            return v.value
        return str(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Any:
        """Ensure category is a list of strings; Plaid may return None."""
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            items = cast(list[object], list(v))
            return [str(x) for x in items]
        return [str(v)]

    def to_csv_row(self) -> dict[str, Any]:
        """Project the record onto the exported CSV columns.

        Returns:
            dict: One value per entry of CSV_FIELDS, ready for serialization
        """
        return {
            "transaction_id": self.transaction_id,
            "date": sanitize_for_csv(self.transaction_date),
            "name": self.name,
            "amount": sanitize_for_csv(self.amount),
            "category": sanitize_for_csv(self.category),
            "account_id": self.account_id,
        }


def sanitize_for_csv(value: Any) -> Any:
    """Sanitize values for a flat CSV cell.

    Args:
        value: Value to sanitize

    Returns:
        Any: A scalar that can be written to CSV
    """
    if value is None:
        return None

    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"))

    if isinstance(value, Decimal):
        return float(value)

    if isinstance(value, (date, datetime)):
        return value.isoformat()

    return value
