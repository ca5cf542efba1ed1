# ruff: noqa: S101
"""Tests for the Plaid transaction schema and CSV projection."""

from datetime import date
from decimal import Decimal
from enum import Enum
from types import SimpleNamespace
from typing import Any

import pytest
from pydantic import ValidationError

from plaidbridge.extractors.plaid_schemas import (
    CSV_FIELDS,
    TransactionSchema,
    sanitize_for_csv,
)


class _Channel(Enum):
    ONLINE = "online"


@pytest.mark.unit
def test_validates_payload_dict(sample_transactions: list[dict[str, Any]]) -> None:
    """Unknown Plaid fields are ignored and the date alias is honoured."""
    tx = TransactionSchema.model_validate(sample_transactions[0])

    assert tx.transaction_id == "tx_001"
    assert tx.transaction_date == date(2023, 5, 1)
    assert tx.amount == Decimal("4.33")
    assert tx.category == ["Food and Drink", "Restaurants", "Coffee Shop"]


@pytest.mark.unit
def test_validates_sdk_like_objects() -> None:
    """SDK models are read by attribute; missing optional fields default."""
    sdk_tx = SimpleNamespace(
        transaction_id="tx_sdk",
        account_id="acc_1",
        amount=10.0,
        date=date(2023, 6, 2),
        name="Uber",
        category=("Travel", "Taxi"),
        payment_channel=_Channel.ONLINE,
    )

    tx = TransactionSchema.model_validate(sdk_tx)

    assert tx.category == ["Travel", "Taxi"]
    assert tx.payment_channel == "online"
    assert tx.pending is False
    assert tx.merchant_name is None


@pytest.mark.unit
def test_missing_required_field_rejected() -> None:
    with pytest.raises(ValidationError):
        TransactionSchema.model_validate({"transaction_id": "tx", "amount": 1})


@pytest.mark.unit
def test_to_csv_row_projects_six_fields(
    sample_transactions: list[dict[str, Any]],
) -> None:
    row = TransactionSchema.model_validate(sample_transactions[0]).to_csv_row()

    assert tuple(row) == CSV_FIELDS
    assert row == {
        "transaction_id": "tx_001",
        "date": "2023-05-01",
        "name": "Starbucks",
        "amount": 4.33,
        "category": '["Food and Drink","Restaurants","Coffee Shop"]',
        "account_id": "acc_checking",
    }


@pytest.mark.unit
def test_null_category_exported_as_empty_list(
    sample_transactions: list[dict[str, Any]],
) -> None:
    row = TransactionSchema.model_validate(sample_transactions[1]).to_csv_row()

    assert row["category"] == "[]"
    assert row["amount"] == -500.0


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        (["a", "b"], '["a","b"]'),
        (Decimal("1.50"), 1.5),
        (date(2024, 2, 29), "2024-02-29"),
        ("plain", "plain"),
    ],
)
def test_sanitize_for_csv(value: Any, expected: Any) -> None:
    assert sanitize_for_csv(value) == expected
