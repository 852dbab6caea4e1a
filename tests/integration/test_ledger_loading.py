"""Integration tests for loading ledger exports from disk"""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from runway_engine.domain.exceptions import InvalidTransactionDataError
from runway_engine.domain.models import AdjustmentType
from runway_engine.infrastructure.ledger import load_adjustments, load_transactions

DATA = Path(__file__).parent / "data"


def test_load_wrapped_ledger():
    transactions = load_transactions(DATA / "ledger.json")

    assert len(transactions) == 16
    first = transactions[0]
    assert first.transaction_id == "t1"
    assert first.amount == Decimal("30000.00")
    assert first.category == "CREDIT"
    assert transactions[1].category is None


def test_load_bare_list(tmp_path: Path):
    path = tmp_path / "ledger.json"
    path.write_text(json.dumps([{"id": "a", "date": "2025-06-01", "description": None, "amount": -12.5}]))

    [txn] = load_transactions(path)

    assert txn.description is None
    assert txn.amount == Decimal("-12.5")


def test_load_adjustments():
    adjustments = load_adjustments(DATA / "adjustments.json")

    assert [a.type for a in adjustments] == [AdjustmentType.MONTHLY_EXPENSE, AdjustmentType.ONE_OFF_EXPENSE]
    assert adjustments[0].amount == Decimal("4500")


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_transactions(tmp_path / "nope.json")


def test_malformed_json(tmp_path: Path):
    path = tmp_path / "ledger.json"
    path.write_text("{not json")

    with pytest.raises(InvalidTransactionDataError):
        load_transactions(path)


def test_invalid_record(tmp_path: Path):
    path = tmp_path / "ledger.json"
    path.write_text(json.dumps([{"id": "a", "date": "yesterday", "amount": "-1"}]))

    with pytest.raises(InvalidTransactionDataError):
        load_transactions(path)


def test_non_positive_adjustment_rejected(tmp_path: Path):
    path = tmp_path / "adjustments.json"
    path.write_text(json.dumps([{"type": "OneOffExpense", "amount": "0"}]))

    with pytest.raises(InvalidTransactionDataError):
        load_adjustments(path)
