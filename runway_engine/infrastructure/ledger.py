"""Ledger export loader for transaction and adjustment JSON files"""

import json
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from runway_engine.domain.exceptions import InvalidTransactionDataError
from runway_engine.domain.models import ScenarioAdjustment, Transaction
from runway_engine.schemas import AdjustmentSchema, TransactionSchema


def _read_items(path: str | Path, key: str) -> List[Any]:
    """Accept either a bare JSON list or an object wrapping the list under `key`"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidTransactionDataError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise InvalidTransactionDataError(f"Expected a list of {key} in {path}")
    return data


def load_transactions(path: str | Path) -> List[Transaction]:
    """
    Load a ledger export.

    Raises:
        FileNotFoundError: If the file is missing
        InvalidTransactionDataError: On malformed JSON or transaction records
    """
    items = _read_items(path, "transactions")
    try:
        return [TransactionSchema.model_validate(item).to_domain() for item in items]
    except ValidationError as e:
        raise InvalidTransactionDataError(f"Invalid transaction data in {path}: {e}") from e


def load_adjustments(path: str | Path) -> List[ScenarioAdjustment]:
    """Load what-if adjustments (same error contract as load_transactions)"""
    items = _read_items(path, "adjustments")
    try:
        return [AdjustmentSchema.model_validate(item).to_domain() for item in items]
    except ValidationError as e:
        raise InvalidTransactionDataError(f"Invalid adjustment data in {path}: {e}") from e
