"""Pytest fixtures for testing"""

import itertools
import pytest
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Optional

from runway_engine.config import EngineSettings
from runway_engine.domain.models import Transaction


TODAY = date(2025, 6, 15)


@pytest.fixture
def today() -> date:
    """Fixed analysis date so period arithmetic is deterministic"""
    return TODAY


@pytest.fixture
def engine_settings() -> EngineSettings:
    """Default engine settings"""
    return EngineSettings()


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Factory for transactions dated relative to TODAY"""
    ids = itertools.count()

    def _make(
        days_ago: int,
        amount: float | str,
        description: Optional[str] = "Test",
        category: Optional[str] = None,
    ) -> Transaction:
        return Transaction(
            transaction_id=f"tx_{next(ids)}",
            date=TODAY - timedelta(days=days_ago),
            description=description,
            amount=Decimal(str(amount)),
            category=category,
        )

    return _make


@pytest.fixture
def sample_transactions(make_txn) -> list[Transaction]:
    """Salaried user: monthly pay, a rent debit order, Netflix and daily groceries"""
    transactions = []

    # Monthly salary deposits
    for days_ago in (3, 33, 63, 93):
        transactions.append(make_txn(days_ago, 30000, "ACME CORP SALARY", "CREDIT"))

    # Rent collected by debit order the day after payday
    for days_ago in (2, 32, 62, 92):
        transactions.append(make_txn(days_ago, -8000, "DEBIT ORDER RENTAL PROPS 0192"))

    # Streaming subscription mid-cycle
    for days_ago in (10, 40, 70):
        transactions.append(make_txn(days_ago, -199, "NETFLIX.COM 8841"))

    # Daily groceries
    for days_ago in range(1, 121):
        transactions.append(make_txn(days_ago, -200, "CHECKERS HYPER 0042 CPT", "Groceries"))

    return transactions
