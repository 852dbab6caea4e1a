"""Unit tests for what-if adjustments"""

from datetime import date
from decimal import Decimal

from runway_engine.domain.classifier import classify_recurring, expense_stream
from runway_engine.domain.cycles import resolve_cycle
from runway_engine.domain.models import AdjustmentType, SalarySource, ScenarioAdjustment
from runway_engine.domain.normalizer import group_key
from runway_engine.domain.obligations import recent_average
from runway_engine.domain.scenario import apply_adjustments


def test_one_off_expense_moves_balance_and_ledger(today):
    adj = ScenarioAdjustment(AdjustmentType.ONE_OFF_EXPENSE, Decimal("300"), "New tyres")

    history, balance = apply_adjustments([], Decimal("1000"), [adj], today)

    assert balance == Decimal("700")
    [txn] = history
    assert txn.date == today
    assert txn.amount == Decimal("-300")
    assert txn.description == "SIMULATION ONEOFF: New tyres"
    assert txn.notes == "simulated"


def test_one_off_income_raises_balance(today):
    adj = ScenarioAdjustment(AdjustmentType.ONE_OFF_INCOME, Decimal("2500"))

    history, balance = apply_adjustments([], Decimal("1000"), [adj], today)

    assert balance == Decimal("3500")
    assert history[0].amount == Decimal("2500")
    assert history[0].category == "CREDIT"


def test_monthly_expense_backfilled_three_times(today):
    adj = ScenarioAdjustment(AdjustmentType.MONTHLY_EXPENSE, Decimal("4500"), "Car loan")

    history, balance = apply_adjustments([], Decimal("1000"), [adj], today)

    assert balance == Decimal("1000")
    assert [t.date for t in history] == [date(2025, 6, 14), date(2025, 5, 14), date(2025, 4, 14)]
    assert all(t.amount == Decimal("-4500") for t in history)
    assert [t.transaction_id for t in history] == ["sim_0_0", "sim_0_1", "sim_0_2"]


def test_monthly_expense_is_treated_as_fixed(engine_settings, today):
    adj = ScenarioAdjustment(AdjustmentType.MONTHLY_EXPENSE, Decimal("4500"), "Car loan")

    history, _ = apply_adjustments([], Decimal("1000"), [adj], today)
    fixed = classify_recurring(expense_stream(history, engine_settings), engine_settings, today)

    assert fixed == frozenset({"SIMULATION CAR"})


def test_monthly_income_anchors_pay_cycle(engine_settings, today):
    adj = ScenarioAdjustment(AdjustmentType.MONTHLY_INCOME, Decimal("15000"), "Side hustle")

    history, _ = apply_adjustments([], Decimal("1000"), [adj], today)
    cycle = resolve_cycle(history, engine_settings, today)

    assert cycle.source is SalarySource.KEYWORD
    assert cycle.period_start == date(2025, 6, 14)


def test_original_history_untouched(make_txn, today):
    original = [make_txn(3, -50, "CHECKERS")]
    adj = ScenarioAdjustment(AdjustmentType.ONE_OFF_EXPENSE, Decimal("10"))

    history, _ = apply_adjustments(original, Decimal("100"), [adj], today)

    assert len(original) == 1
    assert len(history) == 2


def test_one_off_never_joins_monthly_group(engine_settings, today):
    adjustments = [
        ScenarioAdjustment(AdjustmentType.MONTHLY_EXPENSE, Decimal("4500"), "Car loan"),
        ScenarioAdjustment(AdjustmentType.ONE_OFF_EXPENSE, Decimal("20000"), "Car loan"),
    ]

    history, _ = apply_adjustments([], Decimal("50000"), adjustments, today)
    fixed = classify_recurring(expense_stream(history, engine_settings), engine_settings, today)
    monthly = [t for t in history if group_key(t) == "SIMULATION CAR"]

    assert fixed == frozenset({"SIMULATION CAR"})
    assert len(monthly) == 3
    assert recent_average(monthly, 3) == Decimal("4500.00")
