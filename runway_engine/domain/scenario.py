"""What-if adjustments applied to a ledger before analysis"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Sequence, Tuple

from runway_engine.domain.models import AdjustmentType, ScenarioAdjustment, Transaction
from runway_engine.utils.date_utils import add_months

MONTHLY_REPEATS = 3


def _synthetic(index: str, on: date, amount: Decimal, description: str, category: str) -> Transaction:
    return Transaction(
        transaction_id=f"sim_{index}",
        date=on,
        description=description,
        amount=amount,
        category=category,
        notes="simulated",
    )


def apply_adjustments(
    history: Sequence[Transaction],
    current_balance: Decimal,
    adjustments: Iterable[ScenarioAdjustment],
    today: date,
) -> Tuple[List[Transaction], Decimal]:
    """
    Return a new (history, balance) pair with the adjustments applied.

    One-off items move the balance and land in the ledger today under their own
    "SIMULATION ONEOFF" group, so they never join a monthly item. Monthly items
    are back-filled as three past occurrences (one day before each of the last
    three month marks) so they register as recurring; the balance is unchanged.
    """
    simulated = list(history)
    balance = current_balance

    for n, adj in enumerate(adjustments):
        amount = abs(adj.amount)
        label = adj.description or adj.type.value

        if adj.type is AdjustmentType.ONE_OFF_EXPENSE:
            balance -= amount
            simulated.append(_synthetic(f"{n}", today, -amount, f"SIMULATION ONEOFF: {label}", "SIMULATION"))
        elif adj.type is AdjustmentType.ONE_OFF_INCOME:
            balance += amount
            simulated.append(_synthetic(f"{n}", today, amount, f"SIMULATION INCOME: {label}", "CREDIT"))
        elif adj.type is AdjustmentType.MONTHLY_EXPENSE:
            for i in range(MONTHLY_REPEATS):
                on = add_months(today, -i) - timedelta(days=1)
                simulated.append(
                    _synthetic(f"{n}_{i}", on, -amount, f"SIMULATION DEBIT ORDER: {label}", "DEBIT ORDER")
                )
        elif adj.type is AdjustmentType.MONTHLY_INCOME:
            for i in range(MONTHLY_REPEATS):
                on = add_months(today, -i) - timedelta(days=1)
                simulated.append(
                    _synthetic(f"{n}_{i}", on, amount, f"SIMULATION SALARY: {label}", "CREDIT")
                )

    return simulated, balance
