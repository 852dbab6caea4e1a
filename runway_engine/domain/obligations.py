"""Projection of fixed costs still expected before the cycle closes"""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, List

from runway_engine.domain.models import Transaction, UpcomingExpense
from runway_engine.domain.normalizer import group_key
from runway_engine.utils.money import ZERO, quantize, total


def _fixed_groups_in(expenses: Iterable[Transaction], fixed_groups: FrozenSet[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for txn in expenses:
        key = group_key(txn)
        if key in fixed_groups:
            seen.setdefault(key, None)
    return list(seen)


def recent_average(members: Iterable[Transaction], count: int) -> Decimal:
    """Average magnitude of the newest `count` occurrences"""
    newest = sorted(members, key=lambda t: t.date, reverse=True)[:count]
    if not newest:
        return ZERO
    return quantize(total(t.magnitude for t in newest) / len(newest))


def _by_group(expenses: Iterable[Transaction]) -> Dict[str, List[Transaction]]:
    groups: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in expenses:
        groups[group_key(txn)].append(txn)
    return groups


def project_upcoming(
    expenses: List[Transaction],
    prev_full: Iterable[Transaction],
    this_period: Iterable[Transaction],
    fixed_groups: FrozenSet[str],
    recent_count: int = 3,
) -> List[UpcomingExpense]:
    """
    Fixed groups paid last period that have not recurred yet this period.

    Each is expected at the average of its most recent occurrences across the
    whole history, and appears once regardless of how often it hit last period.
    """
    history_by_group = _by_group(expenses)
    paid_now = {group_key(t) for t in this_period}

    return [
        UpcomingExpense(name=name, expected_amount=recent_average(history_by_group[name], recent_count))
        for name in _fixed_groups_in(prev_full, fixed_groups)
        if name not in paid_now
    ]


def fixed_monthly_commitment(
    expenses: List[Transaction],
    active: Iterable[Transaction],
    fixed_groups: FrozenSet[str],
    recent_count: int = 3,
) -> Decimal:
    """Sum of recent-average amounts for every fixed group seen in `active`"""
    history_by_group = _by_group(expenses)
    return total(recent_average(history_by_group[name], recent_count) for name in _fixed_groups_in(active, fixed_groups))
