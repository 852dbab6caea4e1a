"""Recurring / fixed-cost classification over normalized merchant groups"""

import re
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, FrozenSet, Iterable, List, Optional

from runway_engine.config import EngineSettings
from runway_engine.domain.models import Transaction
from runway_engine.domain.normalizer import group_key


def _contains_any(text: Optional[str], keywords: Iterable[str]) -> bool:
    if not text:
        return False
    upper = text.upper()
    return any(k in upper for k in keywords)


def _contains_word(text: Optional[str], keywords: Iterable[str]) -> bool:
    if not text:
        return False
    upper = text.upper()
    return any(re.search(rf"\b{re.escape(k)}\b", upper) for k in keywords)


def is_fixed_cost(name: str, settings: EngineSettings) -> bool:
    """Keyword containment test on a normalized name or category label"""
    return _contains_any(name, settings.fixed_cost_keyword_list)


def is_income_category(category: Optional[str], settings: EngineSettings) -> bool:
    return bool(category) and category.strip().upper() in settings.income_category_list


def is_scheduled_payment_category(category: Optional[str], settings: EngineSettings) -> bool:
    return bool(category) and category.strip().upper() in settings.scheduled_payment_category_list


def is_internal_transfer(txn: Transaction, settings: EngineSettings) -> bool:
    """Money moved between the owner's own accounts (not spend)"""
    return _contains_any(txn.description, settings.internal_transfer_marker_list)


def has_recurring_marker(txn: Transaction, settings: EngineSettings) -> bool:
    """Raw description carries a debit-order / EFT / stop-order / NAEDO marker"""
    return _contains_word(txn.description, settings.recurring_marker_list)


def expense_stream(history: Iterable[Transaction], settings: EngineSettings) -> List[Transaction]:
    """
    Transactions that count as spend.

    Only the amount sign decides expense vs income; income-labelled debits
    (reversals) and own-account transfers are left out.
    """
    return [
        t
        for t in history
        if t.is_expense
        and not is_income_category(t.category, settings)
        and not is_internal_transfer(t, settings)
    ]


def classify_recurring(
    expenses: Iterable[Transaction],
    settings: EngineSettings,
    today: date,
) -> FrozenSet[str]:
    """
    Return the normalized merchant groups treated as fixed obligations.

    A group is fixed when its name matches a fixed-cost keyword, or when it
    repeats inside the analysis window (more than min_recurring_occurrences
    times) and carries a debit-order style marker or scheduled-payment category.
    Bank-assigned categories are unreliable, so the raw description is the
    main signal.
    """
    window_start = today - timedelta(days=settings.analysis_window_days)
    groups: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in expenses:
        groups[group_key(txn)].append(txn)

    fixed = set()
    for name, members in groups.items():
        if is_fixed_cost(name, settings):
            fixed.add(name)
            continue

        recent = [t for t in members if window_start <= t.date <= today]
        if len(recent) <= settings.min_recurring_occurrences:
            continue

        if any(
            has_recurring_marker(t, settings) or is_scheduled_payment_category(t.category, settings)
            for t in members
        ):
            fixed.add(name)

    return frozenset(fixed)


def is_fixed_transaction(txn: Transaction, fixed_groups: FrozenSet[str]) -> bool:
    return group_key(txn) in fixed_groups
