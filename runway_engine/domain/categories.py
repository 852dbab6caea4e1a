"""Category-level spend comparison against a hybrid prior-period baseline"""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, List

from runway_engine.config import EngineSettings
from runway_engine.domain.classifier import is_fixed_transaction
from runway_engine.domain.models import CategorySpend, Transaction
from runway_engine.domain.normalizer import category_key
from runway_engine.utils.money import ZERO, quantize

HUNDRED = Decimal("100")


def hybrid_baseline(ptd: Decimal, full: Decimal, threshold: float) -> Decimal:
    """
    Prior period-to-date spend, unless it is implausibly small next to the full
    prior period (front/back-loaded spending), in which case the full period.
    """
    if ptd < full * Decimal(str(threshold)):
        return full
    return ptd


def change_percentage(amount: Decimal, baseline: Decimal) -> Decimal:
    if baseline > 0:
        return quantize((amount - baseline) / baseline * HUNDRED)
    return HUNDRED if amount != 0 else ZERO


def is_stable(change_amount: Decimal, change_pct: Decimal, settings: EngineSettings) -> bool:
    """Either a relatively small or an absolutely small swing counts as stable"""
    if change_amount == 0:
        return True
    return (
        abs(change_pct) < Decimal(str(settings.stability_percentage_threshold))
        or abs(change_amount) < Decimal(str(settings.stability_amount_threshold))
    )


def totals_by_category(expenses: Iterable[Transaction]) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = defaultdict(Decimal)
    for txn in expenses:
        totals[category_key(txn)] += txn.magnitude
    return totals


def discretionary(expenses: Iterable[Transaction], fixed_groups: FrozenSet[str]) -> List[Transaction]:
    """Expenses outside the fixed-cost set; the category label plays no part"""
    return [t for t in expenses if not is_fixed_transaction(t, fixed_groups)]


def analyze_categories(
    this_period: Iterable[Transaction],
    prev_ptd: Iterable[Transaction],
    prev_full: Iterable[Transaction],
    fixed_groups: FrozenSet[str],
    settings: EngineSettings,
) -> List[CategorySpend]:
    """Compare the top discretionary categories of this period with the previous one"""
    current = totals_by_category(discretionary(this_period, fixed_groups))
    ptd_totals = totals_by_category(discretionary(prev_ptd, fixed_groups))
    full_totals = totals_by_category(discretionary(prev_full, fixed_groups))

    top = sorted(current.items(), key=lambda item: item[1], reverse=True)[: settings.category_analysis_limit]

    report = []
    for name, amount in top:
        baseline = hybrid_baseline(
            ptd_totals.get(name, ZERO),
            full_totals.get(name, ZERO),
            settings.hybrid_baseline_threshold,
        )
        diff = amount - baseline
        pct = change_percentage(amount, baseline)
        report.append(
            CategorySpend(
                name=name,
                amount=amount,
                change_amount=diff,
                change_percentage=pct,
                is_stable=is_stable(diff, pct, settings),
                is_fixed_cost=name in fixed_groups,
            )
        )
    return report
