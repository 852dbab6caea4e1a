"""Subscription price-creep detection"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Sequence

from runway_engine.config import EngineSettings
from runway_engine.domain.categories import HUNDRED
from runway_engine.domain.classifier import expense_stream
from runway_engine.domain.models import PriceChange, Transaction
from runway_engine.domain.normalizer import group_key
from runway_engine.utils.money import quantize


def detect_price_creep(
    history: Sequence[Transaction],
    settings: EngineSettings,
    today: date,
) -> List[PriceChange]:
    """
    Repeating charges whose newest occurrence costs more than the one before.

    Only charges seen within subscription_recent_days are reported. Increases
    outside the (min, max) percentage band are ignored: tiny ones are rounding,
    large ones are usually extra usage rather than a price change.
    """
    lookback_start = today - timedelta(days=settings.subscription_lookback_days)
    recent_start = today - timedelta(days=settings.subscription_recent_days)
    low = Decimal(str(settings.subscription_min_increase_pct))
    high = Decimal(str(settings.subscription_max_increase_pct))

    groups: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in expense_stream(history, settings):
        if lookback_start <= txn.date <= today:
            groups[group_key(txn)].append(txn)

    changes = []
    for name, members in groups.items():
        if len(members) < 2:
            continue
        latest, previous = sorted(members, key=lambda t: t.date, reverse=True)[:2]
        if latest.date < recent_start:
            continue

        increase = latest.magnitude - previous.magnitude
        if increase <= 0:
            continue

        percent = increase / previous.magnitude * HUNDRED
        if low < percent < high:
            changes.append(
                PriceChange(
                    name=name,
                    previous_amount=previous.magnitude,
                    latest_amount=latest.magnitude,
                    change_percentage=quantize(percent),
                    latest_date=latest.date,
                )
            )

    return sorted(changes, key=lambda c: c.change_percentage, reverse=True)
