"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List


def generate_date_range(start: date, days: int) -> List[date]:
    """Generate `days` consecutive dates beginning at start"""
    return [start + timedelta(days=i) for i in range(max(days, 0))]


def add_months(from_date: date, months: int) -> date:
    """Shift by whole calendar months, clamping the day to the target month's length"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)

