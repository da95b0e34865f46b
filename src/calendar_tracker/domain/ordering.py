"""
Ordering of civil dates used as aggregation keys.

Day totals are collected in whatever order events arrive; reports list
them oldest first.
"""
from datetime import date
from typing import Iterable, List, Mapping, Tuple, Any


def civil_date_key(day: date) -> Tuple[int, int, int]:
    """Sort key placing dates in ascending chronological order"""
    return (day.year, day.month, day.day)


def sort_civil_dates(days: Iterable[date]) -> List[date]:
    """Return the distinct dates in ascending chronological order"""
    return sorted(set(days), key=civil_date_key)


def sorted_days(totals: Mapping[date, Any]) -> List[date]:
    """
    Keys of a day-keyed mapping, oldest first.

    Example:
        >>> sorted_days({date(2024, 1, 2): 1, date(2024, 1, 1): 2})
        [datetime.date(2024, 1, 1), datetime.date(2024, 1, 2)]
    """
    return sort_civil_dates(totals.keys())
