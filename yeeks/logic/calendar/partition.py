"""Year partitioning into clipped weeks.

A year is walked from the week containing Jan 1 to the week containing
Dec 31 in 7-day steps. Each raw week is clipped to the year, so the first
and last entries may be partial weeks. Week numbers are positions in this
walk (1-based), not ISO week numbers.
"""
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Union

from yeeks.domain.Week import WeekInterval, WeekStatus

__all__ = [
    "WEEKDAY_NAMES", "resolve_week_start", "year_bounds", "partition_year",
    "classify", "find_current_week", "grid_rows", "week_label", "year_choices",
]

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
MONDAY = 0
ONE_WEEK = timedelta(days=7)


def resolve_week_start(value: Union[int, str]) -> int:
    """Return the weekday index (0=Monday .. 6=Sunday) for a week-start convention.

    Accepts an index or a weekday name ("sunday", "Mon", ...).
    """
    if isinstance(value, bool):
        raise TypeError("week start must be a weekday index or name, not bool")
    if isinstance(value, int):
        if not 0 <= value <= 6:
            raise ValueError(f"week start index must be in 0..6, got {value}")
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key.isdigit():
            return resolve_week_start(int(key))
        for idx, name in enumerate(WEEKDAY_NAMES):
            if len(key) >= 3 and name.startswith(key):
                return idx
        raise ValueError(f"unknown weekday name: {value!r}")
    raise TypeError(f"week start must be a weekday index or name, got {type(value).__name__}")


def _check_year(year) -> None:
    if isinstance(year, bool) or not isinstance(year, int):
        raise TypeError(f"year must be an int, got {type(year).__name__}")


def year_bounds(year: int):
    """(Jan 1, Dec 31) of the given year."""
    _check_year(year)
    try:
        return date(year, 1, 1), date(year, 12, 31)
    except ValueError:
        raise ValueError(f"year {year} is outside the supported date range") from None


def partition_year(year: int, week_start: Union[int, str] = MONDAY) -> List[WeekInterval]:
    """Ordered, clipped weeks covering ``year``.

    Deterministic and side-effect free. The first week starts on the
    convention's weekday on or before Jan 1; the last week contains Dec 31.

    Years are limited to what ``datetime.date`` can hold: a year outside
    1..9999, or one whose first or last raw week crosses that range (year 1
    with Sunday-first weeks, for example), raises ValueError. A non-int year
    raises TypeError.
    """
    start_idx = resolve_week_start(week_start)
    year_start, year_end = year_bounds(year)
    offset = (year_start.weekday() - start_idx) % 7
    weeks: List[WeekInterval] = []
    try:
        raw_start = year_start - timedelta(days=offset)
        while raw_start <= year_end:
            weeks.append(WeekInterval(len(weeks) + 1, raw_start, year_start, year_end))
            if year_end - raw_start < ONE_WEEK:
                break
            raw_start += ONE_WEEK
    except OverflowError:
        raise ValueError(f"weeks of year {year} fall outside the supported date range") from None
    return weeks


def _as_date(today) -> date:
    if isinstance(today, datetime):
        return today.date()
    if isinstance(today, date):
        return today
    raise TypeError(f"today must be a date, got {type(today).__name__}")


def classify(interval: WeekInterval, today) -> WeekStatus:
    """past if the week ended before today, current if today falls inside it, future otherwise."""
    day = _as_date(today)
    if interval.display_end < day:
        return WeekStatus.PAST
    if interval.contains(day):
        return WeekStatus.CURRENT
    return WeekStatus.FUTURE


def find_current_week(weeks: Sequence[WeekInterval], today) -> Optional[WeekInterval]:
    day = _as_date(today)
    for week in weeks:
        if week.contains(day):
            return week
    return None


def grid_rows(weeks: Sequence[WeekInterval], per_row: int = 7) -> List[List[WeekInterval]]:
    """Chunk the weeks into table rows (the last row may be short)."""
    if per_row < 1:
        raise ValueError("per_row must be positive")
    return [list(weeks[i:i + per_row]) for i in range(0, len(weeks), per_row)]


def week_label(interval: WeekInterval) -> str:
    """Tooltip label such as '1.1-1.5' (month.day of the clipped range)."""
    s, e = interval.display_start, interval.display_end
    return f"{s.month}.{s.day}-{e.month}.{e.day}"


def year_choices(current_year: int, back: int = 5, forward: int = 5) -> List[int]:
    """Years offered by the year picker, ascending."""
    _check_year(current_year)
    first = max(current_year - back, date.min.year)
    last = min(current_year + forward, date.max.year)
    return list(range(first, last + 1))
