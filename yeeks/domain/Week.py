"""Week domain entity: one clipped 7-day span of a year partition."""
from datetime import date, timedelta
from enum import Enum


class WeekStatus(str, Enum):
    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"


class WeekInterval:
    def __init__(self, week_number: int, raw_start: date, year_start: date, year_end: date):
        self.week_number = week_number
        self.raw_start = raw_start
        self.raw_end = raw_start + timedelta(days=6)
        # Clip the raw span to the year's own boundaries
        self.display_start = max(raw_start, year_start)
        self.display_end = min(self.raw_end, year_end)

    @property
    def days(self) -> int:
        return (self.display_end - self.display_start).days + 1

    @property
    def is_partial(self) -> bool:
        return self.days < 7

    def contains(self, day: date) -> bool:
        return self.display_start <= day <= self.display_end

    def __eq__(self, other):
        if not isinstance(other, WeekInterval):
            return NotImplemented
        return (self.week_number, self.raw_start, self.display_start, self.display_end) == \
            (other.week_number, other.raw_start, other.display_start, other.display_end)

    def __hash__(self):
        return hash((self.week_number, self.raw_start, self.display_start, self.display_end))

    def __repr__(self) -> str:
        return (f"WeekInterval(week={self.week_number}, "
                f"{self.display_start.isoformat()}..{self.display_end.isoformat()})")

    def to_dict(self):
        '''Serializes the interval for the JSON API.'''
        return {
            "week": self.week_number,
            "raw_start": self.raw_start.isoformat(),
            "raw_end": self.raw_end.isoformat(),
            "start": self.display_start.isoformat(),
            "end": self.display_end.isoformat(),
            "days": self.days,
            "partial": self.is_partial,
        }
