"""Named date-range presets resolved against a reference day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, Optional

from app.utils import add_months


class InvalidDateRangeError(ValueError):
    pass


class DatePreset(str, Enum):
    TODAY = "Today"
    YESTERDAY = "Yesterday"
    THIS_WEEK = "This Week"
    PREVIOUS_WEEK = "Previous Week"
    THIS_MONTH = "This Month"
    PREVIOUS_MONTH = "Previous Month"
    LAST_30_DAYS = "Last 30 Days"
    LAST_90_DAYS = "Last 90 Days"
    THIS_QUARTER = "This Quarter"
    PREVIOUS_QUARTER = "Previous Quarter"
    THIS_YEAR = "This Year"
    PREVIOUS_YEAR = "Previous Year"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, name: str) -> DatePreset:
        """Accept either the label ("This Month") or its slug ("this_month")."""
        normalized = name.strip().lower().replace("_", " ").replace("-", " ")
        for preset in cls:
            if preset.value.lower() == normalized:
                return preset
        raise InvalidDateRangeError(f"Unknown date range preset: {name!r}")

    @property
    def slug(self) -> str:
        return self.value.lower().replace(" ", "_")


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


def _month_range(first: date) -> DateRange:
    return DateRange(first, add_months(first, 1) - timedelta(days=1))


def _quarter_range(today: date, offset: int) -> DateRange:
    quarter_start = date(today.year, (today.month - 1) // 3 * 3 + 1, 1)
    start = add_months(quarter_start, offset * 3)
    return DateRange(start, add_months(start, 3) - timedelta(days=1))


def _week_range(today: date, offset: int) -> DateRange:
    monday = today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
    return DateRange(monday, monday + timedelta(days=6))


_RESOLVERS: Dict[DatePreset, Callable[[date], DateRange]] = {
    DatePreset.TODAY: lambda today: DateRange(today, today),
    DatePreset.YESTERDAY: lambda today: DateRange(today - timedelta(days=1), today - timedelta(days=1)),
    DatePreset.THIS_WEEK: lambda today: _week_range(today, 0),
    DatePreset.PREVIOUS_WEEK: lambda today: _week_range(today, -1),
    DatePreset.THIS_MONTH: lambda today: _month_range(date(today.year, today.month, 1)),
    DatePreset.PREVIOUS_MONTH: lambda today: _month_range(add_months(today, -1)),
    DatePreset.LAST_30_DAYS: lambda today: DateRange(today - timedelta(days=30), today),
    DatePreset.LAST_90_DAYS: lambda today: DateRange(today - timedelta(days=90), today),
    DatePreset.THIS_QUARTER: lambda today: _quarter_range(today, 0),
    DatePreset.PREVIOUS_QUARTER: lambda today: _quarter_range(today, -1),
    DatePreset.THIS_YEAR: lambda today: DateRange(date(today.year, 1, 1), date(today.year, 12, 31)),
    DatePreset.PREVIOUS_YEAR: lambda today: DateRange(date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)),
}


def resolve_date_range(
    preset: DatePreset | str,
    today: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> DateRange:
    """Turn a preset into concrete inclusive bounds.

    ``custom`` takes the caller's ``start`` and ``end``; both are required.
    Unknown preset names are rejected instead of falling back to a default.
    """
    if not isinstance(preset, DatePreset):
        preset = DatePreset.parse(preset)

    if preset is DatePreset.CUSTOM:
        if start is None or end is None:
            raise InvalidDateRangeError("Custom date range requires both start and end.")
        if start > end:
            raise InvalidDateRangeError("Custom date range start must not be after end.")
        return DateRange(start, end)

    return _RESOLVERS[preset](today or date.today())
