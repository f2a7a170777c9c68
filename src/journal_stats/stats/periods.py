"""Date-range presets offered by the dashboard's period picker."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from journal_stats.core.enums import PresetRange
from journal_stats.core.errors import FilterError


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise FilterError(f"start {self.start} is after end {self.end}")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def month_range(day: date) -> DateRange:
    """The calendar month containing ``day``."""
    last = calendar.monthrange(day.year, day.month)[1]
    return DateRange(day.replace(day=1), day.replace(day=last))


def year_range(year: int) -> DateRange:
    return DateRange(date(year, 1, 1), date(year, 12, 31))


def preset_range(preset: PresetRange | str, today: date | None = None) -> DateRange:
    """Resolve a preset against ``today`` (defaults to the local date).

    The rolling presets end today and include it, so "15 days" starts
    14 days back.
    """
    today = today or date.today()
    preset = PresetRange(preset)
    if preset == PresetRange.YEAR:
        return year_range(today.year)
    if preset == PresetRange.LAST_15_DAYS:
        return DateRange(today - timedelta(days=14), today)
    if preset == PresetRange.LAST_30_DAYS:
        return DateRange(today - timedelta(days=29), today)
    return month_range(today)


def is_custom_range(date_range: DateRange, today: date | None = None) -> bool:
    """True when ``date_range`` matches none of the presets for ``today``."""
    today = today or date.today()
    return all(preset_range(p, today) != date_range for p in PresetRange)
