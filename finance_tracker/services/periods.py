from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import dataclass

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

END_OF_DAY = dt.time(23, 59, 59)


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive calendar-date range ``[start, end]``."""

    start: dt.date
    end: dt.date

    @property
    def start_at(self) -> dt.datetime:
        return dt.datetime.combine(self.start, dt.time.min)

    @property
    def end_at(self) -> dt.datetime:
        return dt.datetime.combine(self.end, END_OF_DAY)

    def shift_months(self, months: int) -> DateWindow:
        return DateWindow(start=shift_months(self.start, months), end=shift_months(self.end, months))


def parse_date(value: str, field: str) -> dt.date:
    text = value.strip()
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ValueError(f"{field} must be an ISO-8601 date") from exc


def shift_months(day: dt.date, months: int) -> dt.date:
    # Days missing from the target month clamp to its last day (Mar 31 - 1 -> Feb 28/29).
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return dt.date(year, month, min(day.day, last_day))


def month_bounds(year: int, month: int) -> DateWindow:
    last_day = calendar.monthrange(year, month)[1]
    return DateWindow(start=dt.date(year, month, 1), end=dt.date(year, month, last_day))


def month_label(year: int, month: int) -> str:
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year:04d}"


def resolve_date_window(
    start_date: str | None,
    end_date: str | None,
    *,
    today: dt.date | None = None,
) -> DateWindow:
    today = today or dt.date.today()
    current = month_bounds(today.year, today.month)

    start = parse_date(start_date, "startDate") if start_date is not None else current.start
    end = parse_date(end_date, "endDate") if end_date is not None else current.end
    if start > end:
        raise ValueError("startDate must not be after endDate")
    return DateWindow(start=start, end=end)


def trailing_months(count: int, *, today: dt.date | None = None) -> list[DateWindow]:
    """Return ``count`` calendar-month windows, oldest first, ending with the current month."""
    if count < 1:
        raise ValueError("months must be a positive integer")

    today = today or dt.date.today()
    anchor = today.replace(day=1)
    windows = []
    for offset in range(count - 1, -1, -1):
        first = shift_months(anchor, -offset)
        windows.append(month_bounds(first.year, first.month))
    return windows
