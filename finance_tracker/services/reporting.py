from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from finance_tracker.models.enums import TransactionType
from finance_tracker.services.periods import DateWindow, month_label

ZERO = Decimal("0")
ONE_DECIMAL = Decimal("0.1")


@dataclass(slots=True)
class LedgerEntry:
    id: int
    tx_date: dt.date
    type: TransactionType
    amount: Decimal
    category_id: int
    category_name: str
    category_color: str


@dataclass(slots=True)
class PeriodTotals:
    income: Decimal
    expenses: Decimal
    transaction_count: int

    @property
    def balance(self) -> Decimal:
        return self.income - self.expenses


@dataclass(slots=True)
class CategoryBucket:
    category_id: int
    name: str
    color: str
    amount: Decimal = ZERO
    count: int = 0


@dataclass(slots=True)
class TrendPoint:
    month: str
    income: Decimal
    expenses: Decimal


def summarize_totals(entries: Iterable[LedgerEntry]) -> PeriodTotals:
    income = ZERO
    expenses = ZERO
    count = 0

    for entry in entries:
        count += 1
        if entry.type == TransactionType.INCOME:
            income += entry.amount
        elif entry.type == TransactionType.EXPENSE:
            expenses += entry.amount

    return PeriodTotals(income=income, expenses=expenses, transaction_count=count)


def build_category_breakdown(entries: Iterable[LedgerEntry]) -> list[CategoryBucket]:
    """Group expense entries by category id, largest amount first.

    Ties keep the order in which categories first appear in ``entries``.
    """
    buckets: dict[int, CategoryBucket] = {}
    for entry in entries:
        if entry.type != TransactionType.EXPENSE:
            continue
        bucket = buckets.get(entry.category_id)
        if bucket is None:
            bucket = CategoryBucket(
                category_id=entry.category_id,
                name=entry.category_name,
                color=entry.category_color,
            )
            buckets[entry.category_id] = bucket
        bucket.amount += entry.amount
        bucket.count += 1

    return sorted(buckets.values(), key=lambda item: item.amount, reverse=True)


def expense_change_percent(expenses: Decimal, previous_expenses: Decimal) -> Decimal:
    if previous_expenses == ZERO:
        return ZERO

    change = (expenses - previous_expenses) / previous_expenses * 100
    return change.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def bucket_by_month(entries: Iterable[LedgerEntry], months: list[DateWindow]) -> list[TrendPoint]:
    totals: dict[tuple[int, int], list[Decimal]] = {
        (window.start.year, window.start.month): [ZERO, ZERO] for window in months
    }

    for entry in entries:
        slot = totals.get((entry.tx_date.year, entry.tx_date.month))
        if slot is None:
            continue
        if entry.type == TransactionType.INCOME:
            slot[0] += entry.amount
        elif entry.type == TransactionType.EXPENSE:
            slot[1] += entry.amount

    points = []
    for window in months:
        income, expenses = totals[(window.start.year, window.start.month)]
        points.append(
            TrendPoint(
                month=month_label(window.start.year, window.start.month),
                income=income,
                expenses=expenses,
            )
        )
    return points
