from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal

from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.services.datastore import TransactionStore
from finance_tracker.services.periods import DateWindow, resolve_date_window, trailing_months
from finance_tracker.services.reporting import (
    CategoryBucket,
    PeriodTotals,
    TrendPoint,
    build_category_breakdown,
    bucket_by_month,
    expense_change_percent,
    summarize_totals,
)

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 5
DEFAULT_TREND_MONTHS = 6


@dataclass(slots=True)
class DashboardSummary:
    totals: PeriodTotals
    expense_change_percent: Decimal
    category_breakdown: list[CategoryBucket]
    recent_transactions: list[Transaction]
    window: DateWindow


class DashboardService:
    """Read-only aggregation over one user's ledger.

    Every call re-reads the store; nothing is cached between calls.
    """

    def __init__(
        self,
        store: TransactionStore,
        *,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        default_trend_months: int = DEFAULT_TREND_MONTHS,
    ) -> None:
        self.store = store
        self.recent_limit = recent_limit
        self.default_trend_months = default_trend_months

    async def summary(
        self,
        user_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
        *,
        today: dt.date | None = None,
    ) -> DashboardSummary:
        window = resolve_date_window(start_date, end_date, today=today)

        entries = await self.store.find_entries(user_id, window.start, window.end)
        totals = summarize_totals(entries)
        breakdown = build_category_breakdown(entries)

        previous = window.shift_months(-1)
        previous_entries = await self.store.find_entries(
            user_id, previous.start, previous.end, kind=TransactionType.EXPENSE
        )
        previous_expenses = summarize_totals(previous_entries).expenses
        change = expense_change_percent(totals.expenses, previous_expenses)

        recent = await self.store.recent_transactions(user_id, self.recent_limit)

        logger.debug(
            "Summary for user %s over %s..%s: income=%s expenses=%s previous=%s",
            user_id,
            window.start,
            window.end,
            totals.income,
            totals.expenses,
            previous_expenses,
        )
        return DashboardSummary(
            totals=totals,
            expense_change_percent=change,
            category_breakdown=breakdown,
            recent_transactions=recent,
            window=window,
        )

    async def spending_trend(
        self,
        user_id: str,
        months: int | None = None,
        *,
        today: dt.date | None = None,
    ) -> list[TrendPoint]:
        count = self.default_trend_months if months is None else months
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValueError("months must be a positive integer")

        windows = trailing_months(count, today=today)
        entries = await self.store.find_entries(user_id, windows[0].start, windows[-1].end)
        points = bucket_by_month(entries, windows)

        logger.debug("Trend for user %s: %d months from %s", user_id, count, windows[0].start)
        return points
