import datetime as dt

from finance_tracker.schemas.base import CamelModel
from finance_tracker.schemas.transaction import TransactionRead


class SummaryTotals(CamelModel):
    income: float
    expenses: float
    balance: float
    transaction_count: int
    expense_change_percent: float


class CategoryBreakdownItem(CamelModel):
    category_id: int
    name: str
    amount: float
    color: str
    count: int


class DateRange(CamelModel):
    start: dt.datetime
    end: dt.datetime


class DashboardSummaryResponse(CamelModel):
    summary: SummaryTotals
    category_breakdown: list[CategoryBreakdownItem]
    recent_transactions: list[TransactionRead]
    date_range: DateRange


class TrendPointRead(CamelModel):
    month: str
    income: float
    expenses: float


class SpendingTrendResponse(CamelModel):
    data: list[TrendPointRead]
