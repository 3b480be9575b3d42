from finance_tracker.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from finance_tracker.schemas.dashboard import (
    CategoryBreakdownItem,
    DashboardSummaryResponse,
    DateRange,
    SpendingTrendResponse,
    SummaryTotals,
    TrendPointRead,
)
from finance_tracker.schemas.transaction import TransactionCreate, TransactionRead, TransactionUpdate

__all__ = [
    "CategoryCreate",
    "CategoryRead",
    "CategoryUpdate",
    "CategoryBreakdownItem",
    "DashboardSummaryResponse",
    "DateRange",
    "SpendingTrendResponse",
    "SummaryTotals",
    "TrendPointRead",
    "TransactionCreate",
    "TransactionRead",
    "TransactionUpdate",
]
