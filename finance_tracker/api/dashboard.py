from fastapi import APIRouter, Depends, HTTPException, Query, status

from finance_tracker.api.deps import get_current_user_id, get_dashboard_service
from finance_tracker.schemas.dashboard import (
    CategoryBreakdownItem,
    DashboardSummaryResponse,
    DateRange,
    SpendingTrendResponse,
    SummaryTotals,
    TrendPointRead,
)
from finance_tracker.services.dashboard import DashboardService
from finance_tracker.services.transactions import serialize_transaction

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

MAX_TREND_MONTHS = 120


@router.get("/summary", response_model=DashboardSummaryResponse)
async def dashboard_summary(
    start_date: str | None = Query(default=None, alias="startDate", description="ISO-8601 date"),
    end_date: str | None = Query(default=None, alias="endDate", description="ISO-8601 date"),
    user_id: str = Depends(get_current_user_id),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardSummaryResponse:
    try:
        result = await service.summary(user_id, start_date, end_date)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    totals = result.totals
    return DashboardSummaryResponse(
        summary=SummaryTotals(
            income=float(totals.income),
            expenses=float(totals.expenses),
            balance=float(totals.balance),
            transaction_count=totals.transaction_count,
            expense_change_percent=float(result.expense_change_percent),
        ),
        category_breakdown=[
            CategoryBreakdownItem(
                category_id=bucket.category_id,
                name=bucket.name,
                amount=float(bucket.amount),
                color=bucket.color,
                count=bucket.count,
            )
            for bucket in result.category_breakdown
        ],
        recent_transactions=[serialize_transaction(item) for item in result.recent_transactions],
        date_range=DateRange(start=result.window.start_at, end=result.window.end_at),
    )


@router.get("/spending-trend", response_model=SpendingTrendResponse)
async def spending_trend(
    months: int | None = Query(default=None, ge=1, le=MAX_TREND_MONTHS),
    user_id: str = Depends(get_current_user_id),
    service: DashboardService = Depends(get_dashboard_service),
) -> SpendingTrendResponse:
    try:
        points = await service.spending_trend(user_id, months)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    return SpendingTrendResponse(
        data=[
            TrendPointRead(month=point.month, income=float(point.income), expenses=float(point.expenses))
            for point in points
        ]
    )
