from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.db.session import get_session
from finance_tracker.db.settings import Settings, get_settings
from finance_tracker.services.auth import InvalidTokenError, verify_token
from finance_tracker.services.dashboard import DashboardService
from finance_tracker.services.datastore import SqlTransactionStore

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return verify_token(credentials.credentials, settings.jwt_secret, settings.jwt_algorithm)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_store(session: AsyncSession = Depends(get_session)) -> SqlTransactionStore:
    return SqlTransactionStore(session)


def get_dashboard_service(
    store: SqlTransactionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> DashboardService:
    return DashboardService(
        store,
        recent_limit=settings.recent_transactions_limit,
        default_trend_months=settings.default_trend_months,
    )
