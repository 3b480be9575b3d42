import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from finance_tracker.api.categories import router as categories_router
from finance_tracker.api.dashboard import router as dashboard_router
from finance_tracker.api.transactions import router as transactions_router
from finance_tracker.db.session import dispose_engine
from finance_tracker.db.settings import get_settings

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")


@app.exception_handler(SQLAlchemyError)
async def datastore_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Datastore failure on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Server error"})


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await dispose_engine()


@app.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(dashboard_router)
app.include_router(categories_router)
app.include_router(transactions_router)
