import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from finance_tracker.api.deps import get_current_user_id, get_store
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.schemas.transaction import TransactionCreate, TransactionRead, TransactionUpdate
from finance_tracker.services.datastore import NotFoundError, SqlTransactionStore
from finance_tracker.services.periods import parse_date
from finance_tracker.services.transactions import serialize_transaction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transactions"])

KIND_MISMATCH = "Category type does not match transaction type"


@router.get("/transactions", response_model=list[TransactionRead])
async def list_transactions(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    category_id: int | None = Query(default=None, alias="categoryId", ge=1),
    type: TransactionType | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> list[TransactionRead]:
    try:
        start = parse_date(start_date, "startDate") if start_date is not None else None
        end = parse_date(end_date, "endDate") if end_date is not None else None
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    transactions = await store.find_transactions(user_id, start, end, category_id=category_id, kind=type)
    return [serialize_transaction(item) for item in transactions]


@router.get("/transactions/{transaction_id}", response_model=TransactionRead)
async def get_transaction(
    transaction_id: int,
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> TransactionRead:
    try:
        transaction = await store.find_transaction(user_id, transaction_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return serialize_transaction(transaction)


@router.post("/transactions", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> TransactionRead:
    try:
        category = await store.find_category(user_id, payload.category_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if category.type != payload.type:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=KIND_MISMATCH)

    transaction = Transaction(
        user_id=user_id,
        category_id=category.id,
        amount=payload.amount,
        type=payload.type,
        description=payload.description,
        tx_date=payload.date,
    )
    store.session.add(transaction)
    await store.session.commit()
    logger.info("Created transaction %s for user %s", transaction.id, user_id)

    saved_transaction = await store.find_transaction(user_id, transaction.id)
    return serialize_transaction(saved_transaction)


@router.put("/transactions/{transaction_id}", response_model=TransactionRead)
async def update_transaction(
    transaction_id: int,
    payload: TransactionUpdate,
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> TransactionRead:
    try:
        transaction = await store.find_transaction(user_id, transaction_id)
        category = transaction.category
        if payload.category_id is not None:
            category = await store.find_category(user_id, payload.category_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    kind = payload.type or transaction.type
    if category.type != kind:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=KIND_MISMATCH)

    transaction.category_id = category.id
    transaction.type = kind
    if payload.amount is not None:
        transaction.amount = payload.amount
    if "description" in payload.model_fields_set:
        transaction.description = payload.description
    if payload.date is not None:
        transaction.tx_date = payload.date

    await store.session.commit()

    saved_transaction = await store.find_transaction(user_id, transaction_id)
    return serialize_transaction(saved_transaction)


@router.delete("/transactions/{transaction_id}")
async def delete_transaction(
    transaction_id: int,
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> dict[str, str]:
    try:
        transaction = await store.find_transaction(user_id, transaction_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    await store.session.delete(transaction)
    await store.session.commit()
    logger.info("Deleted transaction %s for user %s", transaction_id, user_id)
    return {"message": "Transaction deleted successfully"}
