import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from finance_tracker.api.deps import get_current_user_id, get_store
from finance_tracker.models.category import Category
from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from finance_tracker.services.datastore import NotFoundError, SqlTransactionStore
from finance_tracker.services.transactions import serialize_category

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["categories"])

DUPLICATE_NAME = "Category name already exists"


@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(
    type: TransactionType | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> list[CategoryRead]:
    categories = await store.list_categories(user_id, type)
    return [serialize_category(item) for item in categories]


@router.post("/categories", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> CategoryRead:
    category = Category(user_id=user_id, name=payload.name, type=payload.type, color=payload.color)
    store.session.add(category)
    try:
        await store.session.commit()
    except IntegrityError as exc:
        await store.session.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_NAME) from exc

    logger.info("Created category %s for user %s", category.id, user_id)
    return serialize_category(category)


@router.put("/categories/{category_id}", response_model=CategoryRead)
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> CategoryRead:
    try:
        category = await store.find_category(user_id, category_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if payload.type is not None and payload.type != category.type:
        if await store.count_category_transactions(user_id, category_id) > 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot change type of category with existing transactions",
            )
        category.type = payload.type
    if payload.name is not None:
        category.name = payload.name
    if payload.color is not None:
        category.color = payload.color

    try:
        await store.session.commit()
    except IntegrityError as exc:
        await store.session.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_NAME) from exc

    return serialize_category(category)


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: int,
    user_id: str = Depends(get_current_user_id),
    store: SqlTransactionStore = Depends(get_store),
) -> dict[str, str]:
    try:
        category = await store.find_category(user_id, category_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if await store.count_category_transactions(user_id, category_id) > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete category with existing transactions",
        )

    await store.session.delete(category)
    await store.session.commit()
    logger.info("Deleted category %s for user %s", category_id, user_id)
    return {"message": "Category deleted successfully"}
