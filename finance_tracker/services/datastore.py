from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from finance_tracker.models.category import Category
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.services.reporting import LedgerEntry


class NotFoundError(LookupError):
    """Raised when a category or transaction is missing or owned by another user."""


class TransactionStore(Protocol):
    async def find_entries(
        self,
        user_id: str,
        start: dt.date | None = None,
        end: dt.date | None = None,
        *,
        category_id: int | None = None,
        kind: TransactionType | None = None,
    ) -> list[LedgerEntry]: ...

    async def recent_transactions(self, user_id: str, limit: int) -> list[Transaction]: ...


class SqlTransactionStore:
    """Datastore reads and writes, every query scoped to the owning user."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _transaction_filters(
        user_id: str,
        start: dt.date | None,
        end: dt.date | None,
        category_id: int | None,
        kind: TransactionType | None,
    ) -> list:
        filters = [Transaction.user_id == user_id]
        if start is not None:
            filters.append(Transaction.tx_date >= start)
        if end is not None:
            filters.append(Transaction.tx_date <= end)
        if category_id is not None:
            filters.append(Transaction.category_id == category_id)
        if kind is not None:
            filters.append(Transaction.type == kind)
        return filters

    async def find_entries(
        self,
        user_id: str,
        start: dt.date | None = None,
        end: dt.date | None = None,
        *,
        category_id: int | None = None,
        kind: TransactionType | None = None,
    ) -> list[LedgerEntry]:
        rows = await self.session.execute(
            select(
                Transaction.id,
                Transaction.tx_date,
                Transaction.type,
                Transaction.amount,
                Category.id,
                Category.name,
                Category.color,
            )
            .join(Category, Transaction.category_id == Category.id)
            .where(*self._transaction_filters(user_id, start, end, category_id, kind))
            .order_by(Transaction.tx_date.asc(), Transaction.id.asc())
        )
        return [
            LedgerEntry(
                id=tx_id,
                tx_date=tx_date,
                type=tx_type,
                amount=amount,
                category_id=cat_id,
                category_name=name,
                category_color=color,
            )
            for tx_id, tx_date, tx_type, amount, cat_id, name, color in rows.all()
        ]

    async def find_transactions(
        self,
        user_id: str,
        start: dt.date | None = None,
        end: dt.date | None = None,
        *,
        category_id: int | None = None,
        kind: TransactionType | None = None,
    ) -> Sequence[Transaction]:
        result = await self.session.scalars(
            select(Transaction)
            .options(selectinload(Transaction.category))
            .where(*self._transaction_filters(user_id, start, end, category_id, kind))
            .order_by(Transaction.tx_date.desc(), Transaction.id.desc())
        )
        return result.all()

    async def recent_transactions(self, user_id: str, limit: int) -> list[Transaction]:
        result = await self.session.scalars(
            select(Transaction)
            .options(selectinload(Transaction.category))
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.tx_date.desc(), Transaction.id.desc())
            .limit(limit)
        )
        return list(result.all())

    async def find_transaction(self, user_id: str, transaction_id: int) -> Transaction:
        transaction = await self.session.scalar(
            select(Transaction)
            .options(selectinload(Transaction.category))
            .where(Transaction.id == transaction_id, Transaction.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    async def list_categories(self, user_id: str, kind: TransactionType | None = None) -> Sequence[Category]:
        query = select(Category).where(Category.user_id == user_id).order_by(Category.name.asc())
        if kind is not None:
            query = query.where(Category.type == kind)
        rows = await self.session.scalars(query)
        return rows.all()

    async def find_category(self, user_id: str, category_id: int) -> Category:
        category = await self.session.scalar(
            select(Category).where(Category.id == category_id, Category.user_id == user_id)
        )
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def count_category_transactions(self, user_id: str, category_id: int) -> int:
        count = await self.session.scalar(
            select(func.count(Transaction.id)).where(
                Transaction.user_id == user_id,
                Transaction.category_id == category_id,
            )
        )
        return count or 0
