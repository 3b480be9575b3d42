import asyncio
import datetime as dt
from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from finance_tracker.api import categories as categories_api
from finance_tracker.api import transactions as transactions_api
from finance_tracker.db.base import Base
from finance_tracker.models import Category, Transaction, TransactionType
from finance_tracker.schemas.category import CategoryCreate, CategoryUpdate
from finance_tracker.schemas.transaction import TransactionCreate, TransactionUpdate
from finance_tracker.services.dashboard import DashboardService
from finance_tracker.services.datastore import NotFoundError, SqlTransactionStore

OWNER = "owner"
STRANGER = "stranger"


def run_with_store(scenario) -> None:
    async def runner() -> None:
        engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        try:
            async with session_factory() as session:
                await scenario(SqlTransactionStore(session))
        finally:
            await engine.dispose()

    asyncio.run(runner())


async def _seed(store: SqlTransactionStore) -> dict[str, Category]:
    food = Category(user_id=OWNER, name="Food", type=TransactionType.EXPENSE, color="#EF4444")
    salary = Category(user_id=OWNER, name="Salary", type=TransactionType.INCOME, color="#10B981")
    foreign = Category(user_id=STRANGER, name="Food", type=TransactionType.EXPENSE, color="#000000")
    store.session.add_all([food, salary, foreign])
    await store.session.flush()

    store.session.add_all(
        [
            Transaction(user_id=OWNER, category_id=food.id, amount=Decimal("50"), type=TransactionType.EXPENSE, tx_date=dt.date(2024, 1, 5)),
            Transaction(user_id=OWNER, category_id=salary.id, amount=Decimal("1000"), type=TransactionType.INCOME, tx_date=dt.date(2024, 1, 1)),
            Transaction(user_id=OWNER, category_id=food.id, amount=Decimal("30"), type=TransactionType.EXPENSE, tx_date=dt.date(2024, 1, 10)),
            Transaction(user_id=OWNER, category_id=food.id, amount=Decimal("60"), type=TransactionType.EXPENSE, tx_date=dt.date(2023, 12, 20)),
            Transaction(user_id=STRANGER, category_id=foreign.id, amount=Decimal("999"), type=TransactionType.EXPENSE, tx_date=dt.date(2024, 1, 7)),
        ]
    )
    await store.session.commit()
    return {"food": food, "salary": salary, "foreign": foreign}


def test_find_entries_filters_by_owner_window_and_kind() -> None:
    async def scenario(store: SqlTransactionStore) -> None:
        categories = await _seed(store)

        entries = await store.find_entries(OWNER, dt.date(2024, 1, 1), dt.date(2024, 1, 31))
        assert [entry.tx_date.day for entry in entries] == [1, 5, 10]
        assert entries[1].category_name == "Food"
        assert entries[1].category_color == "#EF4444"

        expenses = await store.find_entries(OWNER, kind=TransactionType.EXPENSE)
        assert sum(entry.amount for entry in expenses) == Decimal("140")

        by_category = await store.find_entries(OWNER, category_id=categories["salary"].id)
        assert [entry.amount for entry in by_category] == [Decimal("1000")]

    run_with_store(scenario)


def test_recent_transactions_are_newest_first_with_category() -> None:
    async def scenario(store: SqlTransactionStore) -> None:
        await _seed(store)

        recent = await store.recent_transactions(OWNER, 2)

        assert [item.tx_date for item in recent] == [dt.date(2024, 1, 10), dt.date(2024, 1, 5)]
        assert recent[0].category.name == "Food"

    run_with_store(scenario)


def test_lookups_never_cross_users() -> None:
    async def scenario(store: SqlTransactionStore) -> None:
        categories = await _seed(store)
        foreign_tx = (await store.find_transactions(STRANGER))[0]

        with pytest.raises(NotFoundError):
            await store.find_category(OWNER, categories["foreign"].id)
        with pytest.raises(NotFoundError):
            await store.find_transaction(OWNER, foreign_tx.id)
        assert await store.count_category_transactions(OWNER, categories["food"].id) == 3

    run_with_store(scenario)


def test_dashboard_over_sql_store() -> None:
    async def scenario(store: SqlTransactionStore) -> None:
        await _seed(store)

        result = await DashboardService(store).summary(OWNER, "2024-01-01", "2024-01-31")

        assert result.totals.income == Decimal("1000")
        assert result.totals.expenses == Decimal("80")
        assert result.totals.balance == Decimal("920")
        assert result.totals.transaction_count == 3
        assert [(item.name, item.amount, item.count) for item in result.category_breakdown] == [
            ("Food", Decimal("80"), 2)
        ]
        assert result.expense_change_percent == Decimal("33.3")

        trend = await DashboardService(store).spending_trend(OWNER, 2, today=dt.date(2024, 1, 15))
        assert [(point.month, point.expenses) for point in trend] == [
            ("Dec 2023", Decimal("60")),
            ("Jan 2024", Decimal("80")),
        ]

    run_with_store(scenario)


def test_category_crud_rules() -> None:
    async def scenario(store: SqlTransactionStore) -> None:
        categories = await _seed(store)
        food_id = categories["food"].id
        foreign_id = categories["foreign"].id
        salary_name = categories["salary"].name

        created = await categories_api.create_category(
            CategoryCreate(name="  Travel ", type=TransactionType.EXPENSE, color="#abcdef"),
            user_id=OWNER,
            store=store,
        )
        assert created.name == "Travel"
        assert created.color == "#ABCDEF"

        with pytest.raises(HTTPException) as duplicate:
            await categories_api.create_category(
                CategoryCreate(name="Travel", type=TransactionType.EXPENSE), user_id=OWNER, store=store
            )
        assert duplicate.value.status_code == 400

        same_name_other_user = await categories_api.create_category(
            CategoryCreate(name="Travel", type=TransactionType.EXPENSE), user_id=STRANGER, store=store
        )
        assert same_name_other_user.id != created.id

        renamed = await categories_api.update_category(
            created.id, CategoryUpdate(name="Trips"), user_id=OWNER, store=store
        )
        assert renamed.name == "Trips"

        with pytest.raises(HTTPException) as name_taken:
            await categories_api.update_category(
                food_id, CategoryUpdate(name=salary_name), user_id=OWNER, store=store
            )
        assert name_taken.value.status_code == 400

        with pytest.raises(HTTPException) as retyped:
            await categories_api.update_category(
                food_id, CategoryUpdate(type=TransactionType.INCOME), user_id=OWNER, store=store
            )
        assert retyped.value.status_code == 400

        with pytest.raises(HTTPException) as foreign_update:
            await categories_api.update_category(
                foreign_id, CategoryUpdate(name="Mine"), user_id=OWNER, store=store
            )
        assert foreign_update.value.status_code == 404

        with pytest.raises(HTTPException) as in_use:
            await categories_api.delete_category(food_id, user_id=OWNER, store=store)
        assert in_use.value.status_code == 400

        with pytest.raises(HTTPException) as foreign:
            await categories_api.delete_category(foreign_id, user_id=OWNER, store=store)
        assert foreign.value.status_code == 404

        await categories_api.delete_category(created.id, user_id=OWNER, store=store)
        listed = await categories_api.list_categories(type=None, user_id=OWNER, store=store)
        assert [item.name for item in listed] == ["Food", "Salary"]

    run_with_store(scenario)


def test_transaction_crud_rules() -> None:
    async def scenario(store: SqlTransactionStore) -> None:
        categories = await _seed(store)

        created = await transactions_api.create_transaction(
            TransactionCreate(
                category_id=categories["food"].id,
                amount=Decimal("12.34"),
                type=TransactionType.EXPENSE,
                description=" lunch ",
                date=dt.date(2024, 2, 2),
            ),
            user_id=OWNER,
            store=store,
        )
        assert created.amount == 12.34
        assert created.description == "lunch"
        assert created.category.name == "Food"

        with pytest.raises(HTTPException) as mismatch:
            await transactions_api.create_transaction(
                TransactionCreate(
                    category_id=categories["salary"].id,
                    amount=Decimal("5"),
                    type=TransactionType.EXPENSE,
                    date=dt.date(2024, 2, 2),
                ),
                user_id=OWNER,
                store=store,
            )
        assert mismatch.value.status_code == 400

        with pytest.raises(HTTPException) as foreign_category:
            await transactions_api.create_transaction(
                TransactionCreate(
                    category_id=categories["foreign"].id,
                    amount=Decimal("5"),
                    type=TransactionType.EXPENSE,
                    date=dt.date(2024, 2, 2),
                ),
                user_id=OWNER,
                store=store,
            )
        assert foreign_category.value.status_code == 404

        updated = await transactions_api.update_transaction(
            created.id,
            TransactionUpdate(
                category_id=categories["salary"].id,
                type=TransactionType.INCOME,
                amount=Decimal("20"),
            ),
            user_id=OWNER,
            store=store,
        )
        assert updated.type == TransactionType.INCOME
        assert updated.category.name == "Salary"
        assert updated.description == "lunch"

        listed = await transactions_api.list_transactions(
            start_date="2024-02-01",
            end_date=None,
            category_id=None,
            type=TransactionType.INCOME,
            user_id=OWNER,
            store=store,
        )
        assert [item.id for item in listed] == [created.id]

        with pytest.raises(HTTPException) as hidden:
            await transactions_api.get_transaction(created.id, user_id=STRANGER, store=store)
        assert hidden.value.status_code == 404

        await transactions_api.delete_transaction(created.id, user_id=OWNER, store=store)
        with pytest.raises(HTTPException) as gone:
            await transactions_api.get_transaction(created.id, user_id=OWNER, store=store)
        assert gone.value.status_code == 404

    run_with_store(scenario)
