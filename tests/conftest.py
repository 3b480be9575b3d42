import datetime as dt
from decimal import Decimal
from types import SimpleNamespace

import pytest

from finance_tracker.models.enums import TransactionType
from finance_tracker.services.reporting import LedgerEntry

COLORS = {"Food": "#EF4444", "Salary": "#10B981", "Transport": "#F59E0B"}


class FakeStore:
    """In-memory stand-in for the datastore, keyed by owning user."""

    def __init__(self) -> None:
        self.rows: list[tuple[str, LedgerEntry]] = []
        self.calls: list[tuple] = []

    def add(
        self,
        user_id: str,
        tx_type: TransactionType,
        amount: str,
        category: str,
        tx_date: dt.date,
        category_id: int | None = None,
    ) -> LedgerEntry:
        entry = LedgerEntry(
            id=len(self.rows) + 1,
            tx_date=tx_date,
            type=tx_type,
            amount=Decimal(amount),
            category_id=category_id if category_id is not None else sorted(COLORS).index(category) + 1,
            category_name=category,
            category_color=COLORS.get(category, "#3B82F6"),
        )
        self.rows.append((user_id, entry))
        return entry

    async def find_entries(self, user_id, start=None, end=None, *, category_id=None, kind=None):
        self.calls.append((user_id, start, end, kind))
        matched = [
            entry
            for owner, entry in self.rows
            if owner == user_id
            and (start is None or entry.tx_date >= start)
            and (end is None or entry.tx_date <= end)
            and (category_id is None or entry.category_id == category_id)
            and (kind is None or entry.type == kind)
        ]
        return sorted(matched, key=lambda item: (item.tx_date, item.id))

    async def recent_transactions(self, user_id, limit):
        owned = [entry for owner, entry in self.rows if owner == user_id]
        owned.sort(key=lambda item: (item.tx_date, item.id), reverse=True)
        return [
            SimpleNamespace(
                id=entry.id,
                category_id=entry.category_id,
                amount=entry.amount,
                type=entry.type,
                description=None,
                tx_date=entry.tx_date,
                created_at=None,
                category=SimpleNamespace(
                    id=entry.category_id,
                    name=entry.category_name,
                    type=entry.type,
                    color=entry.category_color,
                ),
            )
            for entry in owned[:limit]
        ]


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()
