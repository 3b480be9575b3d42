import datetime as dt
from decimal import Decimal

from pydantic import Field, field_validator

from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.base import CamelModel
from finance_tracker.schemas.category import CategoryRead


def _normalize_description(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    return normalized or None


class TransactionCreate(CamelModel):
    category_id: int = Field(ge=1)
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    type: TransactionType
    description: str | None = Field(default=None, max_length=255)
    date: dt.date

    @field_validator("description")
    @classmethod
    def normalize_description(cls, value: str | None) -> str | None:
        return _normalize_description(value)


class TransactionUpdate(CamelModel):
    category_id: int | None = Field(default=None, ge=1)
    amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    type: TransactionType | None = None
    description: str | None = Field(default=None, max_length=255)
    date: dt.date | None = None

    @field_validator("description")
    @classmethod
    def normalize_description(cls, value: str | None) -> str | None:
        return _normalize_description(value)


class TransactionRead(CamelModel):
    id: int
    category_id: int
    amount: float
    type: TransactionType
    description: str | None
    date: dt.date
    created_at: dt.datetime | None = None
    category: CategoryRead | None = None
