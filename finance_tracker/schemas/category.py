import re

from pydantic import Field, field_validator

from finance_tracker.models.category import DEFAULT_CATEGORY_COLOR
from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.base import CamelModel

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _normalize_color(value: str) -> str:
    if not COLOR_PATTERN.match(value):
        raise ValueError("Color must be a hex value like #3B82F6")
    return value.upper()


def _normalize_name(value: str) -> str:
    normalized = " ".join(value.strip().split())
    if not normalized:
        raise ValueError("Name cannot be empty")
    return normalized


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=64)
    type: TransactionType
    color: str = DEFAULT_CATEGORY_COLOR

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return _normalize_name(value)

    @field_validator("color")
    @classmethod
    def normalize_color(cls, value: str) -> str:
        return _normalize_color(value)


class CategoryUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=64)
    type: TransactionType | None = None
    color: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _normalize_name(value)

    @field_validator("color")
    @classmethod
    def normalize_color(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _normalize_color(value)


class CategoryRead(CamelModel):
    id: int
    name: str
    type: TransactionType
    color: str
