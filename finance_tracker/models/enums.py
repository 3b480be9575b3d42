from enum import Enum

from sqlalchemy import Enum as SAEnum


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


transaction_type_enum = SAEnum(
    TransactionType,
    name="transaction_type",
    native_enum=False,
    length=16,
    values_callable=lambda enum_cls: [item.value for item in enum_cls],
)
