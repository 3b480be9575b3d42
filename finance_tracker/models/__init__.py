from finance_tracker.models.category import Category
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction

__all__ = [
    "Category",
    "Transaction",
    "TransactionType",
]
