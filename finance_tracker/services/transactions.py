from finance_tracker.models.category import Category
from finance_tracker.models.transaction import Transaction
from finance_tracker.schemas.category import CategoryRead
from finance_tracker.schemas.transaction import TransactionRead


def serialize_category(category: Category) -> CategoryRead:
    return CategoryRead(
        id=category.id,
        name=category.name,
        type=category.type,
        color=category.color,
    )


def serialize_transaction(transaction: Transaction) -> TransactionRead:
    return TransactionRead(
        id=transaction.id,
        category_id=transaction.category_id,
        amount=float(transaction.amount),
        type=transaction.type,
        description=transaction.description,
        date=transaction.tx_date,
        created_at=transaction.created_at,
        category=serialize_category(transaction.category) if transaction.category else None,
    )
