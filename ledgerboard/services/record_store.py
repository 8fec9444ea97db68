"""Tenant-scoped data access for users, transactions, inventory and recommendations.

Every query filters on ``user_id``; a row owned by another tenant is
indistinguishable from a missing one.
"""

from typing import Optional, cast

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from ledgerboard.core.dates import as_utc
from ledgerboard.models.inventory_item import InventoryItem
from ledgerboard.models.recommendation import Recommendation
from ledgerboard.models.transaction import Transaction
from ledgerboard.models.user import User


# ==============================
# Users
# ==============================
def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.execute(select(User).where(User.username == username)).scalars().first()


def create_user(db: Session, *, username, password_hash, name, business_name=None) -> User:
    user = User(
        username=username,
        password_hash=password_hash,
        name=name,
        business_name=business_name,
    )
    db.add(user)
    db.flush()
    return user


# ==============================
# Transactions
# ==============================
def get_transactions(db: Session, user_id: int, limit: Optional[int] = None) -> list[Transaction]:
    stmt = (
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(Transaction.date.desc(), Transaction.id.desc())
    )
    if limit:
        stmt = stmt.limit(limit)
    return cast(list[Transaction], list(db.execute(stmt).scalars().all()))


def get_transactions_in_window(db: Session, user_id: int, start, end) -> list[Transaction]:
    """Transactions with ``start <= date < end``, newest first."""
    stmt = (
        select(Transaction)
        .where(
            Transaction.user_id == user_id,
            Transaction.date >= as_utc(start),
            Transaction.date < as_utc(end),
        )
        .order_by(Transaction.date.desc(), Transaction.id.desc())
    )
    return cast(list[Transaction], list(db.execute(stmt).scalars().all()))


def get_transaction(db: Session, user_id: int, transaction_id: int) -> Optional[Transaction]:
    stmt = select(Transaction).where(
        Transaction.id == transaction_id,
        Transaction.user_id == user_id,
    )
    return db.execute(stmt).scalars().first()


def update_transaction(db: Session, user_id: int, transaction_id: int, changes: dict) -> Optional[Transaction]:
    transaction = get_transaction(db, user_id, transaction_id)
    if transaction is None:
        return None
    for field, value in changes.items():
        setattr(transaction, field, value)
    db.flush()
    return transaction


def delete_transaction(db: Session, user_id: int, transaction_id: int) -> bool:
    result = db.execute(
        delete(Transaction).where(
            Transaction.id == transaction_id,
            Transaction.user_id == user_id,
        )
    )
    return (result.rowcount or 0) > 0


# ==============================
# Inventory
# ==============================
def get_inventory_items(db: Session, user_id: int) -> list[InventoryItem]:
    stmt = (
        select(InventoryItem)
        .where(InventoryItem.user_id == user_id)
        .order_by(InventoryItem.name, InventoryItem.id)
    )
    return cast(list[InventoryItem], list(db.execute(stmt).scalars().all()))


def get_inventory_item(db: Session, user_id: int, item_id: int, *, for_update=False) -> Optional[InventoryItem]:
    stmt = select(InventoryItem).where(
        InventoryItem.id == item_id,
        InventoryItem.user_id == user_id,
    )
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalars().first()


def create_inventory_item(db: Session, user_id: int, values: dict) -> InventoryItem:
    item = InventoryItem(user_id=user_id, **values)
    db.add(item)
    db.flush()
    return item


def update_inventory_item(db: Session, user_id: int, item_id: int, changes: dict) -> Optional[InventoryItem]:
    item = get_inventory_item(db, user_id, item_id)
    if item is None:
        return None
    for field, value in changes.items():
        setattr(item, field, value)
    db.flush()
    return item


def delete_inventory_item(db: Session, user_id: int, item_id: int) -> bool:
    # transactions keep their history; the link is dropped
    db.execute(
        update(Transaction)
        .where(
            Transaction.user_id == user_id,
            Transaction.inventory_item_id == item_id,
        )
        .values(inventory_item_id=None)
    )
    result = db.execute(
        delete(InventoryItem).where(
            InventoryItem.id == item_id,
            InventoryItem.user_id == user_id,
        )
    )
    return (result.rowcount or 0) > 0


def get_low_stock_items(db: Session, user_id: int) -> list[InventoryItem]:
    stmt = (
        select(InventoryItem)
        .where(
            InventoryItem.user_id == user_id,
            InventoryItem.current_stock < InventoryItem.min_stock_level,
        )
        .order_by(InventoryItem.name, InventoryItem.id)
    )
    return cast(list[InventoryItem], list(db.execute(stmt).scalars().all()))


# ==============================
# Recommendations
# ==============================
def get_recommendations(db: Session, user_id: int) -> list[Recommendation]:
    stmt = (
        select(Recommendation)
        .where(Recommendation.user_id == user_id)
        .order_by(Recommendation.created_at.desc(), Recommendation.id.desc())
    )
    return cast(list[Recommendation], list(db.execute(stmt).scalars().all()))


def create_recommendation(db: Session, user_id: int, draft: dict) -> Recommendation:
    recommendation = Recommendation(
        user_id=user_id,
        type=draft["type"],
        title=draft["title"],
        description=draft["description"],
        priority=draft.get("priority") or "medium",
        actionable=bool(draft.get("actionable", True)),
        details=draft.get("metadata"),
        is_read=False,
    )
    db.add(recommendation)
    return recommendation


def mark_recommendation_read(db: Session, user_id: int, recommendation_id: int) -> bool:
    result = db.execute(
        update(Recommendation)
        .where(
            Recommendation.id == recommendation_id,
            Recommendation.user_id == user_id,
        )
        .values(is_read=True)
    )
    return (result.rowcount or 0) > 0
