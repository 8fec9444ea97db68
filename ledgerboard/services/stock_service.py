import logging

from sqlalchemy import case, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerboard.core.dates import as_utc, utc_now
from ledgerboard.core.errors import NotFoundError, PersistenceError
from ledgerboard.models.inventory_item import InventoryItem
from ledgerboard.models.transaction import Transaction
from ledgerboard.services import record_store

logger = logging.getLogger(__name__)

_STOCK_DIRECTION = {
    "sale": -1,
    "purchase": 1,
}


def stock_delta(transaction_type, quantity):
    if not quantity:
        return 0
    return _STOCK_DIRECTION.get(transaction_type, 0) * int(quantity)


def apply_stock_effect(db: Session, item: InventoryItem, transaction: Transaction) -> bool:
    """Apply a posted transaction's effect to its linked item.

    The new level is computed by the database from the stored value, so
    concurrent postings against the same item never overwrite each other.
    Stock never goes below zero: an oversold sale leaves the item at 0
    instead of being rejected. Returns True when the item changed.
    """
    if item is None or transaction.inventory_item_id is None or not transaction.quantity:
        return False

    delta = stock_delta(transaction.type, transaction.quantity)
    if not delta:
        return False

    if int(item.current_stock or 0) + delta < 0:
        logger.warning(
            "Sale of %s units exceeds stock %s for item %s; clamping to 0.",
            transaction.quantity,
            item.current_stock,
            item.id,
            extra={"user_id": item.user_id, "item_id": item.id},
        )

    new_level = InventoryItem.current_stock + delta
    values = {"current_stock": case((new_level < 0, 0), else_=new_level)}
    if transaction.type == "purchase":
        values["last_restocked"] = transaction.date

    db.execute(
        update(InventoryItem)
        .where(InventoryItem.id == item.id, InventoryItem.user_id == item.user_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    db.refresh(item)
    return True


def apply_transaction(db: Session, user_id: int, payload) -> Transaction:
    """Persist a transaction and its stock effect as a single unit of work."""
    if payload.inventory_item_id is not None and payload.quantity is None and payload.type in _STOCK_DIRECTION:
        logger.info(
            "Transaction for item %s has no quantity; stock left unchanged.",
            payload.inventory_item_id,
        )

    try:
        if record_store.get_user(db, user_id) is None:
            raise NotFoundError("User", user_id)

        item = None
        if payload.inventory_item_id is not None:
            item = record_store.get_inventory_item(
                db, user_id, payload.inventory_item_id, for_update=True
            )
            if item is None:
                raise NotFoundError("Inventory item", payload.inventory_item_id)

        transaction = Transaction(
            user_id=user_id,
            type=payload.type,
            amount=payload.amount,
            description=payload.description,
            category=payload.category,
            date=as_utc(payload.date) or utc_now(),
            inventory_item_id=payload.inventory_item_id,
            quantity=payload.quantity,
        )
        db.add(transaction)
        apply_stock_effect(db, item, transaction)
        db.commit()
    except NotFoundError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(
            "Failed to post %s transaction for user %s",
            payload.type,
            user_id,
            extra={"user_id": user_id, "item_id": payload.inventory_item_id},
        )
        raise PersistenceError("Unable to record transaction") from exc

    return transaction


__all__ = ["apply_stock_effect", "apply_transaction", "stock_delta"]
