import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerboard.core.dates import as_utc
from ledgerboard.core.errors import NotFoundError, PersistenceError
from ledgerboard.services import record_store

logger = logging.getLogger(__name__)


def update_transaction(db: Session, user_id: int, transaction_id: int, payload):
    """Apply a partial edit. Stock levels are not re-posted for edits."""
    changes = payload.model_dump(exclude_unset=True)
    if "date" in changes:
        if changes["date"] is None:
            changes.pop("date")
        else:
            changes["date"] = as_utc(changes["date"])

    try:
        if changes.get("inventory_item_id") is not None:
            item = record_store.get_inventory_item(db, user_id, changes["inventory_item_id"])
            if item is None:
                raise NotFoundError("Inventory item", changes["inventory_item_id"])
        transaction = record_store.update_transaction(db, user_id, transaction_id, changes)
        if transaction is None:
            raise NotFoundError("Transaction", transaction_id)
        db.commit()
    except NotFoundError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(
            "Failed to update transaction %s",
            transaction_id,
            extra={"user_id": user_id, "transaction_id": transaction_id},
        )
        raise PersistenceError("Unable to update transaction") from exc
    return transaction


def delete_transaction(db: Session, user_id: int, transaction_id: int) -> None:
    try:
        deleted = record_store.delete_transaction(db, user_id, transaction_id)
        if not deleted:
            raise NotFoundError("Transaction", transaction_id)
        db.commit()
    except NotFoundError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(
            "Failed to delete transaction %s",
            transaction_id,
            extra={"user_id": user_id, "transaction_id": transaction_id},
        )
        raise PersistenceError("Unable to delete transaction") from exc


__all__ = ["delete_transaction", "update_transaction"]
