import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerboard.core.errors import NotFoundError, PersistenceError
from ledgerboard.core.stock_rules import display_percentage, is_low_stock, stock_status
from ledgerboard.services import record_store

logger = logging.getLogger(__name__)


def create_item(db: Session, user_id: int, payload):
    if record_store.get_user(db, user_id) is None:
        raise NotFoundError("User", user_id)

    try:
        item = record_store.create_inventory_item(db, user_id, payload.model_dump())
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create inventory item for user %s", user_id)
        raise PersistenceError("Unable to create inventory item") from exc
    return item


def update_item(db: Session, user_id: int, item_id: int, payload):
    changes = payload.model_dump(exclude_unset=True)
    # columns that may not be null
    for field in ("name", "current_stock", "min_stock_level", "unit"):
        if field in changes and changes[field] is None:
            changes.pop(field)

    try:
        item = record_store.update_inventory_item(db, user_id, item_id, changes)
        if item is None:
            raise NotFoundError("Inventory item", item_id)
        db.commit()
    except NotFoundError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update inventory item %s", item_id)
        raise PersistenceError("Unable to update inventory item") from exc
    return item


def delete_item(db: Session, user_id: int, item_id: int) -> None:
    try:
        deleted = record_store.delete_inventory_item(db, user_id, item_id)
        if not deleted:
            raise NotFoundError("Inventory item", item_id)
        db.commit()
    except NotFoundError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete inventory item %s", item_id)
        raise PersistenceError("Unable to delete inventory item") from exc


def stock_overview(item):
    return {
        "stock_status": stock_status(item.current_stock, item.min_stock_level),
        "stock_percentage": display_percentage(item.current_stock, item.min_stock_level),
        "is_low_stock": is_low_stock(item.current_stock, item.min_stock_level),
    }


__all__ = ["create_item", "delete_item", "stock_overview", "update_item"]
