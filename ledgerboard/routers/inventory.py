from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ledgerboard.core.errors import NotFoundError, PersistenceError
from ledgerboard.dependencies import get_current_user_id, get_db
from ledgerboard.schemas.inventory import InventoryItemCreate, InventoryItemRead, InventoryItemUpdate
from ledgerboard.services import inventory_service, record_store

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=List[InventoryItemRead])
def list_inventory(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return record_store.get_inventory_items(db, user_id)


@router.get("/low-stock", response_model=List[InventoryItemRead])
def list_low_stock(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return record_store.get_low_stock_items(db, user_id)


@router.get("/{item_id}")
def get_inventory_item(
    item_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    item = record_store.get_inventory_item(db, user_id, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    base = InventoryItemRead.model_validate(item).model_dump()
    base.update(inventory_service.stock_overview(item))
    return base


@router.post("", response_model=InventoryItemRead, status_code=201)
def create_inventory_item(
    payload: InventoryItemCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        return inventory_service.create_item(db, user_id, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.put("/{item_id}", response_model=InventoryItemRead)
def update_inventory_item(
    item_id: int,
    payload: InventoryItemUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        return inventory_service.update_item(db, user_id, item_id, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.delete("/{item_id}")
def delete_inventory_item(
    item_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        inventory_service.delete_item(db, user_id, item_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"success": True}


__all__ = ["router"]
