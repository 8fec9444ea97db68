from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ledgerboard.core.errors import NotFoundError, PersistenceError
from ledgerboard.dependencies import get_current_user_id, get_db
from ledgerboard.schemas.transaction import TransactionCreate, TransactionRead, TransactionUpdate
from ledgerboard.services import record_store, transaction_service
from ledgerboard.services.stock_service import apply_transaction

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("", response_model=List[TransactionRead])
def list_transactions(
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Newest N transactions"),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return record_store.get_transactions(db, user_id, limit)


@router.post("", response_model=TransactionRead, status_code=201)
def create_transaction(
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        return apply_transaction(db, user_id, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.put("/{transaction_id}", response_model=TransactionRead)
def update_transaction(
    transaction_id: int,
    payload: TransactionUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        return transaction_service.update_transaction(db, user_id, transaction_id, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        transaction_service.delete_transaction(db, user_id, transaction_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"success": True}


__all__ = ["router"]
