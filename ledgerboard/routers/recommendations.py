from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerboard.core.errors import NotFoundError, PersistenceError
from ledgerboard.dependencies import get_current_user_id, get_db
from ledgerboard.schemas.recommendation import RecommendationBatch, RecommendationRead
from ledgerboard.services import record_store
from ledgerboard.services.recommendation_service import generate_recommendations

router = APIRouter(prefix="/ai-recommendations", tags=["Recommendations"])


@router.get("", response_model=List[RecommendationRead])
def list_recommendations(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return record_store.get_recommendations(db, user_id)


@router.post("/generate", response_model=RecommendationBatch)
def generate(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        saved = generate_recommendations(db, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to generate recommendations") from exc
    return {"recommendations": saved}


@router.put("/{recommendation_id}/read")
def mark_read(
    recommendation_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        updated = record_store.mark_recommendation_read(db, user_id, recommendation_id)
        if not updated:
            db.rollback()
            raise HTTPException(status_code=404, detail="Recommendation not found")
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error") from exc
    return {"success": True}


__all__ = ["router"]
