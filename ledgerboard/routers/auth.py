import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ledgerboard.config import get_settings
from ledgerboard.core.errors import NotFoundError, PersistenceError, ValidationError
from ledgerboard.core.security import issue_token
from ledgerboard.dependencies import get_current_user_id, get_db
from ledgerboard.schemas.user import LoginRequest, TokenResponse, UserCreate, UserRead
from ledgerboard.services.user_service import authenticate_user, register_user, require_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/users", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    try:
        return register_user(db, payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/users/me", response_model=UserRead)
def current_user(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        return require_user(db, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/auth/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    if not get_settings().JWT_SECRET:
        raise HTTPException(
            status_code=400,
            detail="Login is not configured. Set JWT_SECRET in the environment.",
        )

    user = authenticate_user(db, payload.username, payload.password)
    if user is None:
        logger.info("Failed login for %s", payload.username)
        raise HTTPException(status_code=401, detail="Invalid username or password.")
    return TokenResponse(access_token=issue_token(user.id), user_id=user.id)


__all__ = ["router"]
