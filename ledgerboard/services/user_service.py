import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerboard.core.errors import NotFoundError, PersistenceError, ValidationError
from ledgerboard.core.security import hash_password, verify_password
from ledgerboard.services import record_store

logger = logging.getLogger(__name__)


def register_user(db: Session, payload):
    username = payload.username.strip()
    if record_store.get_user_by_username(db, username) is not None:
        raise ValidationError("username is already taken")

    try:
        user = record_store.create_user(
            db,
            username=username,
            password_hash=hash_password(payload.password),
            name=payload.name.strip(),
            business_name=payload.business_name,
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ValidationError("username is already taken") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create user %s", username)
        raise PersistenceError("Unable to create user") from exc
    return user


def authenticate_user(db: Session, username: str, password: str):
    user = record_store.get_user_by_username(db, (username or "").strip())
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def require_user(db: Session, user_id: int):
    user = record_store.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


__all__ = ["authenticate_user", "register_user", "require_user"]
