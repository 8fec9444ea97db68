from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import HTTPException, status

from ledgerboard.config import get_settings

_PBKDF2_PREFIX = "pbkdf2_sha256"


def _load_api_keys() -> set[str]:
    settings = get_settings()
    keys = set()
    if settings.API_KEYS:
        for value in settings.API_KEYS.split(","):
            value = value.strip()
            if value:
                keys.add(value)
    return keys


def _get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _decode_jwt(token: str) -> dict:
    settings = get_settings()
    if not settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="JWT auth is not configured",
        )

    options = {"verify_aud": bool(settings.JWT_AUDIENCE)}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options=options,
        )
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid JWT",
        ) from exc


def issue_token(user_id: int, *, now: Optional[datetime] = None) -> str:
    settings = get_settings()
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not configured")
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    if settings.JWT_AUDIENCE:
        claims["aud"] = settings.JWT_AUDIENCE
    if settings.JWT_ISSUER:
        claims["iss"] = settings.JWT_ISSUER
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_configured() -> bool:
    settings = get_settings()
    return bool(_load_api_keys() or settings.JWT_SECRET or settings.JWT_REQUIRED)


def authenticate_request(
    api_key: Optional[str],
    authorization: Optional[str],
) -> Optional[dict]:
    """Identify the caller.

    A bearer token is always verified once ``JWT_SECRET`` is set; a bad one
    is rejected rather than ignored. When any credential is configured an
    unauthenticated request is rejected. With nothing configured the
    service runs open and this returns None.
    """
    settings = get_settings()
    keys = _load_api_keys()

    token = _get_bearer_token(authorization)
    if token and settings.JWT_SECRET:
        return {"auth_type": "jwt", "payload": _decode_jwt(token)}

    if api_key and api_key in keys and not settings.JWT_REQUIRED:
        return {"auth_type": "api_key"}

    if auth_configured():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return None


def resolve_user_id(auth: Optional[dict], user_id_header: Optional[str]) -> int:
    """Tenant for a request.

    A JWT caller is always its own subject. ``X-User-Id`` is honoured only
    for API-key callers and on an open service, where ``DEFAULT_USER_ID``
    applies when the header is absent.
    """
    if auth and auth.get("auth_type") == "jwt":
        subject = (auth.get("payload") or {}).get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token subject",
            ) from exc

    if auth is None and auth_configured():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    if user_id_header:
        try:
            return int(user_id_header)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="X-User-Id must be an integer",
            ) from exc
    return get_settings().DEFAULT_USER_ID


def _pbkdf2(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def hash_password(password: str, *, rounds: Optional[int] = None) -> str:
    if not password:
        raise ValueError("password is required")
    rounds = rounds or get_settings().PASSWORD_PBKDF2_ROUNDS
    salt = secrets.token_hex(16)
    return "{}${}${}${}".format(_PBKDF2_PREFIX, rounds, salt, _pbkdf2(password, salt, rounds))


def verify_password(password: str, encoded: str) -> bool:
    if not password or not encoded:
        return False
    parts = encoded.split("$")
    if len(parts) != 4 or parts[0] != _PBKDF2_PREFIX:
        return False
    try:
        rounds = int(parts[1])
    except ValueError:
        return False
    expected = _pbkdf2(password, parts[2], rounds)
    return hmac.compare_digest(expected, parts[3])
