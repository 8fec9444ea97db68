from typing import Optional

from fastapi import Depends, Header

from ledgerboard.core.security import authenticate_request, resolve_user_id
from ledgerboard.database.session import get_db


def get_auth(
    api_key: Optional[str] = Header(None, alias="X-API-Key"),
    api_key_alt: Optional[str] = Header(None, alias="api-key"),
    authorization: Optional[str] = Header(None),
):
    return authenticate_request(
        api_key=api_key or api_key_alt,
        authorization=authorization,
    )


def get_current_user_id(
    auth: Optional[dict] = Depends(get_auth),
    user_id_header: Optional[str] = Header(None, alias="X-User-Id"),
) -> int:
    return resolve_user_id(auth, user_id_header)


__all__ = ["get_auth", "get_current_user_id", "get_db"]
