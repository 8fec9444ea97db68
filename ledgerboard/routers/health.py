from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ledgerboard.config import get_settings
from ledgerboard.database.session import database_reachable, get_db

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(response: Response, db: Session = Depends(get_db)):
    settings = get_settings()
    database_ok = database_reachable(db)
    if not database_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "ok" if database_ok else "degraded",
        "database": "ok" if database_ok else "unavailable",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "timezone": settings.BUSINESS_TIMEZONE,
        "time": datetime.now(timezone.utc).isoformat(),
    }
