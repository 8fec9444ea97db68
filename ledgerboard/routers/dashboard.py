from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerboard.core.constants import DEFAULT_REPORT_PERIOD
from ledgerboard.core.errors import NotFoundError, ValidationError
from ledgerboard.dependencies import get_current_user_id, get_db
from ledgerboard.schemas.dashboard import BusinessReport, DashboardMetrics
from ledgerboard.services.dashboard_service import business_report, dashboard_metrics

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardMetrics)
def get_dashboard(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        return dashboard_metrics(db, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.get("/reports", response_model=BusinessReport)
def get_report(
    period: str = Query(DEFAULT_REPORT_PERIOD, description="today, week, month or year"),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    try:
        return business_report(db, user_id, period)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=500, detail="Internal server error") from exc


__all__ = ["router"]
