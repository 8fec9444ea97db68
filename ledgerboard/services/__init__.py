from ledgerboard.services.dashboard_service import business_report, dashboard_metrics
from ledgerboard.services.recommendation_service import generate_recommendations
from ledgerboard.services.stock_service import apply_transaction

__all__ = [
    "apply_transaction",
    "business_report",
    "dashboard_metrics",
    "generate_recommendations",
]
