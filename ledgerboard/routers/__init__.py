from ledgerboard.routers.auth import router as auth_router
from ledgerboard.routers.dashboard import router as dashboard_router
from ledgerboard.routers.health import router as health_router
from ledgerboard.routers.inventory import router as inventory_router
from ledgerboard.routers.recommendations import router as recommendations_router
from ledgerboard.routers.transactions import router as transactions_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "health_router",
    "inventory_router",
    "recommendations_router",
    "transactions_router",
]
