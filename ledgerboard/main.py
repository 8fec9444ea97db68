import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ledgerboard.config import Settings, get_settings
from ledgerboard.core.logging import setup_logging
from ledgerboard.database import init_db
from ledgerboard.routers import (
    auth_router,
    dashboard_router,
    health_router,
    inventory_router,
    recommendations_router,
    transactions_router,
)

setup_logging()
settings: Settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.include_router(health_router)
app.include_router(auth_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")
app.include_router(transactions_router, prefix="/api")
app.include_router(inventory_router, prefix="/api")
app.include_router(recommendations_router, prefix="/api")


__all__ = ["app"]
