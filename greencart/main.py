"""
GreenCart Logistics - FastAPI Application
Main entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from greencart.config import get_settings
from greencart.core.logging_config import configure_logging
from greencart.api import (
    drivers_router,
    routes_router,
    orders_router,
    simulations_router,
)


settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_title} v{settings.app_version}")

    # Creates tables on SQLite / dev databases; production schemas come from alembic
    from greencart.database import init_db
    await init_db()
    logger.info("Database tables initialized")

    yield
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_title,
    version=settings.app_version,
    description="""
    ## GreenCart Logistics API

    Back office for drivers, routes and orders, plus a what-if delivery
    simulation reporting profit and on-time KPIs.

    ### Main Endpoints
    - `POST /api/v1/simulate` - Run a simulation and store its report
    - `GET /api/v1/simulate/history` - Most recent simulation reports
    - `GET /api/v1/simulate/{id}` - One simulation report
    - `/api/v1/drivers`, `/api/v1/routes`, `/api/v1/orders` - Master data CRUD
    """,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(drivers_router, prefix=settings.api_prefix)
app.include_router(routes_router, prefix=settings.api_prefix)
app.include_router(orders_router, prefix=settings.api_prefix)
app.include_router(simulations_router, prefix=settings.api_prefix)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - health check."""
    return {
        "status": "healthy",
        "service": settings.app_title,
        "version": settings.app_version,
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
