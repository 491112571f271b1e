"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from appointment_manager.api.entities import (
    appointments_router,
    contacts_router,
    customers_router,
)
from appointment_manager.api.login import router as login_router
from appointment_manager.api.reports import router as reports_router
from appointment_manager.config import settings
from appointment_manager.database.engine import init_db
from appointment_manager.errors import (
    DataAccessError,
    EmptyTableError,
    IntegrityViolationError,
)

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hook."""
    logger.info("Starting %s …", settings.app_name)
    await init_db()
    logger.info("Database initialised")
    yield
    logger.info("Shutting down %s …", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="Customer, appointment and contact management with reporting",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(login_router)
app.include_router(customers_router)
app.include_router(appointments_router)
app.include_router(contacts_router)
app.include_router(reports_router)


@app.exception_handler(EmptyTableError)
async def empty_table_handler(request: Request, exc: EmptyTableError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(IntegrityViolationError)
async def integrity_handler(request: Request, exc: IntegrityViolationError) -> JSONResponse:
    logger.info("Write rejected on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=409, content={"detail": "Constraint violation"})


@app.exception_handler(DataAccessError)
async def data_access_handler(request: Request, exc: DataAccessError) -> JSONResponse:
    logger.error("Data access failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Database error"})


@app.get("/health")
async def health_check():
    """Simple liveness probe."""
    return {"status": "healthy", "app": settings.app_name}
