"""FastAPI application with lifespan, error mapping and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from compledger.api.routes import employees, health
from compledger.core.config import AppSettings
from compledger.core.exceptions import (
    EmployeeNotFoundError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from compledger.core.log import configure_logging
from compledger.persistence import create_persistence
from compledger.services.compensation import CompensationService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings = AppSettings()
    configure_logging(settings.log_level)
    employee_store, cache = create_persistence(settings)
    app.state.settings = settings
    app.state.employee_store = employee_store
    app.state.cache = cache
    app.state.service = CompensationService(settings=settings, employee_store=employee_store)
    yield


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"errors": exc.field_errors})


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": str(exc)})


async def _persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"message": exc.user_message})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Compensation Ledger",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(EmployeeNotFoundError, _not_found)
    app.add_exception_handler(PersistenceError, _persistence_error)
    app.include_router(health.router)
    app.include_router(employees.router)
    return app
