"""Exception handlers mapping domain and database errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from dashboard.auth.exceptions import AuthenticationError
from dashboard.exceptions import ConflictError, DashboardError

logger = logging.getLogger(__name__)

BASIC_CHALLENGE = 'Basic realm="dashboard"'


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    if isinstance(exc, ConflictError) and exc.payload is not None:
        content = exc.payload
    else:
        content = {"detail": exc.message}

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": BASIC_CHALLENGE}

    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, dashboard_error_handler)
    app.add_exception_handler(PyMongoError, database_error_handler)
