"""
FastAPI application entry point - app directory API
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from fastapi_async_sqlalchemy import SQLAlchemyMiddleware

from app.api.middlewares.auto_commit import AutoCommitMiddleware
from app.api.routes import api_router
from app.db import build_engine_args
from app.exceptions import BaseError, ErrorType
from settings import settings

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Collapse pydantic's error list into one readable message."""
    missing = [str(err["loc"][-1]) for err in exc.errors() if err.get("type") == "missing"]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"

    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(details) or "Invalid request"


def _setup_error_handlers(app: FastAPI) -> None:
    """Setup FastAPI exception handlers."""

    @app.exception_handler(HTTPException)
    async def handle_http_error(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle FastAPI HTTPException errors."""
        return JSONResponse(status_code=exc.status_code or 400, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed or incomplete request bodies are rejected with a 400, before anything is persisted."""
        message = _describe_validation_error(exc)
        logger.warning(f"Rejected invalid request; path: {request.url.path}, error: {message}")
        return JSONResponse(status_code=400, content={"error": message, "error_type": ErrorType.INVALID_DATA.value})

    @app.exception_handler(BaseError)
    async def handle_app_error(request: Request, exc: BaseError) -> JSONResponse:
        """Handle custom BaseError exceptions."""
        if exc.status_code >= 400 and exc.status_code < 500:
            logger.warning(f"A user-related (HTTP 4xx) error occurred; {exc}", extra=exc.extra)
        else:
            logger.exception(f"An unhandled app exception occurred; {exc}", extra=exc.extra)

        return JSONResponse(
            status_code=exc.status_code, content={"error": exc.message, "error_type": exc.error_type.value}
        )

    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
        """Handle any unhandled exceptions."""
        logger.exception(f"An unhandled exception occurred; error: {exc}")

        return JSONResponse(status_code=500, content={"error": ErrorType.UNHANDLED_EXCEPTION.value})


def create_app(database_url: str | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="App Directory API",
        description="Curated directory of ecosystem apps",
        version="1.0.0",
    )

    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="App Directory API",
            version="1.0.0",
            description="Curated directory of ecosystem apps",
            routes=app.routes,
        )

        # Admin endpoints accept the optional admin bearer token
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "AdminBearer": {
                "type": "http",
                "scheme": "bearer",
                "description": "Value of ADMIN_API_TOKEN (only enforced when configured)",
            }
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    setattr(app, "openapi", custom_openapi)

    _setup_error_handlers(app)

    # Add auto-commit middleware FIRST (it will run LAST, after SQLAlchemy middleware creates the session)
    app.add_middleware(AutoCommitMiddleware)

    database_url = database_url or settings.database.url
    app.add_middleware(SQLAlchemyMiddleware, db_url=database_url, engine_args=build_engine_args(database_url))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}

    return app
