"""
Middleware for automatic database commits at the end of each request.
"""

import logging
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi_async_sqlalchemy import db
from fastapi_async_sqlalchemy.exceptions import MissingSessionError
from starlette.middleware.base import BaseHTTPMiddleware

from app.exceptions import ErrorType

logger = logging.getLogger(__name__)


class AutoCommitMiddleware(BaseHTTPMiddleware):
    """
    Commits the request's database transaction once the handler has produced a response.

    Error responses (4xx/5xx) are rolled back instead. A failed commit replaces the handler's
    response with a 500 so the caller never sees a success for a write that was not persisted.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        try:
            response = await call_next(request)
        except Exception as e:
            await self._rollback(f"Database transaction rolled back due to error: {e}")
            raise

        if response.status_code >= 400:
            await self._rollback(f"Database transaction rolled back for {response.status_code} response")
            return response

        try:
            session = db.session
            if session is not None:
                await session.commit()
                logger.debug("Database transaction committed successfully")
        except MissingSessionError:
            # Endpoints such as /health never open a session.
            logger.debug("No database session found for request - skipping commit")
        except Exception:
            logger.exception(f"Failed to commit database transaction; path: {request.url.path}")
            await self._rollback("Database transaction rolled back after failed commit")
            return JSONResponse(
                status_code=500,
                content={"error": "Failed to persist changes", "error_type": ErrorType.PERSISTENCE_ERROR.value},
            )

        return response

    async def _rollback(self, reason: str) -> None:
        try:
            session = db.session
            if session is not None:
                await session.rollback()
                logger.debug(reason)
        except MissingSessionError:
            logger.debug("No database session found for rollback - skipping rollback")
        except Exception as e:
            logger.warning(f"Failed to rollback database transaction: {e}")
