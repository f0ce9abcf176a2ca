"""
Middleware that ends the request-scoped database transaction.
"""

import logging
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi_async_sqlalchemy import db
from fastapi_async_sqlalchemy.exceptions import MissingSessionError
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class AutoCommitMiddleware(BaseHTTPMiddleware):
    """
    Commits the request's transaction when the response is successful and rolls it back
    when the handler raised or answered with an error status.

    Error responses rendered by the exception handlers still reach this middleware as
    responses, hence the status check.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        try:
            response = await call_next(request)
        except Exception as e:
            await self._rollback(f"Database transaction rolled back due to error: {e}")
            raise

        if response.status_code >= 400:
            await self._rollback(f"Database transaction rolled back; status: {response.status_code}")
            return response

        try:
            await db.session.commit()
            logger.debug("Database transaction committed successfully")
        except MissingSessionError:
            # Endpoints that never touched the database have no session
            logger.debug("No database session found for request - skipping commit")

        return response

    async def _rollback(self, message: str) -> None:
        try:
            await db.session.rollback()
            logger.info(message)
        except MissingSessionError:
            logger.debug("No database session found for rollback - skipping rollback")
