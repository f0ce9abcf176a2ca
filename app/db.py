from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi_async_sqlalchemy import SQLAlchemyMiddleware, db
from starlette.applications import Starlette

from settings import settings


def database_url() -> str:
    return f"{settings.database.async_host}/{settings.database.name}"


def engine_args(**overrides: Any) -> dict[str, Any]:
    args: dict[str, Any] = {
        "pool_size": settings.database.min_pool_size,
        "max_overflow": settings.database.max_pool_size - settings.database.min_pool_size,
        "pool_pre_ping": True,
    }
    args.update(overrides)
    return args


@asynccontextmanager
async def fastapi_sqlalchemy_context() -> AsyncGenerator[None, None]:
    """
    Open a ``db.session`` outside of a request, for manage.py commands.

    The middleware binds its engine to the module-level ``db`` on construction, so a throwaway
    Starlette app is enough.
    """
    SQLAlchemyMiddleware(Starlette(), db_url=database_url(), engine_args=engine_args(echo=False))

    async with db():
        yield
