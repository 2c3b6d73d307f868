from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi_async_sqlalchemy import SQLAlchemyMiddleware, db
from sqlalchemy.engine import make_url
from starlette.applications import Starlette

from settings import settings


def build_engine_args(database_url: str) -> dict[str, Any]:
    """
    Engine arguments for the given URL.

    Pool sizing only applies to server databases; SQLite engines keep SQLAlchemy's default pool.
    """
    engine_args: dict[str, Any] = {"echo": settings.database.echo}
    if make_url(database_url).get_backend_name() == "sqlite":
        return engine_args

    engine_args.update(
        {
            "pool_size": settings.database.min_pool_size,
            "max_overflow": settings.database.max_pool_size - settings.database.min_pool_size,
            "pool_pre_ping": True,
            "pool_recycle": 300,
        }
    )
    return engine_args


@asynccontextmanager
async def fastapi_sqlalchemy_context(database_url: str | None = None) -> AsyncGenerator[None, None]:
    """Initialize fastapi_async_sqlalchemy for standalone scripts."""

    database_url = database_url or settings.database.url

    # Create a minimal Starlette app to initialize the middleware
    app = Starlette()
    SQLAlchemyMiddleware(app, db_url=database_url, engine_args=build_engine_args(database_url))

    async with db():
        yield
