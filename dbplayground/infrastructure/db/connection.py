import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from ...core.config import DatabaseSettings, get_settings
from ...core.exceptions import (
    ConstraintViolationError,
    DatabaseConnectionError,
    DatabaseError,
)

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def translate_database_error(error: Exception, operation: Optional[str] = None) -> DatabaseError:
    """Map a SQLAlchemy/driver exception onto the application error taxonomy.

    The driver's own message is kept as ``details``.
    """
    details = str(getattr(error, "orig", None) or error)

    if isinstance(error, PoolTimeoutError):
        return DatabaseConnectionError(operation=operation, details=details)
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return DatabaseConnectionError(operation=operation, details=details)
    if isinstance(error, OperationalError):
        return DatabaseConnectionError(operation=operation, details=details)
    if isinstance(error, IntegrityError):
        return ConstraintViolationError(operation=operation, details=details)
    return DatabaseError(operation=operation, details=details)


class DatabaseManager:
    """
    Owns the async engine and its connection pool.

    Every statement runs on its own pooled connection in AUTOCOMMIT mode and
    the connection goes back to the pool on every exit path.
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None):
        self.settings = settings or get_settings().database
        self._engine: Optional[AsyncEngine] = None
        self._lock = asyncio.Lock()

    def _get_database_config(self) -> dict:
        return {
            "echo": self.settings.echo,
            "pool_size": self.settings.pool_size,
            "max_overflow": self.settings.max_overflow,
            "pool_timeout": self.settings.pool_timeout,
            "pool_recycle": self.settings.pool_recycle,
            "pool_pre_ping": True,
            "isolation_level": "AUTOCOMMIT",
        }

    @staticmethod
    def _convert_to_async_url(url: str) -> str:
        """Convert a plain postgres URL to one naming the async psycopg driver."""
        for prefix in ("postgresql://", "postgres://"):
            if url.startswith(prefix):
                return "postgresql+psycopg://" + url[len(prefix):]
        return url

    def _create_engine(self) -> AsyncEngine:
        async_url = self._convert_to_async_url(self.settings.url)
        try:
            engine = create_async_engine(async_url, **self._get_database_config())
        except SQLAlchemyError as e:
            logger.error(f"Failed to create database engine: {e}")
            raise DatabaseConnectionError(
                message="Database engine creation failed", details=str(e)
            ) from e
        logger.info("Async database engine created for %s", engine.url.render_as_string(hide_password=True))
        return engine

    async def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            async with self._lock:
                if self._engine is None:
                    self._engine = self._create_engine()
        return self._engine

    @asynccontextmanager
    async def connection(self, operation: Optional[str] = None) -> AsyncIterator[AsyncConnection]:
        """Acquire a pooled connection, translating engine failures."""
        engine = await self.get_engine()
        try:
            async with engine.connect() as conn:
                yield conn
        except SQLAlchemyError as e:
            logger.error(f"Database operation failed ({operation or 'query'}): {e}")
            raise translate_database_error(e, operation) from e

    async def fetch_all(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        operation: Optional[str] = None,
    ) -> List[Row]:
        """Run one statement with bound parameters and return its rows as dicts."""
        async with self.connection(operation) as conn:
            result = await conn.execute(text(sql), dict(params or {}))
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]

    async def execute_raw(self, sql: str, operation: Optional[str] = None) -> List[Row]:
        """Run caller-supplied SQL text as-is, without bind-parameter parsing."""
        async with self.connection(operation) as conn:
            result = await conn.exec_driver_sql(sql, execution_options={"no_parameters": True})
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]

    async def health_check(self) -> bool:
        try:
            rows = await self.fetch_all("SELECT 1 AS ok", operation="health check")
        except DatabaseError as e:
            logger.error(f"Database health check failed: {e.details}")
            return False
        return bool(rows) and rows[0].get("ok") == 1

    async def disconnect(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
