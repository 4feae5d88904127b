"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ggstore.core.config import DatabaseSettings
from ggstore.core.exceptions import StorageUnavailableError

from .base import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one application lifetime.

    ``session()`` is the unit of work: everything executed inside the block is
    committed together on exit or rolled back together on error.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int | None = None,
        max_overflow: int | None = None,
    ) -> None:
        self.url = url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, settings: DatabaseSettings, *, debug: bool = False) -> "Database":
        return cls(
            settings.url,
            echo=settings.echo or debug,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def open(self) -> AsyncEngine:
        if self._engine is not None:
            return self._engine

        engine_kwargs: dict[str, Any] = {"echo": self._echo}
        if self._pool_size is not None:
            engine_kwargs["pool_size"] = self._pool_size
        if self._max_overflow is not None:
            engine_kwargs["max_overflow"] = self._max_overflow

        self._engine = create_async_engine(self.url, **engine_kwargs)
        if self.is_sqlite:
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        return self._engine

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    async def create_all(self) -> None:
        """Create database tables in development mode (migrations preferred)."""
        from . import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._session_factory is None:
            raise RuntimeError("Database is not open")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except (OperationalError, InterfaceError) as exc:
                await session.rollback()
                raise StorageUnavailableError(str(exc.orig or exc)) from exc
            except Exception:
                await session.rollback()
                raise
