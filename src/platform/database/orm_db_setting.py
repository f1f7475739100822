"""
SQLAlchemy async engine and session management.

AsyncEngineManager keeps the engine bound to the running event loop, so test
clients and the granian worker each get an engine created on their own loop.
Database is the DI-friendly facade handed to the Unit of Work.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

import orjson
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


def _orjson_dumps(value: Any) -> str:
    return orjson.dumps(value).decode()


class AsyncEngineManager:
    """Lazily creates the engine and recreates it when the event loop changes."""

    def __init__(self) -> None:
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                # dispose() needs the old loop, let the engine be collected instead
                Logger.base.warning('🔄 [DB] Event loop changed, dropping old engine')
                self._session_maker = None

            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        assert self._engine is not None
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None

    @staticmethod
    def _create_engine() -> AsyncEngine:
        return create_async_engine(
            settings.DATABASE_URL_ASYNC,
            echo=False,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
            json_serializer=_orjson_dumps,
            json_deserializer=orjson.loads,
        )


engine_manager = AsyncEngineManager()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables() -> None:
    """Create ledger tables if they don't exist"""
    # Importing the models registers them on Base.metadata
    import src.service.ledger.driven_adapter.model  # noqa: F401

    async with engine_manager.get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️ [DB] Ledger tables ready')


class Database:
    """Session source injected into the Unit of Work and read-side repositories."""

    def __init__(self, *, manager: AsyncEngineManager = engine_manager) -> None:
        self._manager = manager

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session, rolling back on exception and closing on exit."""
        async with self._manager.get_session_maker()() as session:
            yield session

    async def dispose(self) -> None:
        await self._manager.dispose()
