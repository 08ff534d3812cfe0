import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm.exc import StaleDataError

from dataanno.core.config import get_settings
from dataanno.core.errors import ConflictError
from dataanno.db.base import Base

logger = logging.getLogger(__name__)

T = TypeVar("T")

_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(
            settings.database_url,
            echo=settings.database_echo,
            pool_pre_ping=settings.pool_pre_ping,
        )
    return _engine


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables from the ORM metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


class TransactionRunner:
    """Runs callables against a short-lived session.

    ``run_atomic`` wraps the callable in a single transaction: it commits when
    the callable returns and rolls back when it raises. Commit rejections
    surface as ``ConflictError``; any other exception propagates untouched.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def run(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with self._session_factory() as session:
            return await fn(session)

    async def run_atomic(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    return await fn(session)
            except (StaleDataError, IntegrityError) as exc:
                logger.warning("Atomic unit of work rolled back: %s", exc)
                raise ConflictError(
                    "Conflict: annotations were modified concurrently. Please reload and retry.",
                    {"cause": type(exc).__name__},
                ) from exc


def default_runner() -> TransactionRunner:
    return TransactionRunner(make_sessionmaker(get_engine()))
