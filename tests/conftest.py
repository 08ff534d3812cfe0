import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from dataanno.db.session import TransactionRunner, init_models, make_sessionmaker
from dataanno.services.annotation_coordinator import AnnotationCoordinator
from dataanno.stores.data_records import SqlDataRecordStore


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def runner(engine):
    return TransactionRunner(make_sessionmaker(engine))


@pytest.fixture
def coordinator(runner):
    return AnnotationCoordinator(runner)


@pytest.fixture
def make_data_records(runner):
    """Create *n* data records and return their ids."""
    async def _make(n: int = 1):
        async def _exec(session):
            store = SqlDataRecordStore(session)
            return [(await store.create(f"frame-{i}")).id for i in range(n)]
        return await runner.run_atomic(_exec)
    return _make


@pytest.fixture
def count_rows(runner):
    async def _count(model, **filters):
        async def _exec(session):
            stmt = select(func.count()).select_from(model)
            for name, value in filters.items():
                stmt = stmt.where(getattr(model, name) == value)
            return (await session.execute(stmt)).scalar_one()
        return await runner.run(_exec)
    return _count
