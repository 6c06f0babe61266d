import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from app.database import Base, make_engine, make_sessionmaker
from app.dependencies import get_db
from app.main import app
from app.models.tasks import Task
from app.models.user import User


@pytest.fixture()
async def engine(tmp_path):
    # A file database so every session sees the same data, like a real server
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_sessionmaker(engine)


@pytest.fixture()
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def client(session_factory):
    # Override dependency
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def count_rows(session_factory):
    """Count rows from a fresh session, independent of the one under test."""
    async def _count(model) -> int:
        async with session_factory() as session:
            return (await session.execute(select(func.count()).select_from(model))).scalar()
    return _count


@pytest.fixture()
def snapshot(count_rows):
    async def _snapshot() -> tuple[int, int]:
        return await count_rows(User), await count_rows(Task)
    return _snapshot
