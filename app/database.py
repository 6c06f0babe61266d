import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from app.config import settings

logger = logging.getLogger(__name__)


def async_database_url(url: str) -> str:
    """Ensure we use an async driver for the configured database."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


def make_engine(url: str, echo: bool = False) -> AsyncEngine:
    url = async_database_url(url)
    engine = create_async_engine(url, echo=echo)

    # SQLite only checks foreign keys when asked to, per connection.
    if engine.dialect.name == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


SQLALCHEMY_DATABASE_URL = async_database_url(settings.database_url)

engine = make_engine(SQLALCHEMY_DATABASE_URL, echo=settings.SQL_ECHO)

# Async session factory
AsyncSessionLocal = make_sessionmaker(engine)

Base = declarative_base()


async def init_models(bind: AsyncEngine = engine):
    # Import models so they register on Base.metadata
    from app.models import user, tasks  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("[DB] Tables ready on %s", bind.url.render_as_string(hide_password=True))


async def get_db():
    async with AsyncSessionLocal() as db:
        try:
            yield db
        finally:
            await db.close()
