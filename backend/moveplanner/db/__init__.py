"""
Database Layer - Async SQLAlchemy engine + session factory.
"""
import logging
from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase
from moveplanner import config

logger = logging.getLogger("moveplanner-db")


class Base(DeclarativeBase):
    pass


def normalize_database_url(raw_url: str) -> str:
    """Force the async driver for PostgreSQL URLs (Heroku/Railway style URLs)."""
    url = raw_url
    if url.startswith("postgresql://") and "+asyncpg" not in url:
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


def build_engine(raw_url: str, echo: bool = False) -> AsyncEngine:
    url = normalize_database_url(raw_url)
    if url.startswith("sqlite"):
        new_engine = create_async_engine(url, echo=echo)

        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection.
        # The driver's own transaction handling is disabled so that SAVEPOINTs nest properly.
        @event.listens_for(new_engine.sync_engine, "connect")
        def _configure_sqlite(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(new_engine.sync_engine, "begin")
        def _sqlite_begin(conn):
            conn.exec_driver_sql("BEGIN")

        return new_engine

    return create_async_engine(
        url,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        echo=echo,
        pool_timeout=5,
    )


DATABASE_URL = normalize_database_url(config.DATABASE_URL)

engine = build_engine(DATABASE_URL, echo=config.DB_ECHO)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db(target_engine: AsyncEngine | None = None) -> None:
    """Create tables and seed the reference catalogs. Safe to run on every startup."""
    from moveplanner.models import orm_models  # noqa: F401
    from moveplanner.db.seed import seed_reference_data

    target_engine = target_engine or engine
    async with target_engine.begin() as conn:
        if config.DB_RESET_ON_STARTUP:
            logger.warning("DB_RESET_ON_STARTUP=true, dropping all tables")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(target_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        await seed_reference_data(session)
        await session.commit()

    logger.info("Database tables initialized.")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
