"""Database connection utilities."""

import logging
import sys
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from thesis_registry.config import get_settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()

# Global engine and session factory
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_db_url() -> str:
    """Build database URL from settings.

    A full DATABASE_URL takes precedence over the individual DB_* parts.
    """
    settings = get_settings()
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    return (
        f"postgresql+asyncpg://{settings.DB_USER}:{settings.DB_PASSWORD}"
        f"@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(db_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given URL.

    SQLite connections get foreign-key enforcement switched on so that
    referential integrity behaves the same as on PostgreSQL.

    Args:
        db_url: SQLAlchemy database URL.
        echo: Whether to log emitted SQL.

    Returns:
        Configured AsyncEngine.
    """
    settings = get_settings()
    if make_url(db_url).get_backend_name() == "sqlite":
        engine = create_async_engine(db_url, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        db_url,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,  # Verify connections before using
    )


def get_db_engine() -> AsyncEngine:
    """Get or create database engine."""
    global _engine
    if _engine is None:
        _engine = build_engine(get_db_url(), echo=get_settings().DEBUG)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_db_engine(), class_=AsyncSession, expire_on_commit=False
        )
    return _session_factory


async def verify_db_connection() -> None:
    """Verify database connection. Raises exception if connection fails."""
    engine = get_db_engine()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def run_migrations() -> None:
    """Run database migrations using Alembic."""
    import asyncio

    from alembic import command
    from alembic.config import Config

    project_root = Path(__file__).resolve().parents[2]
    alembic_ini_path = project_root / "alembic.ini"

    if not alembic_ini_path.exists():
        raise FileNotFoundError(
            f"Alembic configuration file not found at {alembic_ini_path}"
        )

    alembic_cfg = Config(str(alembic_ini_path))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    # configparser interpolates %, so escape it in passwords
    alembic_cfg.set_main_option("sqlalchemy.url", get_db_url().replace("%", "%%"))
    alembic_cfg.attributes["configure_logger"] = False

    # env.py drives its own event loop, so keep it off ours
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")


async def init_db() -> None:
    """Initialize database connection and run migrations.

    Exits application if connection fails.
    """
    try:
        if get_settings().RUN_MIGRATIONS:
            await run_migrations()
        await verify_db_connection()
        logger.info("Database initialized")
    except Exception as e:
        logger.critical(f"Failed to initialize database: {e}")
        print(f"Failed to initialize database: {e}", file=sys.stderr)
        sys.exit(1)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for one request.

    The session is always closed when the request finishes; anything left
    uncommitted is rolled back.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def close_db() -> None:
    """Close database connections."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
