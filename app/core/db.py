# app/core/db.py

import ssl
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool
from sqlalchemy import event

from app.core.config import (
    DATABASE_URL,
    DB_TYPE,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    SQLITE_BUSY_TIMEOUT_MS,
    APP_ENV,
)

Base = declarative_base()


# =====================================================
# CONNECTION OPTIONS PER BACKEND
# =====================================================
def _postgres_options() -> tuple[dict, dict]:
    ssl_ctx = ssl.create_default_context()
    if not DB_SSL_VERIFY:
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    connect_args = {
        "ssl": ssl_ctx,
        # pgbouncer in transaction mode cannot hold prepared statements
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
    }
    pool_args = {
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }
    return connect_args, pool_args


def _sqlite_options() -> tuple[dict, dict]:
    # aiosqlite connections are bound to the event loop that opened them
    return {"check_same_thread": False}, {"poolclass": NullPool}


connect_args, pool_args = (
    _postgres_options() if DB_TYPE == "postgres" else _sqlite_options()
)

engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    connect_args=connect_args,
    **pool_args,
)


# =====================================================
# SQLITE CONNECTION SETUP
# =====================================================
if DB_TYPE == "sqlite":
    @event.listens_for(engine.sync_engine, "connect")
    def configure_sqlite_connection(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        # ON DELETE RESTRICT / SET NULL on inventory and transfers need this
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
        cursor.close()


# =====================================================
# SESSION
# =====================================================
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request. Services commit exactly once; anything left
    uncommitted when the request fails is rolled back here."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


import app.models  # noqa


# =====================================================
# DEV ONLY: SCHEMA MANAGEMENT
# =====================================================
def _require_development(action: str):
    if APP_ENV != "development":
        raise RuntimeError(f"{action} is forbidden outside development")


async def init_models():
    _require_development("init_models()")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def reset_models():
    """Drop and recreate every table. Used by the test suite."""
    _require_development("reset_models()")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
