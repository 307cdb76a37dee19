# app/core/database.py

import ssl
from typing import AsyncGenerator

from loguru import logger
from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine
)
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy import text

from app.core.config import settings

DATABASE_URL = settings.DATABASE_URL


# ----------------------------------------------------
# SSL for managed Postgres poolers
# ----------------------------------------------------
def make_ssl(verify: bool = True):
    ctx = ssl.create_default_context()
    if not verify:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


# ----------------------------------------------------
# Engine
# ----------------------------------------------------
def build_engine(url: str):
    if url.startswith("sqlite"):
        # Local dev / tests: one shared connection so :memory: survives
        return create_async_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # AsyncPG config (works behind a transaction pooler)
    connect_args = {
        "ssl": make_ssl(settings.DATABASE_SSL_VERIFY),
        "statement_cache_size": 0,           # disable prepared statements
        "prepared_statement_name_func": None # prevent SQLAlchemy from naming statements
    }
    logger.info("Configuring database (pooler mode)")
    return create_async_engine(
        url,
        echo=False,
        connect_args=connect_args,
        pool_pre_ping=True,
        poolclass=NullPool,       # the pooler handles pooling
    )


engine = build_engine(DATABASE_URL)


# ----------------------------------------------------
# Sessions
# ----------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


# ----------------------------------------------------
# Create tables
# ----------------------------------------------------
async def init_db():
    # Register table metadata before create_all
    from app.models import submission  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


# ----------------------------------------------------
# Test Connection
# ----------------------------------------------------
async def test_connection():
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.debug("DB connection OK")
