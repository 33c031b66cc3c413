"""Shared fixtures for wigs tests.

DAO, service-integration and end-to-end tests run against an in-memory
SQLite database through aiosqlite; every test gets a fresh schema, so
autoincrement ids start at 1.
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wigs.core.database import create_tables

SQLITE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    """In-memory engine with all tables created; one shared connection."""
    eng = create_async_engine(
        SQLITE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    """Provide a transactional session that rolls back after each test."""
    async with session_factory() as sess:
        async with sess.begin():
            yield sess
            await sess.rollback()
