"""Tests for engine construction and table creation."""

from sqlalchemy import inspect

from wigs.core.database import DEFAULT_DATABASE_URL, build_engine, create_tables, database_url


def test_database_url_default(monkeypatch):
    monkeypatch.delenv("WIGS_DATABASE_URL", raising=False)
    assert database_url() == DEFAULT_DATABASE_URL


def test_database_url_from_env(monkeypatch):
    monkeypatch.setenv("WIGS_DATABASE_URL", "sqlite+aiosqlite:///tmp.db")
    assert database_url() == "sqlite+aiosqlite:///tmp.db"


async def test_sqlite_engine_creates_wigs_table(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'wigs.db'}")
    try:
        await create_tables(engine)
        async with engine.connect() as conn:
            columns = await conn.run_sync(
                lambda sync_conn: {c["name"] for c in inspect(sync_conn).get_columns("wigs")}
            )
        assert columns == {"id", "goal", "description", "created_at", "updated_at"}
    finally:
        await engine.dispose()
