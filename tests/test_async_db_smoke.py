# tests/test_async_db_smoke.py
import pytest
from sqlalchemy import func, select, text

from catalog_api.db.session_async import AsyncSessionLocal, run_in_transaction
from catalog_api.models.catalog import Category


@pytest.mark.asyncio
async def test_async_engine_executes_simple_query() -> None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(text("SELECT 1"))
        assert result.scalar_one() == 1


@pytest.mark.asyncio
async def test_run_in_transaction_commits_successfully() -> None:
    async def _operation(session):
        session.add(Category(name="Committed"))
        return "done"

    assert await run_in_transaction(_operation) == "done"

    async with AsyncSessionLocal() as session:
        total = (await session.execute(select(func.count(Category.id)))).scalar_one()
        assert total == 1


@pytest.mark.asyncio
async def test_run_in_transaction_rolls_back_on_error() -> None:
    async def _operation(session):
        session.add(Category(name="Discarded"))
        await session.flush()
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await run_in_transaction(_operation)

    async with AsyncSessionLocal() as session:
        total = (await session.execute(select(func.count(Category.id)))).scalar_one()
        assert total == 0


@pytest.mark.asyncio
async def test_sqlite_connections_enforce_foreign_keys() -> None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(text("PRAGMA foreign_keys"))
        assert result.scalar_one() == 1
