"""
SQLite 어댑터 테스트

SQLiteAdapter 및 관련 함수 테스트.
"""

from pathlib import Path

import pytest

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    init_schema,
    is_memory_path,
)
from core.types import EntityType


class TestIsMemoryPath:
    def test_memory(self) -> None:
        assert is_memory_path(":memory:")

    def test_file(self, tmp_path: Path) -> None:
        assert not is_memory_path(tmp_path / "test.db")


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_create_connection(self, tmp_path: Path) -> None:
        """파일 DB는 WAL 모드"""
        db_path = tmp_path / "test.db"

        conn = await create_connection(db_path)

        cursor = await conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        assert row[0].upper() == "WAL"

        await conn.close()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """부모 디렉토리 생성"""
        db_path = tmp_path / "subdir" / "test.db"

        conn = await create_connection(db_path)

        assert db_path.parent.exists()

        await conn.close()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest.mark.asyncio
    async def test_connect_and_close(self) -> None:
        adapter = SQLiteAdapter()

        await adapter.connect()
        assert adapter.is_connected

        await adapter.close()
        assert not adapter.is_connected

    @pytest.mark.asyncio
    async def test_execute_without_connection(self) -> None:
        adapter = SQLiteAdapter()

        with pytest.raises(RuntimeError):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        async with SQLiteAdapter(":memory:") as adapter:
            row = await adapter.fetchone("SELECT 1")
            assert row == (1,)
        assert not adapter.is_connected

    @pytest.mark.asyncio
    async def test_transaction_commit(self) -> None:
        async with SQLiteAdapter() as adapter:
            await adapter.execute("CREATE TABLE t (v INTEGER)")

            async with adapter.transaction() as conn:
                await conn.execute("INSERT INTO t VALUES (1)")

            rows = await adapter.fetchall("SELECT v FROM t")
            assert rows == [(1,)]

    @pytest.mark.asyncio
    async def test_transaction_rollback(self) -> None:
        """예외 시 롤백 후 예외 전파"""
        async with SQLiteAdapter() as adapter:
            await adapter.execute("CREATE TABLE t (v INTEGER)")
            await adapter.commit()

            with pytest.raises(ValueError):
                async with adapter.transaction() as conn:
                    await conn.execute("INSERT INTO t VALUES (1)")
                    raise ValueError("boom")

            rows = await adapter.fetchall("SELECT v FROM t")
            assert rows == []


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_creates_collection_tables(self) -> None:
        async with SQLiteAdapter() as adapter:
            await init_schema(adapter)

            for entity_type in EntityType:
                assert await _table_exists(adapter, entity_type.value)

    @pytest.mark.asyncio
    async def test_idempotent(self) -> None:
        async with SQLiteAdapter() as adapter:
            await init_schema(adapter)
            await init_schema(adapter)

            assert await _table_exists(adapter, "accounts")


async def _table_exists(adapter: SQLiteAdapter, name: str) -> bool:
    row = await adapter.fetchone(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (name,)
    )
    return row is not None
