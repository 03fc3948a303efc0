"""
SQLite 어댑터 테스트

SQLiteAdapter 및 관련 함수 테스트.
"""

from pathlib import Path

import aiosqlite
import pytest

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    init_schema,
)


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_create_connection(self, tmp_path: Path) -> None:
        """연결 생성 (WAL 모드)"""
        db_path = tmp_path / "test.db"

        conn = await create_connection(db_path)
        try:
            cursor = await conn.execute("PRAGMA journal_mode")
            row = await cursor.fetchone()
            assert row[0].lower() == "wal"
        finally:
            await conn.close()

        assert db_path.exists()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """상위 디렉토리 자동 생성"""
        db_path = tmp_path / "nested" / "dir" / "test.db"

        conn = await create_connection(db_path)
        await conn.close()

        assert db_path.parent.is_dir()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        """async with 연결/종료"""
        adapter = SQLiteAdapter(":memory:")

        async with adapter as db:
            assert db.is_connected is True

        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_init_schema(self, db: SQLiteAdapter) -> None:
        """want_store 테이블 생성"""
        assert await db.table_exists("want_store") is True
        assert await db.table_exists("nope") is False

    @pytest.mark.asyncio
    async def test_init_schema_idempotent(self, db: SQLiteAdapter) -> None:
        """두 번 실행해도 오류 없음"""
        await init_schema(db)

        assert await db.table_exists("want_store") is True

    @pytest.mark.asyncio
    async def test_transaction_commit(self, db: SQLiteAdapter) -> None:
        """트랜잭션 커밋"""
        async with db.transaction() as conn:
            await conn.execute(
                "INSERT INTO want_store (item_key, user_id) VALUES (?, ?)",
                ("Golden Hat", "A"),
            )

        rows = await db.fetchall("SELECT user_id FROM want_store")
        assert [row[0] for row in rows] == ["A"]

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, db: SQLiteAdapter) -> None:
        """예외 발생 시 롤백"""
        with pytest.raises(RuntimeError):
            async with db.transaction() as conn:
                await conn.execute(
                    "INSERT INTO want_store (item_key, user_id) VALUES (?, ?)",
                    ("Golden Hat", "A"),
                )
                raise RuntimeError("boom")

        rows = await db.fetchall("SELECT user_id FROM want_store")
        assert rows == []

    @pytest.mark.asyncio
    async def test_unique_pair(self, db: SQLiteAdapter) -> None:
        """(item_key, user_id)는 유일"""
        await db.execute(
            "INSERT INTO want_store (item_key, user_id) VALUES (?, ?)", ("Golden Hat", "A")
        )

        with pytest.raises(aiosqlite.IntegrityError):
            await db.execute(
                "INSERT INTO want_store (item_key, user_id) VALUES (?, ?)", ("Golden Hat", "A")
            )
