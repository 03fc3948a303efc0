"""
SQLite 레코드 저장소 테스트

want_store 테이블 기반 IRecordStore
"""

import pytest

from adapters.db.record_store import SQLiteRecordStore
from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.errors import StorageUnavailableError


@pytest.fixture
def store(db: SQLiteAdapter) -> SQLiteRecordStore:
    return SQLiteRecordStore(db)


class TestSQLiteRecordStore:
    """read / append / rewrite 테스트"""

    @pytest.mark.asyncio
    async def test_missing_record(self, store: SQLiteRecordStore) -> None:
        """행이 없으면 None"""
        assert await store.read("Golden Hat") is None

    @pytest.mark.asyncio
    async def test_append_keeps_order(self, store: SQLiteRecordStore) -> None:
        """추가 순서대로 조회"""
        await store.append("Golden Hat", "B")
        await store.append("Golden Hat", "A")

        assert await store.read("Golden Hat") == ["B", "A"]

    @pytest.mark.asyncio
    async def test_append_ignores_duplicate(self, store: SQLiteRecordStore) -> None:
        """같은 쌍은 한 번만"""
        await store.append("Golden Hat", "A")
        await store.append("Golden Hat", "A")

        assert await store.read("Golden Hat") == ["A"]

    @pytest.mark.asyncio
    async def test_records_isolated(self, store: SQLiteRecordStore) -> None:
        """아이템별로 분리"""
        await store.append("Golden Hat", "A")
        await store.append("Top Hat", "B")

        assert await store.read("Golden Hat") == ["A"]
        assert await store.read("Top Hat") == ["B"]

    @pytest.mark.asyncio
    async def test_rewrite(self, store: SQLiteRecordStore) -> None:
        """전체 교체"""
        await store.append("Golden Hat", "A")
        await store.append("Golden Hat", "B")

        await store.rewrite("Golden Hat", ["B", "C", "C"])

        assert await store.read("Golden Hat") == ["B", "C"]

    @pytest.mark.asyncio
    async def test_rewrite_empty(self, store: SQLiteRecordStore) -> None:
        """빈 목록으로 교체하면 레코드 없음"""
        await store.append("Golden Hat", "A")

        await store.rewrite("Golden Hat", [])

        assert await store.read("Golden Hat") is None

    @pytest.mark.asyncio
    async def test_sanitizes(self, store: SQLiteRecordStore) -> None:
        """키 / 값 필터링"""
        await store.append("Golden Hat;", "A\n")

        assert await store.read("Golden Hat") == ["A"]


class TestSQLiteRecordStoreFailure:
    """연결 장애 테스트"""

    @pytest.mark.asyncio
    async def test_not_connected(self) -> None:
        """연결 전에는 StorageUnavailableError"""
        store = SQLiteRecordStore(SQLiteAdapter(":memory:"))

        with pytest.raises(StorageUnavailableError, match="not connected"):
            await store.read("Golden Hat")

    @pytest.mark.asyncio
    async def test_missing_table(self) -> None:
        """스키마가 없으면 aiosqlite 오류를 StorageUnavailableError로 변환"""
        async with SQLiteAdapter(":memory:") as db:
            store = SQLiteRecordStore(db)

            with pytest.raises(StorageUnavailableError):
                await store.append("Golden Hat", "A")
