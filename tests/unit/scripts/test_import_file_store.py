"""
파일 저장소 → SQLite 가져오기 테스트
"""

from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio

from adapters.db.record_store import SQLiteRecordStore
from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.file.record_store import FileRecordStore
from scripts.import_file_store import import_records, main


@pytest.fixture
def source(temp_dir: Path) -> FileRecordStore:
    root = temp_dir / "database"
    root.mkdir()
    (root / "Golden Hat.txt").write_text("A\nB\n", encoding="utf-8")
    (root / "Hoodie.txt").write_text("B\n", encoding="utf-8")
    (root / "Beanie.txt").write_text("", encoding="utf-8")
    return FileRecordStore(root)


@pytest_asyncio.fixture
async def db() -> AsyncIterator[SQLiteAdapter]:
    """인메모리 SQLite (스키마 포함)"""
    async with SQLiteAdapter(":memory:") as adapter:
        await init_schema(adapter)
        yield adapter


class TestImportRecords:
    """import_records 테스트"""

    @pytest.mark.asyncio
    async def test_copies_all_records(self, source: FileRecordStore, db: SQLiteAdapter) -> None:
        target = SQLiteRecordStore(db)

        result = await import_records(source, target)

        assert result == {"items": 2, "users": 3}
        assert await target.read("Golden Hat") == ["A", "B"]
        assert await target.read("Hoodie") == ["B"]
        assert await target.read("Beanie") is None

    @pytest.mark.asyncio
    async def test_idempotent(self, source: FileRecordStore, db: SQLiteAdapter) -> None:
        """두 번 실행해도 같은 결과"""
        target = SQLiteRecordStore(db)

        await import_records(source, target)
        await import_records(source, target)

        assert await target.read("Golden Hat") == ["A", "B"]


@pytest.mark.asyncio
async def test_main_creates_database(source: FileRecordStore, temp_dir: Path) -> None:
    db_path = temp_dir / "wants.db"

    await main(source.root, db_path)

    async with SQLiteAdapter(db_path) as db:
        assert await SQLiteRecordStore(db).read("Hoodie") == ["B"]

