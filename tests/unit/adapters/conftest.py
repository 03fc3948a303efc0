"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.file.record_store import FileRecordStore
from adapters.mock.notifier import MockNotifier


@pytest.fixture
def mock_notifier() -> MockNotifier:
    """Mock Notifier"""
    return MockNotifier()


@pytest.fixture
def file_store(tmp_path: Path) -> FileRecordStore:
    """파일 저장소 (디렉토리 생성 완료)"""
    store = FileRecordStore(tmp_path / "database")
    store.ensure_root()
    return store


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[SQLiteAdapter, None]:
    """인메모리 DB (스키마 초기화 완료)"""
    adapter = SQLiteAdapter(":memory:")
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()
