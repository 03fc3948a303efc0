"""
데이터베이스 어댑터

SQLite WAL 모드 연결 관리 및 want_store 레코드 저장소.
"""

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    init_schema,
)
from adapters.db.record_store import SQLiteRecordStore

__all__ = [
    "SQLiteAdapter",
    "create_connection",
    "init_schema",
    "SQLiteRecordStore",
]
