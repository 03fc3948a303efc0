"""
SQLite 레코드 저장소

want_store 테이블 위에서 IRecordStore를 구현.
레코드 하나 = 같은 item_key를 가진 행들 (seq 순서).
"""

import logging

import aiosqlite

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.errors import StorageUnavailableError
from core.utils.sanitize import sanitize_value, sanitize_values, unique

logger = logging.getLogger(__name__)


class SQLiteRecordStore:
    """SQLite 기반 레코드 저장소

    IRecordStore Protocol 구현.
    append는 INSERT OR IGNORE, rewrite는 DELETE + INSERT 한 트랜잭션.

    Args:
        db: 연결된 SQLiteAdapter (init_schema 완료 상태)
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    def _check_connected(self, operation: str, key: str) -> None:
        if not self.db.is_connected:
            raise StorageUnavailableError(operation, key, "database not connected")

    async def read(self, key: str) -> list[str] | None:
        """레코드 조회 (행이 없으면 None)"""
        key = sanitize_value(key)
        self._check_connected("read", key)

        try:
            rows = await self.db.fetchall(
                """
                SELECT user_id
                FROM want_store
                WHERE item_key = ?
                ORDER BY seq
                """,
                (key,),
            )
        except aiosqlite.Error as e:
            raise StorageUnavailableError("read", key, str(e)) from e

        if not rows:
            return None

        return sanitize_values([row[0] for row in rows])

    async def append(self, key: str, value: str) -> None:
        """값 추가 (이미 있으면 무시)"""
        key = sanitize_value(key)
        value = sanitize_value(value)
        self._check_connected("append", key)

        if not value:
            return

        try:
            async with self.db.transaction() as conn:
                await conn.execute(
                    "INSERT OR IGNORE INTO want_store (item_key, user_id) VALUES (?, ?)",
                    (key, value),
                )
        except aiosqlite.Error as e:
            raise StorageUnavailableError("append", key, str(e)) from e

    async def rewrite(self, key: str, values: list[str]) -> None:
        """레코드 전체 교체"""
        key = sanitize_value(key)
        self._check_connected("rewrite", key)
        values = unique(sanitize_values(values))

        try:
            async with self.db.transaction() as conn:
                await conn.execute("DELETE FROM want_store WHERE item_key = ?", (key,))
                await conn.executemany(
                    "INSERT INTO want_store (item_key, user_id) VALUES (?, ?)",
                    [(key, value) for value in values],
                )
        except aiosqlite.Error as e:
            raise StorageUnavailableError("rewrite", key, str(e)) from e

        logger.debug(f"Record rewritten: {key} ({len(values)} values)")
