"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
여러 명령 태스크가 하나의 연결을 공유하므로 쓰기는 transaction()으로 묶는다.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

logger = logging.getLogger(__name__)


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로 (":memory:" 허용)

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    if db_path_str != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path_str)

    await conn.execute("PRAGMA journal_mode=WAL")
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    logger.info("SQLite 연결 생성", extra={"db_path": db_path_str})

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    Args:
        db_path: DB 파일 경로

    사용 예시:
    ```python
    async with SQLiteAdapter(Paths.WANTS_DB) as db:
        await init_schema(db)

        async with db.transaction() as conn:
            await conn.execute("DELETE FROM want_store WHERE item_key = ?", (key,))
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path
        self._conn: aiosqlite.Connection | None = None
        # 트랜잭션 구간 직렬화 (연결 1개 공유)
        self._write_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        async with self._write_lock:
            try:
                yield self._conn
                await self._conn.commit()
            except Exception:
                await self._conn.rollback()
                raise

    async def table_exists(self, table_name: str) -> bool:
        """테이블 존재 여부 확인"""
        rows = await self.fetchall(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return len(rows) > 0

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    # want_store: 아이템별 필요 사용자 (행 1개 = 멤버십 1건)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS want_store (
            seq         INTEGER PRIMARY KEY AUTOINCREMENT,
            item_key    TEXT NOT NULL,
            user_id     TEXT NOT NULL,
            created_at  TEXT NOT NULL DEFAULT (datetime('now')),

            UNIQUE(item_key, user_id)
        )
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_want_store_user
        ON want_store(user_id)
    """)

    await adapter.commit()
    logger.info("want_store 스키마 초기화 완료")
