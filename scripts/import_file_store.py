"""
파일 저장소 → SQLite 가져오기

파일 백엔드(<data_dir>/<item>.txt)의 필요 목록을 SQLite want_store 테이블로 복사.
이미 있는 (아이템, 사용자) 쌍은 건너뛰므로 여러 번 실행해도 결과가 같다.

사용법:
    python -m scripts.import_file_store
    python -m scripts.import_file_store --data-dir data/database --db data/wants.db
"""

import argparse
import asyncio
import logging
from pathlib import Path

from adapters.db.record_store import SQLiteRecordStore
from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.file.record_store import FileRecordStore
from core.constants import Paths

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def import_records(source: FileRecordStore, target: SQLiteRecordStore) -> dict[str, int]:
    """모든 레코드 복사

    Returns:
        {"items": 처리한 아이템 수, "users": 처리한 (아이템, 사용자) 쌍 수}
    """
    items = 0
    users = 0

    for key in await source.keys():
        values = await source.read(key)
        if not values:
            continue

        for user_id in values:
            await target.append(key, user_id)
            users += 1
        items += 1

        logger.debug(f"{key}: {len(values)} users")

    return {"items": items, "users": users}


async def main(data_dir: Path, db_path: Path) -> None:
    """가져오기 실행

    Args:
        data_dir: 파일 저장소 디렉토리
        db_path: SQLite DB 경로
    """
    logger.info(f"가져오기 시작: {data_dir} → {db_path}")

    source = FileRecordStore(data_dir)

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        result = await import_records(source, SQLiteRecordStore(db))

    logger.info(f"가져오기 완료 ✓ items={result['items']}, users={result['users']}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="파일 저장소의 필요 목록을 SQLite로 가져오기"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Paths.WANTS_DIR,
        help=f"파일 저장소 디렉토리 (기본: {Paths.WANTS_DIR})",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=Paths.WANTS_DB,
        help=f"SQLite DB 경로 (기본: {Paths.WANTS_DB})",
    )
    args = parser.parse_args()

    asyncio.run(main(args.data_dir, args.db))
