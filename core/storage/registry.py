"""
Registry - 아이템별 필요 사용자 저장소

"누가 무엇을 필요로 하는지"의 단일 진실 공급원.
모든 배포(서버)가 하나의 Registry를 공유한다.

레코드 키 구조:
- 키: 정제된 아이템 이름 (예: "Golden Hat")
- 값: 해당 아이템이 필요한 사용자 ID 목록

레코드가 없으면 빈 집합으로 취급하고,
저장소 접근 불가는 StorageUnavailableError로 호출자에게 전달한다.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from core.storage.catalog import Catalog
from core.types import Category
from core.utils.sanitize import sanitize_value, sanitize_values, unique

if TYPE_CHECKING:
    from adapters.interfaces import IRecordStore

logger = logging.getLogger(__name__)


class Registry:
    """필요 목록 저장소

    같은 아이템에 대한 read-modify-write는 아이템별 asyncio.Lock으로 직렬화.
    서로 다른 아이템은 동시에 처리된다.

    Args:
        store: 레코드 저장소 (IRecordStore)
        catalog: 카탈로그 (전체 스캔 / 카테고리 조회용)

    사용 예시:
    ```python
    registry = Registry(FileRecordStore(Paths.WANTS_DIR), catalog)

    await registry.add("Golden Hat", "1234")
    await registry.needs("Golden Hat", "1234")  # True
    await registry.who_needs("Golden Hat")      # ["1234"]
    await registry.forget("1234")
    ```
    """

    def __init__(self, store: "IRecordStore", catalog: Catalog):
        self.store = store
        self.catalog = catalog
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, key: str) -> asyncio.Lock:
        """아이템별 락 (지연 생성)"""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @staticmethod
    def _key(item: str) -> str:
        key = sanitize_value(item)
        if not key:
            raise ValueError(f"invalid item name: {item!r}")
        return key

    async def _read(self, key: str) -> list[str]:
        values = await self.store.read(key)
        if values is None:
            return []
        return unique(sanitize_values(values))

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def who_needs(self, item: str) -> list[str]:
        """아이템이 필요한 사용자 목록

        Returns:
            중복 없는 사용자 ID 목록 (저장 순서, 순서 보장은 하지 않음)
        """
        return await self._read(self._key(item))

    async def needs(self, item: str, user_id: str) -> bool:
        """사용자가 아이템을 필요로 하는지 확인"""
        return sanitize_value(user_id) in await self.who_needs(item)

    async def needed_by(self, user_id: str) -> list[str]:
        """사용자가 필요로 하는 아이템 목록

        카탈로그 전체를 순회한다 (아이템 수에 비례).

        Returns:
            아이템 이름 목록 (카탈로그 순서)
        """
        user_id = sanitize_value(user_id)
        needed: list[str] = []

        for item in self.catalog.all_items:
            if user_id in await self._read(self._key(item)):
                needed.append(item)

        return needed

    def items_in_category(self, category: Category) -> tuple[str, ...]:
        """카테고리의 아이템 (사전순)"""
        return self.catalog.items_in_category(category)

    # -------------------------------------------------------------------------
    # 변경
    # -------------------------------------------------------------------------

    async def add(self, item: str, user_id: str) -> bool:
        """필요 목록에 추가 (멱등)

        Returns:
            True: 새로 추가됨, False: 이미 있었음
        """
        key = self._key(item)
        user_id = sanitize_value(user_id)
        if not user_id:
            raise ValueError("user_id는 비어 있을 수 없습니다")

        async with self._lock_for(key):
            if user_id in await self._read(key):
                return False

            await self.store.append(key, user_id)

        logger.info(f"Need added: {key}", extra={"user_id": user_id})
        return True

    async def remove(self, item: str, user_id: str) -> bool:
        """필요 목록에서 제거 (멱등)

        Returns:
            True: 제거됨, False: 원래 없었음 (쓰기 없음)
        """
        key = self._key(item)
        user_id = sanitize_value(user_id)

        async with self._lock_for(key):
            users = await self._read(key)
            if user_id not in users:
                return False

            await self.store.rewrite(key, [u for u in users if u != user_id])

        logger.info(f"Need removed: {key}", extra={"user_id": user_id})
        return True

    async def forget(self, user_id: str) -> int:
        """모든 아이템에서 사용자 제거

        아이템 단위로 원자적이며 전체로는 원자적이지 않다.
        중간에 실패해도 다시 실행하면 같은 결과로 수렴한다.

        Returns:
            제거된 아이템 수
        """
        removed = 0
        for item in self.catalog.all_items:
            if await self.remove(item, user_id):
                removed += 1

        logger.info(
            f"User forgotten: removed from {removed} items",
            extra={"user_id": sanitize_value(user_id)},
        )
        return removed
