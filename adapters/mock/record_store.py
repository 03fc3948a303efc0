"""
Mock 레코드 저장소

테스트용 인메모리 IRecordStore 구현.
"""

import asyncio

from core.storage.errors import StorageUnavailableError


class InMemoryRecordStore:
    """인메모리 레코드 저장소

    IRecordStore Protocol 구현.
    매 호출마다 이벤트 루프에 제어권을 넘겨 동시 실행 경합을 재현할 수 있다.

    Args:
        should_fail: True면 모든 호출이 StorageUnavailableError (장애 시나리오용)
    """

    def __init__(self, should_fail: bool = False):
        self.should_fail = should_fail
        self.records: dict[str, list[str]] = {}
        self.write_count = 0

    def _check(self, operation: str, key: str) -> None:
        if self.should_fail:
            raise StorageUnavailableError(operation, key, "mock storage offline")

    async def read(self, key: str) -> list[str] | None:
        self._check("read", key)
        await asyncio.sleep(0)
        values = self.records.get(key)
        return list(values) if values is not None else None

    async def append(self, key: str, value: str) -> None:
        self._check("append", key)
        await asyncio.sleep(0)
        self.records.setdefault(key, []).append(value)
        self.write_count += 1

    async def rewrite(self, key: str, values: list[str]) -> None:
        self._check("rewrite", key)
        await asyncio.sleep(0)
        self.records[key] = list(values)
        self.write_count += 1
