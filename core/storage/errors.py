"""
스토리지 예외

레코드 없음(빈 집합)과 저장소 접근 불가(오류)를 구분한다.
"""


class StorageUnavailableError(Exception):
    """저장소에 접근할 수 없음

    레코드가 없는 경우에는 발생하지 않는다 (빈 집합으로 취급).

    Args:
        operation: 실패한 작업 (read, append, rewrite)
        key: 대상 레코드 키
        reason: 원인 설명
    """

    def __init__(self, operation: str, key: str | None, reason: str):
        self.operation = operation
        self.key = key
        self.reason = reason
        target = f" '{key}'" if key else ""
        super().__init__(f"Storage unavailable during {operation}{target}: {reason}")
