"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from dataclasses import dataclass
from enum import Enum


class StorageBackend(str, Enum):
    """Registry 저장소 종류"""

    FILE = "file"
    SQLITE = "sqlite"


class ButtonStyle(str, Enum):
    """버튼 스타일 (렌더링은 채널 어댑터 몫)"""

    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"
    SUCCESS = "SUCCESS"
    DANGER = "DANGER"


class ClaimOutcome(str, Enum):
    """클레임 협상 결과"""

    CLAIMED = "CLAIMED"
    CANCELLED = "CANCELLED"
    TIMED_OUT = "TIMED_OUT"
    ABORTED = "ABORTED"  # 잘못된 응답으로 중단


class ErasureOutcome(str, Enum):
    """일괄 삭제 결과"""

    CONFIRMED = "CONFIRMED"
    DECLINED = "DECLINED"
    TIMED_OUT = "TIMED_OUT"
    ABORTED = "ABORTED"


@dataclass(frozen=True)
class Category:
    """코스메틱 카테고리

    설정 파일에서 로드되는 열린 열거형.

    Attributes:
        key: 선택 메뉴 값으로 쓰이는 ID (예: "0")
        name: 표시 이름 (예: Hat)
        catalog_file: 카탈로그 파일 이름 (예: Hat.txt)
    """

    key: str
    name: str
    catalog_file: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ClaimResult:
    """클레임 협상 결과

    Attributes:
        outcome: 종료 상태
        item: 협상 대상 아이템
        finder_id: 아이템을 찾은 사용자
        claimant_id: 클레임한 사용자 (CLAIMED일 때만)
        notified: 공지 시점에 아이템이 필요했던 사용자 목록
    """

    outcome: ClaimOutcome
    item: str
    finder_id: str
    claimant_id: str | None = None
    notified: tuple[str, ...] = ()
