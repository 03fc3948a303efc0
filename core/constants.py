"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수 (settings.yaml에 값이 없을 때 사용)"""

    STORAGE_BACKEND: str = "file"

    # 카테고리 순서가 곧 선택 메뉴 순서
    CATEGORIES: tuple[str, ...] = (
        "Hat",
        "Top",
        "Bottom",
        "Accessory",
        "Vest",
        "Belt",
    )

    PROMPT_TIMEOUT_SEC: float = 60.0
    CLAIM_TIMEOUT_SEC: float = 180.0  # 3분

    OPTIONS_PER_MENU: int = 25
    MENUS_PER_PAGE: int = 4

    LOG_LEVEL: str = "INFO"


class PlatformLimits:
    """채팅 플랫폼 제약 (설정값 검증용 상한)"""

    # 선택 메뉴 하나에 들어가는 최대 옵션 수
    MAX_OPTIONS_PER_MENU: int = 25

    # 메시지당 컴포넌트 행은 5개, 그중 1행은 페이지 버튼
    MAX_MENUS_PER_PAGE: int = 4


class ControlIds:
    """프롬프트 컨트롤 ID (버튼 / 메뉴)"""

    CATEGORY_MENU: str = "category"

    PAGE_BACK: str = "back"
    PAGE_NEXT: str = "next"

    CLAIM: str = "claim"
    CANCEL: str = "cancel"
    ALREADY_HAVE: str = "have"

    CONFIRM_YES: str = "yes"
    CONFIRM_NO: str = "no"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    CATALOG_DIR: Path = PROJECT_ROOT / "cosmetics"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    BOT_LOGS_DIR: Path = LOGS_DIR / "bot"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # 저장소
    WANTS_DIR: Path = DATA_DIR / "database"
    WANTS_DB: Path = DATA_DIR / "wants.db"
