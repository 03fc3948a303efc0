"""
로깅 설정 유틸리티

Bot 프로세스와 운영 스크립트에서 사용하는 공통 로깅 설정.
- 콘솔: INFO 레벨
- 파일: INFO 레벨 (TimedRotatingFileHandler, daily)
- logger.info(..., extra={"user_id": ...})의 컨텍스트 필드는 줄 끝에 [key=value]로 표시

사용법:
    from core.logging import setup_logging
    setup_logging("bot")                          # Bot용 로거 설정
    setup_logging("import_file_store", "DEBUG")   # 스크립트용 (레벨 이름 허용)
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


# 로그 설정 상수
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7  # 최대 7일치 파일 유지

# extra로 전달되는 컨텍스트 필드 (표시 순서)
CONTEXT_FIELDS = (
    "user_id",
    "finder_id",
    "claimant_id",
    "interaction_id",
    "notified",
    "removed",
    "state",
    "db_path",
    "error",
)

# 불필요한 로그를 생성하는 로거 목록 (레벨 조정 대상)
NOISY_LOGGERS = [
    "aiosqlite",      # DB 쿼리마다 executing/completed 로그 (매우 많음)
    "httpcore",       # HTTP 연결 상세 로그
    "httpx",          # Slack webhook 요청 로그
    "asyncio",        # 비동기 이벤트 루프 로그
]


class ContextFormatter(logging.Formatter):
    """컨텍스트 필드를 메시지 뒤에 붙이는 Formatter

    Example:
        2026-10-19 12:00:00 | INFO     | core.storage.registry | Need added: Golden Hat [user_id=1234]
    """

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)

        context = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        ]
        if not context:
            return line
        return f"{line} [{', '.join(context)}]"


def to_level(level: int | str) -> int:
    """레벨 이름("INFO") 또는 숫자 → logging 레벨

    Raises:
        ValueError: 알 수 없는 레벨 이름
    """
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level!r}")
    return resolved


def get_log_dir(process_name: str) -> Path:
    """프로세스별 로그 디렉토리"""
    if process_name == "bot":
        return Paths.BOT_LOGS_DIR
    return Paths.LOGS_DIR


def setup_logging(
    process_name: str,
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """로깅 설정 초기화

    Daily 롤링으로 매일 자정에 새 파일 생성.
    다시 호출하면 기존 핸들러를 교체한다.

    Args:
        process_name: 프로세스 이름 ("bot" 또는 스크립트 이름)
        console_level: 콘솔 로그 레벨 (숫자 또는 이름)
        file_level: 파일 로그 레벨 (숫자 또는 이름)
        log_dir: 로그 디렉토리 (None이면 프로세스별 기본 경로)

    Returns:
        설정된 루트 Logger
    """
    console_level = to_level(console_level)
    file_level = to_level(file_level)

    if log_dir is None:
        log_dir = get_log_dir(process_name)

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{process_name}.log"

    # 루트는 DEBUG로 설정 (핸들러에서 필터링)
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = ContextFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"  # bot.log.2026-10-19
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(
        f"로깅 초기화 완료: {process_name} "
        f"(console={logging.getLevelName(console_level)}, "
        f"file={log_file} {logging.getLevelName(file_level)})"
    )

    return root_logger


def get_log_file_path(process_name: str) -> Path:
    """로그 파일 경로"""
    return get_log_dir(process_name) / f"{process_name}.log"
