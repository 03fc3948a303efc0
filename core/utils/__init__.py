"""
유틸리티 패키지

저장소 입출력 시 문자 필터링 등 공통 유틸리티
"""

from core.utils.sanitize import (
    ALLOWED_CHARACTERS,
    filter_allowed_characters,
    sanitize_value,
    sanitize_values,
    parse_lines,
    unique,
)

__all__ = [
    "ALLOWED_CHARACTERS",
    "filter_allowed_characters",
    "sanitize_value",
    "sanitize_values",
    "parse_lines",
    "unique",
]
