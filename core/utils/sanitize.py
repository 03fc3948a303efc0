"""
문자 필터링 유틸리티

저장소에 쓰거나 읽는 모든 값(아이템 이름, 사용자 ID)은 허용 문자만 남긴다.
허용 문자: ASCII 영숫자, 공백, 작은/큰따옴표, 하이픈, #, 괄호.
레코드 단위 텍스트는 줄바꿈을 기준으로 항목을 나눈다.
"""

import string

ALLOWED_CHARACTERS: frozenset[str] = frozenset(
    string.ascii_letters + string.digits + " '\"-#()"
)

# 레코드(여러 줄 텍스트)에서는 줄바꿈도 유지
ALLOWED_RECORD_CHARACTERS: frozenset[str] = ALLOWED_CHARACTERS | {"\n"}


def filter_allowed_characters(text: str) -> str:
    """허용되지 않은 문자 제거 (단일 값용, 줄바꿈도 제거)

    Example:
        >>> filter_allowed_characters("Golden Hat; rm -rf")
        'Golden Hat rm -rf'
    """
    return "".join(c for c in text if c in ALLOWED_CHARACTERS)


def sanitize_value(value: str) -> str:
    """단일 값 정리: 필터링 후 양끝 공백 제거"""
    return filter_allowed_characters(value).strip()


def parse_lines(text: str) -> list[str]:
    """레코드 텍스트를 항목 리스트로 변환

    줄 단위로 자른 뒤 각 줄을 필터링한다.
    빈 줄(공백만 있는 줄 포함)은 항목을 만들지 않는다.

    Args:
        text: 줄바꿈으로 구분된 원본 텍스트

    Returns:
        정리된 항목 리스트 (원래 순서 유지)

    Example:
        >>> parse_lines("Golden Hat\\n; rm -rf\\n\\n")
        ['Golden Hat', 'rm -rf']
    """
    filtered = "".join(c for c in text if c in ALLOWED_RECORD_CHARACTERS)

    values: list[str] = []
    for line in filtered.split("\n"):
        line = line.strip()
        if line:
            values.append(line)
    return values


def sanitize_values(values: list[str]) -> list[str]:
    """값 리스트 정리 (빈 값 제거)"""
    cleaned: list[str] = []
    for value in values:
        value = sanitize_value(value)
        if value:
            cleaned.append(value)
    return cleaned


def unique(values: list[str]) -> list[str]:
    """순서를 유지하며 중복 제거"""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
