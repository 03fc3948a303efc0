"""
Erasure 모듈

사용자 전체 삭제 (확인 프롬프트 포함)
"""

from bot.erasure.forget import BulkErasure

__all__ = [
    "BulkErasure",
]
