"""
Selection 모듈

카테고리 → 아이템 선택 프롬프트
"""

from bot.selection.flow import SelectionFlow
from bot.selection.pagination import PageCursor, paginate

__all__ = [
    "SelectionFlow",
    "PageCursor",
    "paginate",
]
