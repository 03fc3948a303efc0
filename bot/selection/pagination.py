"""
아이템 페이지 구성

카테고리 아이템을 메뉴 단위(최대 options_per_menu개)로 자르고,
메뉴를 페이지 단위(최대 menus_per_page개)로 묶는다.
모든 아이템은 정확히 한 페이지, 한 메뉴에 한 번만 나타난다.
"""

from core.constants import Defaults

Page = list[list[str]]


def chunk(items: list[str] | tuple[str, ...], size: int) -> list[list[str]]:
    """고정 크기 묶음으로 자르기 (마지막 묶음은 더 작을 수 있음)"""
    if size < 1:
        raise ValueError("size는 1 이상이어야 합니다")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def paginate(
    items: list[str] | tuple[str, ...],
    options_per_menu: int = Defaults.OPTIONS_PER_MENU,
    menus_per_page: int = Defaults.MENUS_PER_PAGE,
) -> list[Page]:
    """아이템 → 페이지 목록

    Returns:
        페이지 목록. 각 페이지는 메뉴(아이템 리스트)의 리스트.
        아이템이 없으면 빈 리스트.

    Example:
        >>> paginate(["a", "b", "c"], options_per_menu=2, menus_per_page=1)
        [[['a', 'b']], [['c']]]
    """
    menus = chunk(items, options_per_menu)
    return chunk_pages(menus, menus_per_page)


def chunk_pages(menus: list[list[str]], menus_per_page: int) -> list[Page]:
    if menus_per_page < 1:
        raise ValueError("menus_per_page는 1 이상이어야 합니다")
    return [menus[i:i + menus_per_page] for i in range(0, len(menus), menus_per_page)]


class PageCursor:
    """현재 페이지 위치 (양방향 순환)

    Args:
        page_count: 전체 페이지 수 (1 이상)
    """

    def __init__(self, page_count: int):
        if page_count < 1:
            raise ValueError("page_count는 1 이상이어야 합니다")
        self.page_count = page_count
        self.index = 0

    def next(self) -> int:
        """다음 페이지 (마지막 → 첫 페이지)"""
        self.index = (self.index + 1) % self.page_count
        return self.index

    def previous(self) -> int:
        """이전 페이지 (첫 페이지 → 마지막)"""
        self.index = (self.index - 1) % self.page_count
        return self.index
