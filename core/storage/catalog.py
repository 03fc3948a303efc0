"""
Catalog - 카테고리별 코스메틱 목록

프로세스 시작 시 한 번 로드하고 이후 읽기 전용.
카테고리마다 <catalog_dir>/<Category>.txt 파일 (줄바꿈 구분 아이템 이름).
새 아이템 추가는 파일 갱신 후 재시작.
"""

import logging
from pathlib import Path

from core.types import Category
from core.utils.sanitize import parse_lines, unique

logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """카탈로그 로드 실패 예외"""
    pass


class Catalog:
    """코스메틱 카탈로그

    Args:
        items_by_category: {카테고리: 아이템 목록}. 설정 순서를 유지해야 함.

    사용 예시:
    ```python
    catalog = Catalog.load(Paths.CATALOG_DIR, settings.catalog.categories)

    for category in catalog.categories:
        print(category.name, len(catalog.items_in_category(category)))
    ```
    """

    def __init__(self, items_by_category: dict[Category, list[str]]):
        self._categories: tuple[Category, ...] = tuple(items_by_category.keys())
        self._items: dict[str, tuple[str, ...]] = {}
        self._by_key: dict[str, Category] = {}

        all_items: list[str] = []
        for category, items in items_by_category.items():
            # 카테고리 내 중복 제거 후 사전순 정렬
            cleaned = unique([item for item in items if item])
            self._items[category.key] = tuple(sorted(cleaned))
            self._by_key[category.key] = category
            all_items.extend(cleaned)

        self._all_items: tuple[str, ...] = tuple(unique(all_items))

    @classmethod
    def load(cls, catalog_dir: Path, categories: tuple[Category, ...]) -> "Catalog":
        """카탈로그 디렉토리에서 로드

        Args:
            catalog_dir: 카탈로그 파일 디렉토리
            categories: 설정에 정의된 카테고리 (순서 유지)

        Returns:
            Catalog 인스턴스

        Raises:
            CatalogLoadError: 파일이 없거나 읽을 수 없는 경우
        """
        items_by_category: dict[Category, list[str]] = {}

        for category in categories:
            path = catalog_dir / category.catalog_file
            try:
                content = path.read_text(encoding="utf-8", errors="ignore")
            except OSError as e:
                raise CatalogLoadError(f"could not read {path}: {e}") from e

            items = parse_lines(content)
            items_by_category[category] = items

            logger.info(f"카탈로그 로드: {category.name} ({len(items)}개)")

        return cls(items_by_category)

    @property
    def categories(self) -> tuple[Category, ...]:
        """카테고리 목록 (설정 순서)"""
        return self._categories

    @property
    def all_items(self) -> tuple[str, ...]:
        """전체 아이템 (카테고리 로드 순서, 중복 제거)"""
        return self._all_items

    def get_category(self, key: str) -> Category | None:
        """키로 카테고리 조회"""
        return self._by_key.get(key)

    def items_in_category(self, category: Category) -> tuple[str, ...]:
        """카테고리의 아이템 (사전순)

        Raises:
            KeyError: 카탈로그에 없는 카테고리
        """
        return self._items[category.key]

    def contains(self, category: Category, item: str) -> bool:
        """카테고리에 아이템이 있는지 확인"""
        return item in self._items.get(category.key, ())

    def __len__(self) -> int:
        return len(self._all_items)
