"""
Catalog 테스트

카탈로그 파일 로드, 정렬, 중복 제거
"""

from pathlib import Path

import pytest

from core.storage.catalog import Catalog, CatalogLoadError
from core.types import Category


class TestCatalogLoad:
    """Catalog.load 테스트"""

    def test_load(self, catalog_dir: Path, categories: tuple[Category, ...]) -> None:
        """파일에서 로드, 카테고리 내 사전순"""
        catalog = Catalog.load(catalog_dir, categories)

        hat, top, belt = categories
        assert catalog.categories == categories
        assert catalog.items_in_category(hat) == ("Beanie", "Golden Hat", "Top Hat")
        assert catalog.items_in_category(top) == ("Hoodie", "Tank Top")
        assert catalog.items_in_category(belt) == ()
        assert len(catalog) == 5

    def test_missing_file(self, temp_dir: Path) -> None:
        """카탈로그 파일이 없으면 CatalogLoadError"""
        category = Category(key="0", name="Hat", catalog_file="Hat.txt")

        with pytest.raises(CatalogLoadError, match="Hat.txt"):
            Catalog.load(temp_dir, (category,))

    def test_sanitizes_items(self, temp_dir: Path) -> None:
        """허용되지 않은 문자는 제거"""
        category = Category(key="0", name="Hat", catalog_file="Hat.txt")
        (temp_dir / "Hat.txt").write_text("Golden Hat!\n../Top Hat\n", encoding="utf-8")

        catalog = Catalog.load(temp_dir, (category,))

        assert catalog.items_in_category(category) == ("Golden Hat", "Top Hat")


class TestCatalog:
    """Catalog 조회 테스트"""

    def test_duplicates_removed(self) -> None:
        """카테고리 내 중복 제거"""
        hat = Category(key="0", name="Hat", catalog_file="Hat.txt")
        catalog = Catalog({hat: ["B", "A", "B"]})

        assert catalog.items_in_category(hat) == ("A", "B")

    def test_all_items_unique_across_categories(self) -> None:
        """all_items는 카테고리 간에도 중복 없음"""
        hat = Category(key="0", name="Hat", catalog_file="Hat.txt")
        top = Category(key="1", name="Top", catalog_file="Top.txt")
        catalog = Catalog({hat: ["Top Hat", "Beanie"], top: ["Top Hat", "Hoodie"]})

        assert catalog.all_items == ("Top Hat", "Beanie", "Hoodie")

    def test_get_category(self, catalog: Catalog) -> None:
        """키로 카테고리 조회"""
        assert catalog.get_category("1").name == "Top"
        assert catalog.get_category("99") is None

    def test_contains(self, catalog: Catalog, categories: tuple[Category, ...]) -> None:
        """카테고리 소속 확인"""
        hat, top, _ = categories

        assert catalog.contains(hat, "Golden Hat") is True
        assert catalog.contains(top, "Golden Hat") is False

    def test_unknown_category(self, catalog: Catalog) -> None:
        """카탈로그에 없는 카테고리"""
        unknown = Category(key="x", name="Cape", catalog_file="Cape.txt")

        with pytest.raises(KeyError):
            catalog.items_in_category(unknown)

    def test_restartable(self, catalog: Catalog, categories: tuple[Category, ...]) -> None:
        """여러 번 조회해도 같은 결과"""
        hat = categories[0]

        assert catalog.items_in_category(hat) == catalog.items_in_category(hat)
