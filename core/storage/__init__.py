"""
스토리지 모듈

Catalog(읽기 전용 아이템 목록)와 Registry(아이템별 필요 사용자) 제공
"""

from core.storage.errors import StorageUnavailableError
from core.storage.catalog import Catalog, CatalogLoadError
from core.storage.registry import Registry

__all__ = [
    "StorageUnavailableError",
    "Catalog",
    "CatalogLoadError",
    "Registry",
]
