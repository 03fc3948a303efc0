"""
pytest 공통 fixture 정의

카탈로그, Registry, 설정 파일 fixture
"""

import tempfile
from pathlib import Path

import pytest

from adapters.mock.record_store import InMemoryRecordStore
from core.storage.catalog import Catalog
from core.storage.registry import Registry
from core.types import Category


HAT = Category(key="0", name="Hat", catalog_file="Hat.txt")
TOP = Category(key="1", name="Top", catalog_file="Top.txt")
BELT = Category(key="2", name="Belt", catalog_file="Belt.txt")


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def categories() -> tuple[Category, ...]:
    """테스트용 카테고리 (Hat, Top, Belt)"""
    return (HAT, TOP, BELT)


@pytest.fixture
def catalog() -> Catalog:
    """테스트용 카탈로그

    Belt는 빈 카테고리.
    """
    return Catalog({
        HAT: ["Golden Hat", "Top Hat", "Beanie"],
        TOP: ["Hoodie", "Tank Top"],
        BELT: [],
    })


@pytest.fixture
def store() -> InMemoryRecordStore:
    """인메모리 레코드 저장소"""
    return InMemoryRecordStore()


@pytest.fixture
def registry(store: InMemoryRecordStore, catalog: Catalog) -> Registry:
    """인메모리 Registry"""
    return Registry(store, catalog)


@pytest.fixture
def catalog_dir(temp_dir: Path) -> Path:
    """카탈로그 파일 디렉토리 (Hat / Top / Belt)"""
    directory = temp_dir / "cosmetics"
    directory.mkdir()
    (directory / "Hat.txt").write_text("Top Hat\nGolden Hat\n\nBeanie\n", encoding="utf-8")
    (directory / "Top.txt").write_text("Hoodie\nTank Top\n", encoding="utf-8")
    (directory / "Belt.txt").write_text("", encoding="utf-8")
    return directory


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = f"""# 테스트용 settings.yaml
storage:
  backend: sqlite
  data_dir: {temp_dir / "database"}
  db_path: {temp_dir / "wants.db"}

catalog:
  dir: {temp_dir / "cosmetics"}
  categories:
    - Hat
    - name: Top
      key: top
      file: tops.txt

timeouts:
  prompt_sec: 30
  claim_sec: 90

selection:
  options_per_menu: 10
  menus_per_page: 2

slack:
  webhook_url: "https://hooks.slack.com/services/T000/B000/XXXX"
  channel: "#ops"
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path
