"""
설정 로더

settings.yaml 로드 및 검증.
섹션이 없으면 Defaults 값을 사용한다.

settings.yaml 예시:
    storage:
      backend: file          # file | sqlite
      data_dir: data/database
      db_path: data/wants.db
    catalog:
      dir: cosmetics
      categories:
        - name: Hat
        - name: Top
          key: "1"
          file: Top.txt
    timeouts:
      prompt_sec: 60
      claim_sec: 180
    selection:
      options_per_menu: 25
      menus_per_page: 4
    slack:
      webhook_url: ""
      channel: ""
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths, PlatformLimits, PROJECT_ROOT
from core.types import Category, StorageBackend


@dataclass(frozen=True)
class StorageConfig:
    """Registry 저장소 설정"""

    backend: StorageBackend
    data_dir: Path
    db_path: Path


@dataclass(frozen=True)
class CatalogConfig:
    """카탈로그 설정

    categories 순서가 곧 카테고리 선택 메뉴 순서
    """

    catalog_dir: Path
    categories: tuple[Category, ...]


@dataclass(frozen=True)
class TimeoutConfig:
    """응답 대기 시간 (초)"""

    prompt_sec: float
    claim_sec: float


@dataclass(frozen=True)
class SelectionConfig:
    """아이템 선택 페이지 구성"""

    options_per_menu: int
    menus_per_page: int


@dataclass(frozen=True)
class SlackConfig:
    """운영 알림 (Slack webhook) 설정"""

    webhook_url: str
    channel: str | None

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)


@dataclass(frozen=True)
class BotConfig:
    """전체 설정

    불변 데이터 구조로 설정 변경 방지
    """

    storage: StorageConfig
    catalog: CatalogConfig
    timeouts: TimeoutConfig
    selection: SelectionConfig
    slack: SlackConfig


class SettingsLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _resolve_path(value: Any, default: Path, base_dir: Path) -> Path:
    """상대 경로는 프로젝트 루트 기준"""
    if not value:
        return default
    path = Path(str(value))
    return path if path.is_absolute() else base_dir / path


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션은 매핑이어야 합니다")
    return section


def _parse_storage(data: dict[str, Any], base_dir: Path) -> StorageConfig:
    section = _section(data, "storage")

    backend_str = str(section.get("backend", Defaults.STORAGE_BACKEND)).lower()
    try:
        backend = StorageBackend(backend_str)
    except ValueError as e:
        valid = [b.value for b in StorageBackend]
        raise SettingsLoadError(
            f"유효하지 않은 storage.backend입니다: '{backend_str}'. 유효한 값: {valid}"
        ) from e

    return StorageConfig(
        backend=backend,
        data_dir=_resolve_path(section.get("data_dir"), Paths.WANTS_DIR, base_dir),
        db_path=_resolve_path(section.get("db_path"), Paths.WANTS_DB, base_dir),
    )


def parse_categories(entries: list[Any]) -> tuple[Category, ...]:
    """카테고리 목록 파싱

    항목은 문자열(이름) 또는 {name, key, file} 매핑.
    key 기본값은 순번 문자열 ("0", "1", ...).

    Raises:
        SettingsLoadError: 비어 있거나 이름/키 중복
    """
    if not entries:
        raise SettingsLoadError("catalog.categories가 비어 있습니다")

    categories: list[Category] = []
    seen_names: set[str] = set()
    seen_keys: set[str] = set()

    for index, entry in enumerate(entries):
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or not entry.get("name"):
            raise SettingsLoadError(f"catalog.categories[{index}]에 'name'이 없습니다")

        name = str(entry["name"]).strip()
        key = str(entry.get("key", index)).strip()
        catalog_file = str(entry.get("file") or f"{name}.txt")

        if name in seen_names:
            raise SettingsLoadError(f"카테고리 이름 중복: {name}")
        if key in seen_keys:
            raise SettingsLoadError(f"카테고리 key 중복: {key}")

        seen_names.add(name)
        seen_keys.add(key)
        categories.append(Category(key=key, name=name, catalog_file=catalog_file))

    return tuple(categories)


def _parse_catalog(data: dict[str, Any], base_dir: Path) -> CatalogConfig:
    section = _section(data, "catalog")

    entries = section.get("categories")
    if entries is None:
        entries = list(Defaults.CATEGORIES)
    if not isinstance(entries, list):
        raise SettingsLoadError("catalog.categories는 리스트여야 합니다")

    return CatalogConfig(
        catalog_dir=_resolve_path(section.get("dir"), Paths.CATALOG_DIR, base_dir),
        categories=parse_categories(entries),
    )


def _parse_timeouts(data: dict[str, Any]) -> TimeoutConfig:
    section = _section(data, "timeouts")

    try:
        prompt_sec = float(section.get("prompt_sec", Defaults.PROMPT_TIMEOUT_SEC))
        claim_sec = float(section.get("claim_sec", Defaults.CLAIM_TIMEOUT_SEC))
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(f"timeouts 값은 숫자여야 합니다: {e}") from e

    if prompt_sec <= 0 or claim_sec <= 0:
        raise SettingsLoadError("timeouts 값은 0보다 커야 합니다")

    return TimeoutConfig(prompt_sec=prompt_sec, claim_sec=claim_sec)


def _parse_selection(data: dict[str, Any]) -> SelectionConfig:
    section = _section(data, "selection")

    try:
        options_per_menu = int(section.get("options_per_menu", Defaults.OPTIONS_PER_MENU))
        menus_per_page = int(section.get("menus_per_page", Defaults.MENUS_PER_PAGE))
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(f"selection 값은 정수여야 합니다: {e}") from e

    if not 1 <= options_per_menu <= PlatformLimits.MAX_OPTIONS_PER_MENU:
        raise SettingsLoadError(
            f"selection.options_per_menu는 1~{PlatformLimits.MAX_OPTIONS_PER_MENU} 범위여야 합니다"
        )
    if not 1 <= menus_per_page <= PlatformLimits.MAX_MENUS_PER_PAGE:
        raise SettingsLoadError(
            f"selection.menus_per_page는 1~{PlatformLimits.MAX_MENUS_PER_PAGE} 범위여야 합니다"
        )

    return SelectionConfig(options_per_menu=options_per_menu, menus_per_page=menus_per_page)


def _parse_slack(data: dict[str, Any]) -> SlackConfig:
    section = _section(data, "slack")
    channel = section.get("channel") or None
    return SlackConfig(
        webhook_url=str(section.get("webhook_url") or ""),
        channel=str(channel) if channel else None,
    )


def parse_config(data: dict[str, Any], base_dir: Path = PROJECT_ROOT) -> BotConfig:
    """설정 딕셔너리 → BotConfig

    Args:
        data: yaml.safe_load 결과
        base_dir: 상대 경로 기준 디렉토리

    Raises:
        SettingsLoadError: 형식이 잘못된 경우
    """
    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml은 매핑이어야 합니다")

    return BotConfig(
        storage=_parse_storage(data, base_dir),
        catalog=_parse_catalog(data, base_dir),
        timeouts=_parse_timeouts(data),
        selection=_parse_selection(data),
        slack=_parse_slack(data),
    )


def load_config(path: Path | None = None) -> BotConfig:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        BotConfig 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        data = {}

    return parse_config(data)


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: BotConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(settings_path)

    @property
    def config(self) -> BotConfig:
        """전체 설정"""
        assert self._config is not None
        return self._config

    @property
    def storage(self) -> StorageConfig:
        assert self._config is not None
        return self._config.storage

    @property
    def catalog(self) -> CatalogConfig:
        assert self._config is not None
        return self._config.catalog

    @property
    def timeouts(self) -> TimeoutConfig:
        assert self._config is not None
        return self._config.timeouts

    @property
    def selection(self) -> SelectionConfig:
        assert self._config is not None
        return self._config.selection

    @property
    def slack(self) -> SlackConfig:
        assert self._config is not None
        return self._config.slack

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
