"""
파일 레코드 저장소

아이템마다 <data_dir>/<key>.txt 파일 하나.
파일 내용은 줄바꿈으로 구분된 사용자 ID.

- append: 추가 모드로 한 줄 기록
- rewrite: 임시 파일에 쓴 뒤 os.replace (아이템 단위 원자적 교체)
- 읽기/쓰기 모두 허용 문자 필터를 거친다
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from core.storage.errors import StorageUnavailableError
from core.utils.sanitize import parse_lines, sanitize_value, sanitize_values

logger = logging.getLogger(__name__)

RECORD_SUFFIX = ".txt"


class FileRecordStore:
    """파일 기반 레코드 저장소

    IRecordStore Protocol 구현.

    Args:
        root: 레코드 디렉토리 (존재해야 함, ensure_root()로 생성)

    사용 예시:
    ```python
    store = FileRecordStore(Paths.WANTS_DIR)
    store.ensure_root()

    await store.append("Golden Hat", "1234")
    users = await store.read("Golden Hat")  # ["1234"]
    ```
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def ensure_root(self) -> None:
        """레코드 디렉토리 생성 (없으면)"""
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, operation: str, key: str) -> Path:
        """키 → 파일 경로

        키는 허용 문자만 남기므로 경로 구분자가 들어갈 수 없다.
        """
        safe_key = sanitize_value(key)
        if not safe_key:
            raise ValueError(f"invalid record key: {key!r}")

        if not self.root.is_dir():
            raise StorageUnavailableError(
                operation, safe_key, f"record directory not found: {self.root}"
            )

        return self.root / f"{safe_key}{RECORD_SUFFIX}"

    # -------------------------------------------------------------------------
    # IRecordStore
    # -------------------------------------------------------------------------

    async def read(self, key: str) -> list[str] | None:
        """레코드 조회 (파일 없으면 None)"""
        path = self._path_for("read", key)
        return await asyncio.to_thread(self._read_sync, path, key)

    async def append(self, key: str, value: str) -> None:
        """한 줄 추가"""
        path = self._path_for("append", key)
        value = sanitize_value(value)
        if not value:
            return
        await asyncio.to_thread(self._append_sync, path, key, value)

    async def rewrite(self, key: str, values: list[str]) -> None:
        """파일 전체 원자적 교체"""
        path = self._path_for("rewrite", key)
        await asyncio.to_thread(self._rewrite_sync, path, key, sanitize_values(values))

    async def keys(self) -> list[str]:
        """저장된 레코드 키 목록 (이름순, 임시 파일 제외)"""
        if not self.root.is_dir():
            raise StorageUnavailableError(
                "keys", "*", f"record directory not found: {self.root}"
            )
        paths = await asyncio.to_thread(sorted, self.root.glob(f"*{RECORD_SUFFIX}"))
        return [p.stem for p in paths if not p.name.startswith(".tmp_")]

    # -------------------------------------------------------------------------
    # 동기 I/O (스레드에서 실행)
    # -------------------------------------------------------------------------

    def _read_sync(self, path: Path, key: str) -> list[str] | None:
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageUnavailableError("read", key, str(e)) from e

        return parse_lines(content)

    def _append_sync(self, path: Path, key: str, value: str) -> None:
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(f"{value}\n")
        except OSError as e:
            raise StorageUnavailableError("append", key, str(e)) from e

    def _rewrite_sync(self, path: Path, key: str, values: list[str]) -> None:
        content = "".join(f"{value}\n" for value in values)

        try:
            # 같은 디렉토리에 임시 파일 생성 (원자적 rename 조건)
            fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=".tmp")
        except OSError as e:
            raise StorageUnavailableError("rewrite", key, str(e)) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(temp_path, path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass  # 이미 rename 되었거나 생성 실패
            raise StorageUnavailableError("rewrite", key, str(e)) from e

        logger.debug(f"Record rewritten: {key} ({len(values)} values)")
