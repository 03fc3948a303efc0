"""
Bot Bootstrap

설정 로드, 의존성 주입, 메인 루프 관리.

구성 순서:
1. 설정 (config/settings.yaml)
2. Registry 저장소 (file / sqlite)
3. 카탈로그 → Registry
4. Selection / Claim / Erasure 흐름 → 명령 핸들러 → Command Processor
5. 채널 입력 루프
"""

import asyncio
import logging
import sys
from typing import Any, TextIO

from adapters.console.channel import ConsoleChannel
from adapters.db.record_store import SQLiteRecordStore
from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.file.record_store import FileRecordStore
from adapters.interfaces import INotifier, IRecordStore
from adapters.slack.notifier import SlackNotifier
from core.config.loader import Settings, SettingsLoadError, get_settings
from core.constants import Defaults
from core.logging import setup_logging
from core.storage.catalog import Catalog, CatalogLoadError
from core.storage.registry import Registry
from core.types import StorageBackend

from bot.claim.negotiation import ClaimNegotiation
from bot.command.context import CommandContext
from bot.command.handlers import CommandHandlers
from bot.command.processor import CommandProcessor
from bot.erasure.forget import BulkErasure
from bot.selection.flow import SelectionFlow

logger = logging.getLogger("bot")


class BotEngine:
    """Bot 엔진

    모든 컴포넌트를 초기화하고 채널 입력 루프 실행.

    Args:
        settings: 설정 객체
    """

    def __init__(self, settings: Settings):
        self.settings = settings

        self.db: SQLiteAdapter | None = None
        self.store: IRecordStore | None = None
        self.notifier: INotifier | None = None

        self.catalog: Catalog | None = None
        self.registry: Registry | None = None
        self.processor: CommandProcessor | None = None

    async def initialize(self) -> None:
        """컴포넌트 초기화

        Raises:
            CatalogLoadError: 카탈로그 파일 읽기 실패
        """
        logger.info("Bot 엔진 초기화 시작")

        self.store = await self._create_store()

        self.catalog = Catalog.load(
            self.settings.catalog.catalog_dir,
            self.settings.catalog.categories,
        )
        logger.info(
            f"카탈로그 로드: {len(self.catalog)} items, "
            f"{len(self.catalog.categories)} categories"
        )

        self.registry = Registry(self.store, self.catalog)

        timeouts = self.settings.timeouts
        selection = self.settings.selection

        handlers = CommandHandlers(
            registry=self.registry,
            selection=SelectionFlow(
                self.catalog,
                prompt_timeout=timeouts.prompt_sec,
                options_per_menu=selection.options_per_menu,
                menus_per_page=selection.menus_per_page,
            ),
            negotiation=ClaimNegotiation(self.registry, timeout=timeouts.claim_sec),
            erasure=BulkErasure(self.registry, timeout=timeouts.prompt_sec),
        )

        if self.settings.slack.enabled:
            self.notifier = SlackNotifier(
                webhook_url=self.settings.slack.webhook_url,
                channel=self.settings.slack.channel,
            )
            logger.info("Slack 알림 활성화")

        self.processor = CommandProcessor(handlers, notifier=self.notifier)

        logger.info("Bot 엔진 초기화 완료")

    async def _create_store(self) -> IRecordStore:
        """설정된 백엔드로 레코드 저장소 생성"""
        storage = self.settings.storage

        if storage.backend == StorageBackend.SQLITE:
            self.db = SQLiteAdapter(storage.db_path)
            await self.db.connect()
            await init_schema(self.db)
            logger.info(f"Storage: sqlite ({storage.db_path})")
            return SQLiteRecordStore(self.db)

        store = FileRecordStore(storage.data_dir)
        store.ensure_root()
        logger.info(f"Storage: file ({storage.data_dir})")
        return store

    async def run(self, channel: ConsoleChannel, stream: TextIO | None = None) -> None:
        """채널 입력 루프 실행 (입력이 끝날 때까지)

        Args:
            channel: 명령 / 응답을 주고받을 채널
            stream: 입력 스트림 (기본 stdin)
        """
        if self.processor is None:
            raise RuntimeError("initialize()를 먼저 호출해야 합니다")

        processor = self.processor

        def on_command(name: str, user_id: str) -> None:
            processor.dispatch(name, CommandContext(user_id=user_id, channel=channel))

        await channel.run(on_command, stream=stream)

    async def stop(self) -> None:
        """진행 중인 명령 대기 후 자원 정리"""
        logger.info("Bot 엔진 종료 중...")

        if self.processor is not None:
            await self.processor.drain()
            logger.info(f"Command 통계: {self.processor.get_stats()}")

        if isinstance(self.notifier, SlackNotifier):
            await self.notifier.close()

        if self.db is not None:
            await self.db.close()

        logger.info("Bot 엔진 종료 완료")

    def get_status(self) -> dict[str, Any]:
        """엔진 상태"""
        return {
            "backend": self.settings.storage.backend.value,
            "catalog_items": len(self.catalog) if self.catalog else 0,
            "notifier": self.notifier is not None,
            "commands": self.processor.get_stats() if self.processor else None,
        }


async def main() -> None:
    """Bot 메인 함수"""
    setup_logging("bot", console_level=Defaults.LOG_LEVEL)

    logger.info("=" * 60)
    logger.info("Cosmetic Share Bot 시작")
    logger.info("=" * 60)

    # 1. 설정 로드
    try:
        settings = get_settings()
    except SettingsLoadError as e:
        logger.error(f"설정 로드 실패: {e}")
        sys.exit(1)

    logger.info(f"Backend: {settings.storage.backend.value}")
    logger.info(f"Catalog: {settings.catalog.catalog_dir}")

    # 2. 엔진 생성 및 초기화
    engine = BotEngine(settings)

    try:
        await engine.initialize()
    except CatalogLoadError as e:
        logger.error(f"카탈로그 로드 실패: {e}")
        await engine.stop()
        sys.exit(1)

    logger.info("Bot 입력 루프 시작 (종료: quit 또는 Ctrl+D)")

    try:
        # 3. 입력 루프
        await engine.run(ConsoleChannel())

    except asyncio.CancelledError:
        logger.info("메인 루프 취소됨")
    except KeyboardInterrupt:
        logger.info("Ctrl+C 감지")
    finally:
        # 4. 엔진 종료
        await engine.stop()

    logger.info("=" * 60)
    logger.info("Cosmetic Share Bot 정상 종료")
    logger.info("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
