"""
Command Processor

명령 이름을 핸들러로 연결하고, 호출마다 독립된 asyncio Task로 실행.
명령 처리의 유일한 오류 경계:
- StorageUnavailableError → 호출자에게 개인 메시지 + 운영자 알림
- 알 수 없는 명령 → 호출자에게 개인 메시지
어떤 오류도 프로세스를 종료시키지 않는다.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, TYPE_CHECKING

from bot.command.context import CommandContext
from bot.command.handlers import CommandHandlers
from core.storage.errors import StorageUnavailableError

if TYPE_CHECKING:
    from adapters.interfaces import INotifier

logger = logging.getLogger(__name__)


STORAGE_FAILURE_MESSAGE = "The database is unavailable right now, please try again later"

Handler = Callable[[CommandContext], Awaitable[Any]]


class CommandProcessor:
    """Command 프로세서

    Args:
        handlers: 명령 핸들러 모음
        notifier: 운영자 알림 (선택)

    사용 예시:
    ```python
    processor = CommandProcessor(handlers, notifier=slack_notifier)

    # 메인 루프: 호출마다 Task 생성
    processor.dispatch("needsomething", CommandContext("1234", channel))

    # 종료 시 진행 중인 명령 대기
    await processor.drain()
    ```
    """

    def __init__(
        self,
        handlers: CommandHandlers,
        notifier: "INotifier | None" = None,
    ):
        self.handlers = handlers
        self.notifier = notifier

        self._routes: dict[str, Handler] = {
            "foundsomething": handlers.found,
            "needsomething": handlers.need,
            "dontneed": handlers.unneed,
            "whatdoineed": handlers.what_do_i_need,
            "forgetme": handlers.forget_me,
            "help": handlers.help,
        }
        self._tasks: set[asyncio.Task] = set()

        # 통계
        self._processed_count = 0
        self._success_count = 0
        self._failed_count = 0
        self._unknown_count = 0

    @property
    def commands(self) -> tuple[str, ...]:
        """등록된 명령 이름"""
        return tuple(self._routes)

    @property
    def in_flight(self) -> int:
        """실행 중인 명령 수"""
        return len(self._tasks)

    def dispatch(self, name: str, ctx: CommandContext) -> asyncio.Task:
        """명령을 독립 Task로 실행

        Returns:
            생성된 Task (완료 시 추적 목록에서 제거)
        """
        task = asyncio.create_task(self.process(name, ctx), name=f"command:{name}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def process(self, name: str, ctx: CommandContext) -> bool:
        """명령 1건 처리

        Returns:
            True: 정상 처리, False: 실패 또는 알 수 없는 명령
        """
        handler = self._routes.get(name)
        if handler is None:
            self._unknown_count += 1
            logger.warning(f"Unknown command: {name}", extra={"user_id": ctx.user_id})
            await ctx.reply_private(f"Unknown command `/{name}`, use `/help` to see what I can do")
            return False

        self._processed_count += 1

        try:
            await handler(ctx)

        except StorageUnavailableError as e:
            self._failed_count += 1
            logger.error(
                f"Command failed: {name}",
                extra={"user_id": ctx.user_id, "error": str(e)},
            )
            await self._report_storage_failure(name, ctx, e)
            return False

        except Exception as e:
            self._failed_count += 1
            logger.exception(
                f"Command processing error: {name}",
                extra={"user_id": ctx.user_id, "error": str(e)},
            )
            return False

        self._success_count += 1
        logger.info(
            f"Command completed: {name}",
            extra={"user_id": ctx.user_id},
        )
        return True

    async def _report_storage_failure(
        self,
        name: str,
        ctx: CommandContext,
        error: StorageUnavailableError,
    ) -> None:
        await ctx.reply_private(STORAGE_FAILURE_MESSAGE)

        if self.notifier is not None:
            await self.notifier.send_storage_alert(
                command=name,
                user_id=ctx.user_id,
                error=str(error),
            )

    async def drain(self) -> None:
        """진행 중인 명령이 모두 끝날 때까지 대기"""
        while self._tasks:
            tasks = list(self._tasks)
            await asyncio.gather(*tasks, return_exceptions=True)
            self._tasks.difference_update(tasks)

    def get_stats(self) -> dict[str, Any]:
        """통계 반환"""
        return {
            "processed_count": self._processed_count,
            "success_count": self._success_count,
            "failed_count": self._failed_count,
            "unknown_count": self._unknown_count,
            "in_flight": self.in_flight,
        }

    def reset_stats(self) -> None:
        """통계 초기화"""
        self._processed_count = 0
        self._success_count = 0
        self._failed_count = 0
        self._unknown_count = 0
