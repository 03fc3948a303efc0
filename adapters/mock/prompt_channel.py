"""
Mock 프롬프트 채널

테스트용 IPromptChannel / IPromptHandle 구현.
전송된 메시지와 수정/삭제 이력을 기록하고,
스크립트된 응답 이벤트를 순서대로 전달한다.
"""

import asyncio
from dataclasses import dataclass, field

from adapters.models import (
    ButtonPressed,
    ControlRow,
    InteractionEvent,
    ItemsSelected,
    SelectMenu,
)


@dataclass
class NoticeRecord:
    """개인 알림 기록"""

    user_id: str
    content: str


class MockPromptHandle:
    """Mock 메시지 핸들

    IPromptHandle Protocol 구현.
    await_response는 핸들 자체 큐를 먼저 확인하고,
    비어 있으면 채널의 스크립트 큐에서 기다린다.
    """

    def __init__(
        self,
        channel: "MockPromptChannel",
        content: str,
        controls: list[ControlRow] | None,
        private: bool,
    ):
        self.channel = channel
        self.content = content
        self.controls: list[ControlRow] = list(controls or [])
        self.private = private
        self.deleted = False
        self.history: list[str] = [content]
        self.wait_count = 0
        self._queue: asyncio.Queue[InteractionEvent] = asyncio.Queue()

    async def edit(
        self,
        content: str,
        controls: list[ControlRow] | None = None,
    ) -> None:
        """메시지 수정"""
        if self.deleted:
            raise RuntimeError("cannot edit a deleted message")
        self.content = content
        self.controls = list(controls or [])
        self.history.append(content)

    async def delete(self) -> None:
        """메시지 삭제"""
        self.deleted = True

    async def await_response(self, timeout: float) -> InteractionEvent | None:
        """응답 1건 대기 (타임아웃 시 None)"""
        self.wait_count += 1

        if not self._queue.empty():
            return self._queue.get_nowait()

        try:
            return await asyncio.wait_for(self.channel.script.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def inject(self, event: InteractionEvent) -> None:
        """이 메시지에 응답 주입"""
        self._queue.put_nowait(event)

    @property
    def menus(self) -> list[SelectMenu]:
        """선택 메뉴 목록"""
        return [row for row in self.controls if isinstance(row, SelectMenu)]

    @property
    def menu_values(self) -> list[str]:
        """모든 선택 메뉴의 옵션 값 (표시 순서)"""
        return [value for menu in self.menus for value in menu.values]


class MockPromptChannel:
    """Mock 프롬프트 채널

    IPromptChannel Protocol 구현.

    사용 예시:
    ```python
    channel = MockPromptChannel()
    channel.press("claim", user_id="B")

    handle = await channel.send("pick one", controls=[...])
    event = await handle.await_response(timeout=0.1)  # ButtonPressed("claim", "B")
    ```
    """

    def __init__(self, *events: InteractionEvent):
        self.script: asyncio.Queue[InteractionEvent] = asyncio.Queue()
        self.sent: list[MockPromptHandle] = []
        self.notices: list[NoticeRecord] = []

        for event in events:
            self.script.put_nowait(event)

    async def send(
        self,
        content: str,
        controls: list[ControlRow] | None = None,
        private: bool = False,
    ) -> MockPromptHandle:
        """메시지 전송"""
        handle = MockPromptHandle(self, content, controls, private)
        self.sent.append(handle)
        return handle

    async def send_private_notice(self, user_id: str, content: str) -> None:
        """개인 알림"""
        self.notices.append(NoticeRecord(user_id=user_id, content=content))

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def queue(self, event: InteractionEvent) -> InteractionEvent:
        """스크립트 큐에 이벤트 추가"""
        self.script.put_nowait(event)
        return event

    def press(self, control_id: str, user_id: str) -> InteractionEvent:
        """버튼 클릭 예약"""
        return self.queue(ButtonPressed(control_id=control_id, user_id=user_id))

    def select(self, control_id: str, value: str, user_id: str) -> InteractionEvent:
        """메뉴 선택 예약"""
        return self.queue(
            ItemsSelected(control_id=control_id, values=(value,), user_id=user_id)
        )

    @property
    def pending(self) -> int:
        """아직 소비되지 않은 스크립트 이벤트 수"""
        return self.script.qsize()

    @property
    def visible(self) -> list[MockPromptHandle]:
        """삭제되지 않은 메시지"""
        return [handle for handle in self.sent if not handle.deleted]

    @property
    def last(self) -> MockPromptHandle | None:
        """마지막으로 전송된 메시지"""
        return self.sent[-1] if self.sent else None

    def contents(self) -> list[str]:
        """전송된 메시지의 현재 본문 목록"""
        return [handle.content for handle in self.sent]
