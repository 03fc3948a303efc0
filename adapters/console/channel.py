"""
Console 프롬프트 채널

로컬 실행용 IPromptChannel 구현 (python -m bot).
메시지와 컨트롤은 stdout에 출력하고, stdin 한 줄을 명령 또는 응답으로 해석한다.

입력 형식:
    /needsomething              명령 실행
    press claim                 버튼 클릭
    select 0 Golden Hat         메뉴 선택
    @alice press have           다른 사용자로 실행
    quit                        종료
"""

import asyncio
import logging
import sys
from dataclasses import dataclass
from itertools import count
from typing import Callable, TextIO

from adapters.models import (
    Button,
    ButtonPressed,
    ButtonRow,
    ControlRow,
    InteractionEvent,
    ItemsSelected,
    SelectMenu,
)

logger = logging.getLogger(__name__)


EXIT_WORDS = frozenset({"quit", "exit"})

# (명령 이름, 사용자 ID)
CommandCallback = Callable[[str, str], object]


@dataclass(frozen=True)
class ConsoleInput:
    """파싱된 입력 한 줄

    Attributes:
        user_id: 실행 사용자
        kind: "command" | "press" | "select" | "quit"
        target: 명령 이름 / 버튼 ID / 메뉴 ID
        value: 선택값 (select만)
    """

    user_id: str
    kind: str
    target: str = ""
    value: str | None = None


def parse_line(line: str, default_user: str) -> ConsoleInput | None:
    """입력 한 줄 해석

    Returns:
        ConsoleInput, 빈 줄이거나 형식이 맞지 않으면 None

    Example:
        >>> parse_line("@bob select 0 Golden Hat", "me")
        ConsoleInput(user_id='bob', kind='select', target='0', value='Golden Hat')
    """
    text = line.strip()
    user_id = default_user

    if text.startswith("@"):
        head, _, text = text.partition(" ")
        user_id = head[1:] or default_user
        text = text.strip()

    if not text:
        return None

    if text.lower() in EXIT_WORDS:
        return ConsoleInput(user_id=user_id, kind="quit")

    if text.startswith("/"):
        name = text[1:].split(maxsplit=1)[0] if len(text) > 1 else ""
        return ConsoleInput(user_id=user_id, kind="command", target=name) if name else None

    word, _, rest = text.partition(" ")
    word = word.lower()

    if word == "press" and rest.strip():
        return ConsoleInput(user_id=user_id, kind="press", target=rest.strip())

    if word == "select":
        menu, _, value = rest.strip().partition(" ")
        if menu and value.strip():
            return ConsoleInput(user_id=user_id, kind="select", target=menu, value=value.strip())

    return None


def render_controls(controls: list[ControlRow]) -> list[str]:
    """컨트롤을 텍스트 줄로 표시"""
    lines: list[str] = []
    for row in controls:
        if isinstance(row, SelectMenu):
            label = f" ({row.placeholder})" if row.placeholder else ""
            lines.append(f"  menu {row.control_id}{label}:")
            lines.extend(f"    - {option.label} [{option.value}]" for option in row.options)
        elif isinstance(row, ButtonRow):
            lines.append("  " + "  ".join(_render_button(b) for b in row.buttons))
    return lines


def _render_button(button: Button) -> str:
    return f"[{button.label} | {button.control_id}]"


class ConsoleHandle:
    """Console 메시지 핸들 (IPromptHandle 구현)"""

    def __init__(
        self,
        channel: "ConsoleChannel",
        message_id: int,
        controls: list[ControlRow],
    ):
        self.channel = channel
        self.message_id = message_id
        self.controls = controls
        self.deleted = False
        self._queue: asyncio.Queue[InteractionEvent] = asyncio.Queue()

    def accepts(self, event: InteractionEvent) -> bool:
        """이 메시지의 컨트롤로 생긴 이벤트인지"""
        for row in self.controls:
            if isinstance(event, ButtonPressed) and isinstance(row, ButtonRow):
                if any(b.control_id == event.control_id for b in row.buttons):
                    return True
            if isinstance(event, ItemsSelected) and isinstance(row, SelectMenu):
                if row.control_id == event.control_id:
                    return True
        return False

    def deliver(self, event: InteractionEvent) -> None:
        self._queue.put_nowait(event)

    async def edit(self, content: str, controls: list[ControlRow] | None = None) -> None:
        self.controls = list(controls or [])
        self.channel.track(self)
        self.channel.render(self.message_id, content, self.controls, note="edited")

    async def delete(self) -> None:
        self.deleted = True
        self.channel.forget(self)
        self.channel.write(f"#{self.message_id} deleted")

    async def await_response(self, timeout: float) -> InteractionEvent | None:
        try:
            return await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None


class ConsoleChannel:
    """Console 프롬프트 채널 (IPromptChannel 구현)

    응답 이벤트는 해당 컨트롤을 가진 가장 최근 메시지로 전달된다.

    Args:
        default_user: "@" 접두어가 없을 때의 사용자 ID
        output: 출력 스트림 (기본 stdout)
    """

    def __init__(self, default_user: str = "console", output: TextIO | None = None):
        self.default_user = default_user
        self.output = output or sys.stdout
        self._ids = count(1)
        self._handles: list[ConsoleHandle] = []

    def write(self, text: str) -> None:
        print(text, file=self.output, flush=True)

    def render(
        self,
        message_id: int,
        content: str,
        controls: list[ControlRow],
        note: str = "",
    ) -> None:
        header = f"#{message_id}" + (f" ({note})" if note else "")
        self.write(f"{header}\n{content}")
        for line in render_controls(controls):
            self.write(line)

    def track(self, handle: ConsoleHandle) -> None:
        """컨트롤이 있는 메시지만 응답 대상으로 등록"""
        if handle.controls and handle not in self._handles:
            self._handles.append(handle)

    def forget(self, handle: ConsoleHandle) -> None:
        if handle in self._handles:
            self._handles.remove(handle)

    async def send(
        self,
        content: str,
        controls: list[ControlRow] | None = None,
        private: bool = False,
    ) -> ConsoleHandle:
        handle = ConsoleHandle(self, next(self._ids), list(controls or []))
        self.track(handle)
        self.render(handle.message_id, content, handle.controls, note="private" if private else "")
        return handle

    async def send_private_notice(self, user_id: str, content: str) -> None:
        self.write(f"(to {user_id}) {content}")

    def route(self, event: InteractionEvent) -> bool:
        """이벤트를 대상 메시지로 전달

        Returns:
            전달 여부 (대상 메시지가 없으면 False)
        """
        for handle in reversed(self._handles):
            if handle.accepts(event):
                handle.deliver(event)
                return True
        return False

    def handle_input(self, parsed: ConsoleInput, on_command: CommandCallback) -> None:
        """파싱된 입력 1건 처리"""
        if parsed.kind == "command":
            on_command(parsed.target, parsed.user_id)
            return

        if parsed.kind == "press":
            event: InteractionEvent = ButtonPressed(control_id=parsed.target, user_id=parsed.user_id)
        else:
            event = ItemsSelected(
                control_id=parsed.target,
                values=(parsed.value or "",),
                user_id=parsed.user_id,
            )

        if not self.route(event):
            self.write(f"nothing is waiting for {parsed.kind} {parsed.target}")

    async def run(self, on_command: CommandCallback, stream: TextIO | None = None) -> None:
        """stdin 루프 (EOF 또는 quit까지)

        Args:
            on_command: 명령 입력 시 호출 (명령 이름, 사용자 ID)
            stream: 입력 스트림 (기본 stdin)
        """
        stream = stream or sys.stdin
        self.write("Type /help to get started, quit to exit")

        while True:
            line = await asyncio.to_thread(stream.readline)
            if not line:
                break

            parsed = parse_line(line, self.default_user)
            if parsed is None:
                self.write("unrecognized input")
                continue
            if parsed.kind == "quit":
                break

            self.handle_input(parsed, on_command)

        logger.info("Console input closed")
