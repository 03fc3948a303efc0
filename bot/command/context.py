"""
Command Context

명령 1회 호출의 실행 환경 (호출자 + 채널)
"""

from dataclasses import dataclass

from adapters.interfaces import IPromptChannel


@dataclass(frozen=True)
class CommandContext:
    """명령 호출 컨텍스트

    Attributes:
        user_id: 명령을 호출한 사용자
        channel: 명령이 호출된 채널
    """

    user_id: str
    channel: IPromptChannel

    async def reply_private(self, content: str) -> None:
        """호출자에게만 보이는 메시지"""
        await self.channel.send(content, private=True)
