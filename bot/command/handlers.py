"""
Command Handlers

슬래시 명령별 진입점.
선택은 SelectionFlow, 협상은 ClaimNegotiation, 전체 삭제는 BulkErasure에 위임하고
여기서는 상태 메시지와 Registry 호출만 다룬다.

저장소 오류는 잡지 않는다 (CommandProcessor가 처리).
"""

import logging

from bot.claim.negotiation import ClaimNegotiation, mention
from bot.command.context import CommandContext
from bot.erasure.forget import BulkErasure
from bot.selection.flow import SelectionFlow
from core.storage.registry import Registry
from core.types import ClaimResult, ErasureOutcome

logger = logging.getLogger(__name__)


HELP_MESSAGE = """This is a discord bot for sharing cosmetics with the community.

You can tell it what cosmetics you need with `/needsomething`, and when you or someone finds a duplicate they can use the `/foundsomething` command to ping everyone that needs it.
Use `/whatdoineed` to see what the bot thinks you need and `/dontneed` to tell it what you've unlocked.

The bot keeps a shared database across all the servers it's in, but be aware that this means that users you don't share a server with might see your user."""


class CommandHandlers:
    """명령 핸들러 모음

    Args:
        registry: 필요 목록 저장소
        selection: 아이템 선택기
        negotiation: 클레임 협상
        erasure: 전체 삭제 확인

    사용 예시:
    ```python
    handlers = CommandHandlers(registry, selection, negotiation, erasure)

    ctx = CommandContext(user_id="1234", channel=channel)
    await handlers.need(ctx)
    ```
    """

    def __init__(
        self,
        registry: Registry,
        selection: SelectionFlow,
        negotiation: ClaimNegotiation,
        erasure: BulkErasure,
    ):
        self.registry = registry
        self.selection = selection
        self.negotiation = negotiation
        self.erasure = erasure

    async def found(self, ctx: CommandContext) -> ClaimResult | None:
        """/foundsomething - 찾은 아이템 공유

        Returns:
            협상 결과, 선택 중단 시 None
        """
        status = await ctx.channel.send(f"{mention(ctx.user_id)} has found a cosmetic")

        item = await self.selection.select(ctx.channel, ctx.user_id)
        if item is None:
            await status.delete()
            return None

        await status.edit(f"{mention(ctx.user_id)} has found **{item}**")

        return await self.negotiation.run(ctx.channel, ctx.user_id, item, status)

    async def need(self, ctx: CommandContext) -> bool:
        """/needsomething - 필요 목록에 추가

        Returns:
            새로 추가되었는지 여부
        """
        status = await ctx.channel.send("Select the cosmetic you need", private=True)

        item = await self.selection.select(ctx.channel, ctx.user_id)
        if item is None:
            return False

        if await self.registry.needs(item, ctx.user_id):
            await status.edit("you already need that cosmetic")
            return False

        await self.registry.add(item, ctx.user_id)
        await status.edit(f"you now need **{item}**")
        return True

    async def unneed(self, ctx: CommandContext) -> bool:
        """/dontneed - 필요 목록에서 제거

        Returns:
            실제로 제거되었는지 여부
        """
        status = await ctx.channel.send("Select the cosmetic you don't need", private=True)

        item = await self.selection.select(ctx.channel, ctx.user_id)
        if item is None:
            return False

        if await self.registry.remove(item, ctx.user_id):
            await status.edit(f"You now don't need **{item}**")
            return True

        await status.edit(f"You already didn't need **{item}**")
        return False

    async def what_do_i_need(self, ctx: CommandContext) -> list[str]:
        """/whatdoineed - 필요 목록 조회"""
        items = await self.registry.needed_by(ctx.user_id)

        if items:
            listing = "".join(f"\n**{item}**" for item in items)
            await ctx.reply_private(f"You need\n{listing}")
        else:
            await ctx.reply_private("You don't need anything")

        return items

    async def forget_me(self, ctx: CommandContext) -> ErasureOutcome:
        """/forgetme - 모든 필요 목록에서 삭제 (확인 필요)"""
        return await self.erasure.run(ctx.channel, ctx.user_id)

    async def help(self, ctx: CommandContext) -> None:
        """/help"""
        await ctx.reply_private(HELP_MESSAGE)
