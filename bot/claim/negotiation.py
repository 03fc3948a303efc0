"""
Claim Negotiation

찾은 아이템을 공개 프롬프트로 알리고, 필요한 사용자 중 한 명이
가져갈 때까지 버튼 응답을 하나씩 처리한다.

버튼:
- claim: 누구나. 즉시 종료 (CLAIMED)
- cancel: 발견자만. 다른 사용자에게는 개인 알림 후 계속
- have: 누구나. 해당 사용자를 필요 목록에서 제거 후 계속

응답 대기는 매 이벤트마다 다시 시작되며,
대기 시간 안에 응답이 없으면 종료 (TIMED_OUT).
"""

import logging

from adapters.interfaces import IPromptChannel, IPromptHandle
from adapters.models import Button, ButtonRow, ProtocolViolation, expect_button
from core.constants import ControlIds, Defaults
from core.domain.state_machines import ClaimState, ClaimStateMachine
from core.storage.errors import StorageUnavailableError
from core.storage.registry import Registry
from core.types import ButtonStyle, ClaimOutcome, ClaimResult

logger = logging.getLogger(__name__)


UNAUTHORIZED_CANCEL_MESSAGE = "Only the creator of the cosmetic share can cancel it"

CLAIM_BUTTONS = ButtonRow(
    buttons=(
        Button(control_id=ControlIds.CLAIM, label="Claim", style=ButtonStyle.SUCCESS),
        Button(control_id=ControlIds.CANCEL, label="Cancel", style=ButtonStyle.DANGER),
        Button(control_id=ControlIds.ALREADY_HAVE, label="Already Have It", style=ButtonStyle.PRIMARY),
    )
)

_ALLOWED_BUTTONS = frozenset({ControlIds.CLAIM, ControlIds.CANCEL, ControlIds.ALREADY_HAVE})


def mention(user_id: str) -> str:
    return f"<@{user_id}>"


def format_duration(seconds: float) -> str:
    """대기 시간 표시 (예: 180 → "3 minutes", 90 → "90 seconds")"""
    seconds = int(seconds)
    if seconds >= 60 and seconds % 60 == 0:
        minutes = seconds // 60
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    return f"{seconds} second" if seconds == 1 else f"{seconds} seconds"


def announcement(finder_id: str, item: str, wanters: list[str]) -> str:
    """공지 본문

    필요한 사용자가 없으면 누구나 가져갈 수 있다는 안내,
    있으면 모두 멘션한다.
    """
    if not wanters:
        return (
            f"{mention(finder_id)} has found **{item}** but no one needs it, "
            "you can still claim it if you need it\n\n"
        )

    pings = "".join(f" {mention(user_id)}" for user_id in wanters)
    return (
        f"{mention(finder_id)} has found **{item}**\n\n{pings}\n\n"
        "You can still claim it if you weren't pinged, "
        'and if you have it but got pinged click "Already Have It"'
    )


class ClaimNegotiation:
    """클레임 협상

    한 번의 run()이 한 세션. 세션 상태(알린 사용자, 처리한 응답 ID)는
    run() 지역 변수로만 존재하며 저장되지 않는다.

    Args:
        registry: 필요 목록 저장소
        timeout: 응답 1건 대기 시간 (초)
    """

    def __init__(
        self,
        registry: Registry,
        timeout: float = Defaults.CLAIM_TIMEOUT_SEC,
    ):
        self.registry = registry
        self.timeout = timeout

    async def run(
        self,
        channel: IPromptChannel,
        finder_id: str,
        item: str,
        status: IPromptHandle,
    ) -> ClaimResult:
        """협상 진행

        Args:
            channel: 공지할 채널
            finder_id: 아이템을 찾은 사용자
            item: 찾은 아이템
            status: 결과를 표시할 상태 메시지

        Returns:
            ClaimResult

        Raises:
            StorageUnavailableError: "have" 처리 중 저장소 접근 불가
        """
        machine = ClaimStateMachine()
        notified = tuple(await self.registry.who_needs(item))
        seen: set[str] = set()

        prompt = await channel.send(
            announcement(finder_id, item, list(notified)),
            controls=[CLAIM_BUTTONS],
        )

        logger.info(
            f"Claim opened: {item}",
            extra={"finder_id": finder_id, "notified": len(notified)},
        )

        def finish(outcome: ClaimOutcome, claimant_id: str | None = None) -> ClaimResult:
            machine.transition(outcome.value)
            logger.info(
                f"Claim closed: {item} ({outcome.value})",
                extra={"finder_id": finder_id, "claimant_id": claimant_id},
            )
            return ClaimResult(
                outcome=outcome,
                item=item,
                finder_id=finder_id,
                claimant_id=claimant_id,
                notified=notified,
            )

        while True:
            event = await prompt.await_response(self.timeout)

            if event is None:
                await prompt.delete()
                await status.edit(
                    f"{mention(finder_id)} found **{item}** but no one responded "
                    f"within {format_duration(self.timeout)}"
                )
                return finish(ClaimOutcome.TIMED_OUT)

            if event.interaction_id in seen:
                logger.debug(
                    "Duplicate interaction ignored",
                    extra={"interaction_id": event.interaction_id},
                )
                continue
            seen.add(event.interaction_id)

            try:
                pressed = expect_button(event, _ALLOWED_BUTTONS)
            except ProtocolViolation as e:
                logger.warning(f"Claim aborted: {e}", extra={"finder_id": finder_id})
                await prompt.delete()
                await status.edit(f"{mention(finder_id)} found **{item}** but the share was aborted")
                return finish(ClaimOutcome.ABORTED)

            if pressed.control_id == ControlIds.CANCEL:
                if pressed.user_id != finder_id:
                    await channel.send_private_notice(pressed.user_id, UNAUTHORIZED_CANCEL_MESSAGE)
                    continue

                await prompt.delete()
                await status.edit(f"{mention(finder_id)} found **{item}** but cancelled")
                return finish(ClaimOutcome.CANCELLED)

            if pressed.control_id == ControlIds.CLAIM:
                await prompt.delete()
                await status.edit(
                    f"{mention(finder_id)} found **{item}** which was been claimed by "
                    f"{mention(pressed.user_id)}\n\n"
                    "Make sure to use the `/dontneed` command later so you don't get pinged again"
                )
                return finish(ClaimOutcome.CLAIMED, claimant_id=pressed.user_id)

            # ALREADY_HAVE
            try:
                await self.registry.remove(item, pressed.user_id)
            except StorageUnavailableError:
                await prompt.delete()
                await status.edit(
                    f"{mention(finder_id)} found **{item}** but the share failed, "
                    "the database is unavailable"
                )
                machine.transition(ClaimState.ABORTED)
                raise
