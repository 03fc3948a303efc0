"""
Bulk Erasure

사용자를 모든 아이템의 필요 목록에서 지우기 전에
개인 메시지로 확인을 받는다. "yes"일 때만 삭제한다.
"""

import logging

from adapters.interfaces import IPromptChannel
from adapters.models import Button, ButtonRow, ProtocolViolation, expect_button
from core.constants import ControlIds, Defaults
from core.domain.state_machines import ErasureState, ErasureStateMachine
from core.storage.registry import Registry
from core.types import ButtonStyle, ErasureOutcome

logger = logging.getLogger(__name__)


WARNING_MESSAGE = (
    "This will make the bot forget all the cosmetics you need and remove you from "
    "it's database in *all* servers. This is **irreversible**, if you've spent lots "
    "of time entering in cosmetics you'll lose that progress."
)

ABORTED_MESSAGE = "Something went wrong, nothing was deleted"

CONFIRM_BUTTONS = ButtonRow(
    buttons=(
        Button(control_id=ControlIds.CONFIRM_YES, label="Yes, Do It", style=ButtonStyle.DANGER),
        Button(control_id=ControlIds.CONFIRM_NO, label="Yeah... nevermind", style=ButtonStyle.PRIMARY),
    )
)


class BulkErasure:
    """전체 삭제 확인 흐름

    Args:
        registry: 필요 목록 저장소
        timeout: 확인 대기 시간 (초)
    """

    def __init__(
        self,
        registry: Registry,
        timeout: float = Defaults.PROMPT_TIMEOUT_SEC,
    ):
        self.registry = registry
        self.timeout = timeout

    async def run(self, channel: IPromptChannel, user_id: str) -> ErasureOutcome:
        """확인 후 삭제

        확인 버튼은 명령을 호출한 사용자의 응답만 인정한다.

        Returns:
            ErasureOutcome

        Raises:
            StorageUnavailableError: 삭제 중 저장소 접근 불가
        """
        machine = ErasureStateMachine()

        prompt = await channel.send(WARNING_MESSAGE, controls=[CONFIRM_BUTTONS], private=True)
        event = await prompt.await_response(self.timeout)

        if event is None:
            machine.transition(ErasureState.TIMED_OUT)
            await prompt.delete()
            await channel.send("Timed out", private=True)
            return ErasureOutcome.TIMED_OUT

        try:
            pressed = expect_button(event, {ControlIds.CONFIRM_YES, ControlIds.CONFIRM_NO})
            if pressed.user_id != user_id:
                raise ProtocolViolation(
                    f"confirmation from another user ({pressed.user_id})"
                )
        except ProtocolViolation as e:
            machine.transition(ErasureState.ABORTED)
            logger.warning(f"Erasure aborted: {e}", extra={"user_id": user_id})
            await prompt.delete()
            await channel.send(ABORTED_MESSAGE, private=True)
            return ErasureOutcome.ABORTED

        await prompt.delete()

        if pressed.control_id == ControlIds.CONFIRM_NO:
            machine.transition(ErasureState.DECLINED)
            await channel.send("Cancelled", private=True)
            return ErasureOutcome.DECLINED

        machine.transition(ErasureState.CONFIRMED)
        removed = await self.registry.forget(user_id)
        await channel.send("You've been deleted", private=True)

        logger.info(
            "User erased",
            extra={"user_id": user_id, "removed": removed},
        )
        return ErasureOutcome.CONFIRMED
