"""
Bulk Erasure 단위 테스트
"""

import pytest
import pytest_asyncio

from adapters.mock.prompt_channel import MockPromptChannel
from adapters.models import ItemsSelected
from bot.erasure.forget import ABORTED_MESSAGE, CONFIRM_BUTTONS, WARNING_MESSAGE, BulkErasure
from core.constants import ControlIds
from core.storage.registry import Registry
from core.types import ErasureOutcome


@pytest_asyncio.fixture
async def filled(registry: Registry) -> Registry:
    """A는 세 아이템, B는 한 아이템 필요"""
    for item in ("Golden Hat", "Beanie", "Hoodie"):
        await registry.add(item, "A")
    await registry.add("Golden Hat", "B")
    return registry


@pytest.fixture
def erasure(filled: Registry) -> BulkErasure:
    return BulkErasure(filled, timeout=0.05)


class TestBulkErasure:
    """확인 흐름 테스트"""

    @pytest.mark.asyncio
    async def test_confirm_forgets_everything(
        self, erasure: BulkErasure, filled: Registry
    ) -> None:
        """yes → 모든 아이템에서 삭제"""
        channel = MockPromptChannel()
        channel.press(ControlIds.CONFIRM_YES, user_id="A")

        outcome = await erasure.run(channel, "A")

        assert outcome == ErasureOutcome.CONFIRMED
        assert await filled.needed_by("A") == []
        assert await filled.who_needs("Golden Hat") == ["B"]

        prompt, reply = channel.sent
        assert prompt.history[0] == WARNING_MESSAGE
        assert prompt.controls == [CONFIRM_BUTTONS]
        assert prompt.private is True
        assert prompt.deleted is True
        assert reply.content == "You've been deleted"

    @pytest.mark.asyncio
    async def test_decline_keeps_records(
        self, erasure: BulkErasure, filled: Registry
    ) -> None:
        """no → 변경 없음"""
        channel = MockPromptChannel()
        channel.press(ControlIds.CONFIRM_NO, user_id="A")

        outcome = await erasure.run(channel, "A")

        assert outcome == ErasureOutcome.DECLINED
        assert len(await filled.needed_by("A")) == 3
        assert [h.content for h in channel.visible] == ["Cancelled"]

    @pytest.mark.asyncio
    async def test_timeout(self, erasure: BulkErasure, filled: Registry) -> None:
        """응답 없음 → Timed out, 변경 없음"""
        channel = MockPromptChannel()

        outcome = await erasure.run(channel, "A")

        assert outcome == ErasureOutcome.TIMED_OUT
        assert len(await filled.needed_by("A")) == 3
        assert [h.content for h in channel.visible] == ["Timed out"]

    @pytest.mark.asyncio
    async def test_other_user_cannot_confirm(
        self, erasure: BulkErasure, filled: Registry
    ) -> None:
        """다른 사용자의 yes는 인정하지 않음"""
        channel = MockPromptChannel()
        channel.press(ControlIds.CONFIRM_YES, user_id="B")

        outcome = await erasure.run(channel, "A")

        assert outcome == ErasureOutcome.ABORTED
        assert len(await filled.needed_by("A")) == 3
        assert channel.sent[0].deleted is True
        notice = channel.visible[-1]
        assert notice.content == ABORTED_MESSAGE
        assert notice.private is True

    @pytest.mark.asyncio
    async def test_malformed_response(self, erasure: BulkErasure, filled: Registry) -> None:
        """버튼이 아닌 응답 → ABORTED"""
        channel = MockPromptChannel(
            ItemsSelected(control_id="0", values=("yes",), user_id="A")
        )

        assert await erasure.run(channel, "A") == ErasureOutcome.ABORTED
        assert len(await filled.needed_by("A")) == 3
        assert [h.content for h in channel.visible] == [ABORTED_MESSAGE]

    @pytest.mark.asyncio
    async def test_unknown_button(self, erasure: BulkErasure) -> None:
        """알 수 없는 버튼 ID → ABORTED"""
        channel = MockPromptChannel()
        channel.press("maybe", user_id="A")

        assert await erasure.run(channel, "A") == ErasureOutcome.ABORTED
        assert [h.content for h in channel.visible] == [ABORTED_MESSAGE]

    @pytest.mark.asyncio
    async def test_user_with_no_needs(self, erasure: BulkErasure) -> None:
        """필요 목록이 없어도 정상 완료"""
        channel = MockPromptChannel()
        channel.press(ControlIds.CONFIRM_YES, user_id="Z")

        assert await erasure.run(channel, "Z") == ErasureOutcome.CONFIRMED
