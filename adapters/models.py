"""
어댑터 공통 데이터 모델

채팅 플랫폼 프롬프트를 표준화한 도메인 모델.
- 컨트롤: Button, ButtonRow, SelectOption, SelectMenu
- 이벤트: ButtonPressed, ItemsSelected

렌더링(스타일, 배치)은 채널 어댑터가 담당하고
코어는 컨트롤 ID와 값만 다룬다.
"""

from dataclasses import dataclass, field
from uuid import uuid4

from core.types import ButtonStyle


class ProtocolViolation(Exception):
    """예상하지 못한 응답 형태 / 알 수 없는 컨트롤 ID"""
    pass


# -------------------------------------------------------------------------
# 컨트롤
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class Button:
    """버튼

    Attributes:
        control_id: 버튼 ID (응답 이벤트의 control_id)
        label: 표시 텍스트
        style: 버튼 스타일
    """

    control_id: str
    label: str
    style: ButtonStyle = ButtonStyle.SECONDARY


@dataclass(frozen=True)
class ButtonRow:
    """버튼 한 줄"""

    buttons: tuple[Button, ...]


@dataclass(frozen=True)
class SelectOption:
    """선택 메뉴 옵션"""

    label: str
    value: str


@dataclass(frozen=True)
class SelectMenu:
    """선택 메뉴 (한 줄 전체 차지)

    Attributes:
        control_id: 메뉴 ID
        options: 옵션 목록
        placeholder: 선택 전 표시 텍스트
    """

    control_id: str
    options: tuple[SelectOption, ...]
    placeholder: str | None = None

    @property
    def values(self) -> tuple[str, ...]:
        """옵션 값 목록"""
        return tuple(option.value for option in self.options)


ControlRow = ButtonRow | SelectMenu


# -------------------------------------------------------------------------
# 응답 이벤트
# -------------------------------------------------------------------------

def _new_interaction_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class ButtonPressed:
    """버튼 클릭 이벤트

    Attributes:
        control_id: 눌린 버튼 ID
        user_id: 누른 사용자
        interaction_id: 물리적 응답 1건의 고유 ID (중복 전달 판별용)
    """

    control_id: str
    user_id: str
    interaction_id: str = field(default_factory=_new_interaction_id)


@dataclass(frozen=True)
class ItemsSelected:
    """선택 메뉴 선택 이벤트

    Attributes:
        control_id: 메뉴 ID
        values: 선택된 값 (보통 1개)
        user_id: 선택한 사용자
        interaction_id: 물리적 응답 1건의 고유 ID
    """

    control_id: str
    values: tuple[str, ...]
    user_id: str
    interaction_id: str = field(default_factory=_new_interaction_id)

    @property
    def first(self) -> str | None:
        """첫 번째 선택값 (없으면 None)"""
        return self.values[0] if self.values else None


InteractionEvent = ButtonPressed | ItemsSelected


def expect_button(event: InteractionEvent, allowed: set[str] | frozenset[str]) -> ButtonPressed:
    """버튼 이벤트 검증

    Args:
        event: 수신 이벤트
        allowed: 허용된 버튼 ID

    Returns:
        검증된 ButtonPressed

    Raises:
        ProtocolViolation: 버튼이 아니거나 알 수 없는 ID
    """
    if not isinstance(event, ButtonPressed):
        raise ProtocolViolation(
            f"malformed component response. expected a button, got {type(event).__name__}"
        )
    if event.control_id not in allowed:
        raise ProtocolViolation(
            f'malformed component response. invalid button id "{event.control_id}"'
        )
    return event


def expect_selection(event: InteractionEvent) -> str:
    """선택 이벤트 검증 후 첫 번째 값 반환

    Raises:
        ProtocolViolation: 선택 이벤트가 아니거나 선택값 없음
    """
    if not isinstance(event, ItemsSelected):
        raise ProtocolViolation(
            f"malformed component response. expected a selection, got {type(event).__name__}"
        )
    value = event.first
    if value is None:
        raise ProtocolViolation("malformed component response, there was no selected value")
    return value
