"""
State Machines

아이템 선택, 클레임 협상, 일괄 삭제 세션의 상태 전이 관리.
종료 상태에서는 어떤 전이도 허용하지 않는다.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class SelectionState(str, Enum):
    """아이템 선택 상태

    전이 규칙:
    - CHOOSING_CATEGORY → CHOOSING_ITEM: 카테고리 선택
    - CHOOSING_CATEGORY → CANCELLED: 잘못된 응답
    - CHOOSING_CATEGORY → TIMED_OUT: 응답 없음
    - CHOOSING_ITEM → RESOLVED: 아이템 선택
    - CHOOSING_ITEM → CANCELLED: 잘못된 응답 / 빈 카테고리
    - CHOOSING_ITEM → TIMED_OUT: 응답 없음
    """
    CHOOSING_CATEGORY = "CHOOSING_CATEGORY"
    CHOOSING_ITEM = "CHOOSING_ITEM"
    RESOLVED = "RESOLVED"
    CANCELLED = "CANCELLED"
    TIMED_OUT = "TIMED_OUT"


class ClaimState(str, Enum):
    """클레임 협상 상태

    전이 규칙:
    - OPEN → CLAIMED: 누군가 Claim
    - OPEN → CANCELLED: 발견자가 Cancel
    - OPEN → TIMED_OUT: 제한 시간 내 응답 없음
    - OPEN → ABORTED: 잘못된 응답 / 저장소 오류
    """
    OPEN = "OPEN"
    CLAIMED = "CLAIMED"
    CANCELLED = "CANCELLED"
    TIMED_OUT = "TIMED_OUT"
    ABORTED = "ABORTED"


class ErasureState(str, Enum):
    """일괄 삭제 확인 상태

    전이 규칙:
    - PROMPTED → CONFIRMED: "yes"
    - PROMPTED → DECLINED: "no"
    - PROMPTED → TIMED_OUT: 응답 없음
    - PROMPTED → ABORTED: 잘못된 응답
    """
    PROMPTED = "PROMPTED"
    CONFIRMED = "CONFIRMED"
    DECLINED = "DECLINED"
    TIMED_OUT = "TIMED_OUT"
    ABORTED = "ABORTED"


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    TERMINAL_STATES: frozenset[str] = frozenset()

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name
        self._history: list[tuple[str, str]] = []

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """종료 상태 여부"""
        return self._state in self.TERMINAL_STATES

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인

        Args:
            to_state: 목표 상태

        Returns:
            전이 가능 여부
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state
        allowed = self._transitions.get(self._state, [])
        return target in allowed

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Args:
            to_state: 목표 상태

        Returns:
            새 상태

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target
        self._history.append((old_state, target))

        logger.debug(
            f"{self._name}: {old_state} → {target}",
        )

        return target

    @property
    def history(self) -> list[tuple[str, str]]:
        """상태 전이 이력"""
        return self._history.copy()


class SelectionStateMachine(StateMachine):
    """아이템 선택 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "CHOOSING_CATEGORY": ["CHOOSING_ITEM", "CANCELLED", "TIMED_OUT"],
        "CHOOSING_ITEM": ["RESOLVED", "CANCELLED", "TIMED_OUT"],
    }
    TERMINAL_STATES = frozenset({"RESOLVED", "CANCELLED", "TIMED_OUT"})

    def __init__(
        self,
        initial_state: str | SelectionState = SelectionState.CHOOSING_CATEGORY,
    ):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name="SelectionStateMachine",
        )


class ClaimStateMachine(StateMachine):
    """클레임 협상 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "OPEN": ["CLAIMED", "CANCELLED", "TIMED_OUT", "ABORTED"],
    }
    TERMINAL_STATES = frozenset({"CLAIMED", "CANCELLED", "TIMED_OUT", "ABORTED"})

    def __init__(self, initial_state: str | ClaimState = ClaimState.OPEN):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name="ClaimStateMachine",
        )


class ErasureStateMachine(StateMachine):
    """일괄 삭제 확인 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "PROMPTED": ["CONFIRMED", "DECLINED", "TIMED_OUT", "ABORTED"],
    }
    TERMINAL_STATES = frozenset({"CONFIRMED", "DECLINED", "TIMED_OUT", "ABORTED"})

    def __init__(self, initial_state: str | ErasureState = ErasureState.PROMPTED):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name="ErasureStateMachine",
        )
