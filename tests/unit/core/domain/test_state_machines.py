"""
State Machine 테스트

선택 / 클레임 / 일괄 삭제 상태 전이
"""

import pytest

from core.domain.state_machines import (
    ClaimState,
    ClaimStateMachine,
    ErasureState,
    ErasureStateMachine,
    SelectionState,
    SelectionStateMachine,
    StateMachineError,
)


class TestSelectionStateMachine:
    """SelectionStateMachine 테스트"""

    def test_initial_state(self) -> None:
        """초기 상태는 CHOOSING_CATEGORY"""
        machine = SelectionStateMachine()

        assert machine.state == SelectionState.CHOOSING_CATEGORY.value
        assert machine.is_terminal is False

    def test_happy_path(self) -> None:
        """카테고리 → 아이템 → RESOLVED"""
        machine = SelectionStateMachine()

        machine.transition(SelectionState.CHOOSING_ITEM)
        machine.transition(SelectionState.RESOLVED)

        assert machine.is_terminal is True
        assert machine.history == [
            ("CHOOSING_CATEGORY", "CHOOSING_ITEM"),
            ("CHOOSING_ITEM", "RESOLVED"),
        ]

    def test_cannot_resolve_without_item_step(self) -> None:
        """카테고리 단계에서 바로 RESOLVED 불가"""
        machine = SelectionStateMachine()

        assert machine.can_transition(SelectionState.RESOLVED) is False
        with pytest.raises(StateMachineError):
            machine.transition(SelectionState.RESOLVED)

    def test_terminal_is_final(self) -> None:
        """종료 상태에서는 전이 불가"""
        machine = SelectionStateMachine()
        machine.transition(SelectionState.TIMED_OUT)

        with pytest.raises(StateMachineError):
            machine.transition(SelectionState.CHOOSING_ITEM)


class TestClaimStateMachine:
    """ClaimStateMachine 테스트"""

    @pytest.mark.parametrize(
        "target",
        [ClaimState.CLAIMED, ClaimState.CANCELLED, ClaimState.TIMED_OUT, ClaimState.ABORTED],
    )
    def test_open_to_terminal(self, target: ClaimState) -> None:
        """OPEN → 모든 종료 상태 가능"""
        machine = ClaimStateMachine()

        machine.transition(target)

        assert machine.state == target.value
        assert machine.is_terminal is True

    def test_terminal_states_exclusive(self) -> None:
        """한 번 종료되면 다른 종료 상태로 갈 수 없음"""
        machine = ClaimStateMachine()
        machine.transition(ClaimState.CLAIMED)

        for target in (ClaimState.CANCELLED, ClaimState.TIMED_OUT, ClaimState.ABORTED):
            with pytest.raises(StateMachineError):
                machine.transition(target)

    def test_accepts_string_state(self) -> None:
        """문자열 상태로 전이"""
        machine = ClaimStateMachine()

        assert machine.transition("CANCELLED") == "CANCELLED"


class TestErasureStateMachine:
    """ErasureStateMachine 테스트"""

    def test_confirm(self) -> None:
        """PROMPTED → CONFIRMED"""
        machine = ErasureStateMachine()
        machine.transition(ErasureState.CONFIRMED)

        assert machine.is_terminal is True

    def test_no_transition_after_decline(self) -> None:
        """DECLINED 이후 CONFIRMED 불가"""
        machine = ErasureStateMachine()
        machine.transition(ErasureState.DECLINED)

        assert machine.can_transition(ErasureState.CONFIRMED) is False
