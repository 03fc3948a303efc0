"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Protocol, Any, runtime_checkable

from adapters.models import ControlRow, InteractionEvent


@runtime_checkable
class IPromptHandle(Protocol):
    """전송된 프롬프트(메시지) 핸들

    하나의 메시지에 대한 수정/삭제/응답 대기를 제공.
    응답은 도착 순서대로 한 번에 하나씩 전달된다.
    """

    async def edit(
        self,
        content: str,
        controls: list[ControlRow] | None = None,
    ) -> None:
        """메시지 수정

        Args:
            content: 새 본문
            controls: 새 컨트롤 (None이면 컨트롤 제거)
        """
        ...

    async def delete(self) -> None:
        """메시지 삭제"""
        ...

    async def await_response(self, timeout: float) -> InteractionEvent | None:
        """응답 1건 대기

        Args:
            timeout: 최대 대기 시간 (초)

        Returns:
            수신 이벤트 또는 None (타임아웃)
        """
        ...


@runtime_checkable
class IPromptChannel(Protocol):
    """프롬프트 채널 인터페이스

    명령을 호출한 사용자의 대화 컨텍스트.
    메시지 전달, 버튼/메뉴 렌더링, 응답 확인(ack)은 구현체 몫.
    """

    async def send(
        self,
        content: str,
        controls: list[ControlRow] | None = None,
        private: bool = False,
    ) -> IPromptHandle:
        """메시지 전송

        Args:
            content: 본문
            controls: 버튼/메뉴 행
            private: True면 호출자에게만 보이는 메시지

        Returns:
            전송된 메시지 핸들
        """
        ...

    async def send_private_notice(self, user_id: str, content: str) -> None:
        """특정 사용자에게만 보이는 알림 (DM 등)"""
        ...


@runtime_checkable
class IRecordStore(Protocol):
    """레코드 저장소 인터페이스

    키(정제된 아이템 이름) → 문자열 리스트(사용자 ID) 저장소.

    Raises (모든 메서드):
        StorageUnavailableError: 저장소 접근 불가
    """

    async def read(self, key: str) -> list[str] | None:
        """레코드 전체 조회

        Returns:
            값 리스트 또는 None (레코드 없음)
        """
        ...

    async def append(self, key: str, value: str) -> None:
        """레코드에 값 추가 (레코드가 없으면 생성)"""
        ...

    async def rewrite(self, key: str, values: list[str]) -> None:
        """레코드 전체 교체"""
        ...


@runtime_checkable
class INotifier(Protocol):
    """운영 알림 서비스 인터페이스

    저장소 장애 등 운영자가 알아야 할 상황을 외부 서비스로 전송.
    """

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터 (선택)

        Returns:
            전송 성공 여부
        """
        ...

    async def send_storage_alert(
        self,
        command: str,
        user_id: str,
        error: str,
    ) -> bool:
        """저장소 장애 알림 전송 (포맷팅된 메시지)

        Args:
            command: 실패한 명령 이름
            user_id: 명령을 호출한 사용자
            error: 오류 내용

        Returns:
            전송 성공 여부
        """
        ...
