"""
어댑터 레이어

외부 서비스(채팅 플랫폼, 저장소, 알림 등)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    IPromptChannel,
    IPromptHandle,
    IRecordStore,
    INotifier,
)
from adapters.models import (
    Button,
    ButtonRow,
    SelectOption,
    SelectMenu,
    ButtonPressed,
    ItemsSelected,
    ProtocolViolation,
)

__all__ = [
    # Interfaces
    "IPromptChannel",
    "IPromptHandle",
    "IRecordStore",
    "INotifier",
    # Models
    "Button",
    "ButtonRow",
    "SelectOption",
    "SelectMenu",
    "ButtonPressed",
    "ItemsSelected",
    "ProtocolViolation",
]
