"""
Protocol 인터페이스 테스트

Protocol 타입 검증 및 구현 확인.
"""

from pathlib import Path

import pytest

from adapters.console.channel import ConsoleChannel
from adapters.db.record_store import SQLiteRecordStore
from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.file.record_store import FileRecordStore
from adapters.interfaces import (
    INotifier,
    IPromptChannel,
    IPromptHandle,
    IRecordStore,
)
from adapters.mock.notifier import MockNotifier
from adapters.mock.prompt_channel import MockPromptChannel
from adapters.mock.record_store import InMemoryRecordStore
from adapters.slack.notifier import SlackNotifier


class TestIPromptChannel:
    """IPromptChannel / IPromptHandle Protocol 테스트"""

    def test_mock_channel_implements_protocol(self) -> None:
        """Mock 채널이 Protocol을 구현하는지 확인"""
        assert isinstance(MockPromptChannel(), IPromptChannel)

    def test_console_channel_implements_protocol(self) -> None:
        """Console 채널이 Protocol을 구현하는지 확인"""
        assert isinstance(ConsoleChannel(), IPromptChannel)

    @pytest.mark.asyncio
    async def test_handles_implement_protocol(self) -> None:
        """send()가 돌려주는 핸들이 IPromptHandle인지 확인"""
        mock_handle = await MockPromptChannel().send("hello")
        console_handle = await ConsoleChannel(output=_NullWriter()).send("hello")

        assert isinstance(mock_handle, IPromptHandle)
        assert isinstance(console_handle, IPromptHandle)

    def test_protocol_has_required_methods(self) -> None:
        """필수 메서드 확인"""
        channel = MockPromptChannel()

        for method_name in ["send", "send_private_notice"]:
            assert hasattr(channel, method_name), f"Missing method: {method_name}"
            assert callable(getattr(channel, method_name))


class TestIRecordStore:
    """IRecordStore Protocol 테스트"""

    def test_implementations(self, tmp_path: Path) -> None:
        """모든 저장소가 Protocol을 구현하는지 확인"""
        stores = [
            InMemoryRecordStore(),
            FileRecordStore(tmp_path),
            SQLiteRecordStore(SQLiteAdapter(":memory:")),
        ]

        for store in stores:
            assert isinstance(store, IRecordStore), type(store).__name__

    def test_protocol_has_required_methods(self) -> None:
        """필수 메서드 확인"""
        store = InMemoryRecordStore()

        for method_name in ["read", "append", "rewrite"]:
            assert hasattr(store, method_name), f"Missing method: {method_name}"
            assert callable(getattr(store, method_name))


class TestINotifier:
    """INotifier Protocol 테스트"""

    def test_mock_notifier_implements_protocol(self) -> None:
        """Mock Notifier가 Protocol을 구현하는지 확인"""
        assert isinstance(MockNotifier(), INotifier)

    def test_slack_notifier_implements_protocol(self) -> None:
        """Slack Notifier가 Protocol을 구현하는지 확인"""
        assert isinstance(SlackNotifier(webhook_url="https://hooks.slack.com/test"), INotifier)

    def test_protocol_has_required_methods(self) -> None:
        """필수 메서드 확인"""
        notifier = MockNotifier()

        for method_name in ["send", "send_storage_alert"]:
            assert hasattr(notifier, method_name), f"Missing method: {method_name}"


class _NullWriter:
    """출력 버리기"""

    def write(self, text: str) -> int:
        return len(text)

    def flush(self) -> None:
        pass
