"""
bot 테스트 공통 fixture
"""

import pytest

from bot.claim.negotiation import ClaimNegotiation
from bot.command.handlers import CommandHandlers
from bot.erasure.forget import BulkErasure
from bot.selection.flow import SelectionFlow
from core.storage.catalog import Catalog
from core.storage.registry import Registry


@pytest.fixture
def handlers(registry: Registry, catalog: Catalog) -> CommandHandlers:
    """짧은 대기 시간의 명령 핸들러"""
    return CommandHandlers(
        registry=registry,
        selection=SelectionFlow(catalog, prompt_timeout=0.05),
        negotiation=ClaimNegotiation(registry, timeout=0.05),
        erasure=BulkErasure(registry, timeout=0.05),
    )
