"""
Command 처리 모듈

슬래시 명령 핸들러 및 디스패치
"""

from bot.command.context import CommandContext
from bot.command.handlers import CommandHandlers
from bot.command.processor import CommandProcessor

__all__ = [
    "CommandContext",
    "CommandHandlers",
    "CommandProcessor",
]
