"""
Console 어댑터

stdin/stdout 기반 프롬프트 채널 (로컬 실행용).
IPromptChannel Protocol 준수.
"""

from adapters.console.channel import ConsoleChannel, ConsoleHandle, parse_line

__all__ = [
    "ConsoleChannel",
    "ConsoleHandle",
    "parse_line",
]
