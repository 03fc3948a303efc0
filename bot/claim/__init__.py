"""
Claim 모듈

찾은 아이템의 클레임 협상
"""

from bot.claim.negotiation import ClaimNegotiation

__all__ = [
    "ClaimNegotiation",
]
