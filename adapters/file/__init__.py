"""
파일 어댑터

줄바꿈 텍스트 파일 기반 레코드 저장소.
"""

from adapters.file.record_store import FileRecordStore

__all__ = [
    "FileRecordStore",
]
