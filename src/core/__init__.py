"""
Core layer: 정적 자원 캐시, 로깅 설정.

역할:
- drive 루트 파일 lazy 로드 + 메모리 캐시
- 프로세스 전역 logging 설정
"""

from .assets import AssetStore, normalize_uri
from .logging import configure_logging

__all__ = [
    "AssetStore",
    "normalize_uri",
    "configure_logging",
]
