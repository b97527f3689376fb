"""
정적 자원 저장소: drive 루트 하위 파일을 lazy 로드 + 메모리 캐시.

규칙:
- 캐시 우선: 한 번 읽은 경로는 디스크를 다시 읽지 않음
- 무효화/eviction 없음 (프로세스 수명 동안 유지)
- 읽기 실패(없음, 권한, 디렉터리)는 None → "없음" 자체가 신호
- 루트 밖으로 벗어나는 경로("..")는 없음으로 처리
- 동시성: 키별 락으로 같은 경로의 중복 디스크 읽기 방지 (읽기가 끝나면 락 제거)
"""

import logging
import posixpath
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


def normalize_uri(uri: str) -> str | None:
    """
    URI를 캐시 키로 정규화.

    예: "/templates/./a.docx" → "/templates/a.docx"

    Returns:
        "/"로 시작하는 정규화된 경로, 루트를 벗어나거나 비어 있으면 None
    """
    if not uri:
        return None

    normalized = posixpath.normpath("/" + uri.replace("\\", "/").lstrip("/"))
    # normpath는 선행 "//"를 유지할 수 있음
    normalized = "/" + normalized.lstrip("/")

    if normalized == "/":
        return None
    if any(part == ".." for part in normalized.split("/")):
        return None
    return normalized


class AssetStore:
    """
    drive 루트 기반 정적 파일 저장소.

    Usage:
        store = AssetStore(Path("resources"))
        content = store.get("/templates/letter.txt")
    """

    def __init__(self, root: Path):
        self.root = root.resolve()
        self._cache: dict[str, bytes] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def get(self, uri: str) -> bytes | None:
        """
        URI에 해당하는 파일 내용 반환.

        Args:
            uri: 요청 경로 (예: "/style.css")

        Returns:
            파일 bytes, 없으면 None
        """
        key = normalize_uri(uri)
        if key is None:
            return None

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        lock = self._lock_for(key)
        with lock:
            try:
                # 락 대기 중 다른 요청이 채웠을 수 있음
                cached = self._cache.get(key)
                if cached is not None:
                    return cached

                content = self._read_from_disk(key)
                if content is not None:
                    self._cache[key] = content
                    logger.debug(f"Cached asset {key} ({len(content)} bytes)")
                return content
            finally:
                self._release_lock(key, lock)

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def _release_lock(self, key: str, lock: threading.Lock) -> None:
        """채우기가 끝난 키의 락 제거 (락 맵은 진행 중인 키만 보유)."""
        with self._locks_guard:
            if self._locks.get(key) is lock:
                del self._locks[key]

    def _read_from_disk(self, key: str) -> bytes | None:
        """디스크에서 읽기. 실패 시 None."""
        path = self.root / key.lstrip("/")
        try:
            # 심볼릭 링크로 루트를 벗어나는 경우 차단
            path.resolve().relative_to(self.root)
            return path.read_bytes()
        except (OSError, ValueError):
            return None

    def list_dir(self, uri: str) -> list[str]:
        """
        디렉터리 내 파일 이름 목록 (정렬됨, 하위 디렉터리 제외).

        Returns:
            파일 이름 목록, 디렉터리가 없으면 빈 목록
        """
        key = normalize_uri(uri)
        if key is None:
            return []

        directory = self.root / key.lstrip("/")
        if not directory.is_dir():
            return []
        return sorted(p.name for p in directory.iterdir() if p.is_file())
