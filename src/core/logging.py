"""
Logging 설정.

- 모듈별 logger: logging.getLogger(__name__)
- 출력: stderr (예상치 못한 예외는 traceback 포함)
- 레벨: default.yaml logging.level (환경변수 TEMPLATER_LOG_LEVEL로 override)
"""

import logging
import sys
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_LEVEL = "INFO"

_handler: logging.Handler | None = None


def configure_logging(config: dict[str, Any] | None = None) -> logging.Logger:
    """
    src 패키지 logger 설정.

    여러 번 호출돼도 핸들러는 한 번만 추가됨 (레벨만 갱신).

    Args:
        config: 전체 설정 dict (logging.level 사용)

    Returns:
        설정된 "src" logger
    """
    global _handler

    level_name = str(
        ((config or {}).get("logging") or {}).get("level", DEFAULT_LEVEL)
    ).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger("src")
    logger.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)

    return logger
