"""
Renderer 기반 클래스 + 컨텍스트 구성.

모든 렌더러는 bytes → bytes:
- 입력: 템플릿 원본 bytes, JSON 역직렬화 값
- 출력: 병합된 문서 bytes
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from jinja2 import Environment


def build_context(data: Any) -> dict[str, Any]:
    """
    JSON 값 → 템플릿 컨텍스트.

    - dict: 키가 그대로 최상위 변수
    - None: 빈 컨텍스트
    - 그 외 (list, 스칼라): "data" 변수로 노출
    """
    if data is None:
        return {}
    if isinstance(data, dict):
        return {str(k): v for k, v in data.items()}
    return {"data": data}


class DataEnvironment(Environment):
    """
    JSON 데이터용 Jinja2 환경.

    `order.items`처럼 dict 키와 dict 메서드 이름이 겹치면 키가 우선.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping):
            try:
                return obj[attribute]
            except (KeyError, TypeError):
                pass
        return super().getattr(obj, attribute)


class TemplateRenderer(ABC):
    """형식별 렌더러 인터페이스."""

    #: 처리 가능한 확장자 (소문자)
    formats: tuple[str, ...] = ()

    @abstractmethod
    def render(self, template: bytes, data: Any, fmt: str) -> bytes:
        """
        템플릿에 데이터 병합.

        Raises:
            EngineFailure: RENDER_FAILED
        """
