"""
Render layer: 템플릿 병합 + PDF 변환.

역할:
- 템플릿 bytes + JSON 값 → 병합 문서 bytes
- docxtpl (Word), openpyxl + Jinja2 (Excel), Jinja2 (텍스트)
- LibreOffice 서브프로세스 (PDF)
"""

from typing import Any

from src.domain.errors import EngineFailure, ErrorCodes

from .base import TemplateRenderer, build_context
from .excel import XlsxRenderer
from .pdf import PdfConverter
from .text import TextRenderer
from .word import DocxRenderer


class TemplateEngine:
    """
    형식(확장자)별 렌더러 디스패치.

    Usage:
        engine = TemplateEngine()
        output = engine.process(template_bytes, data, "docx")
    """

    def __init__(self, renderers: list[TemplateRenderer] | None = None):
        if renderers is None:
            renderers = [DocxRenderer(), XlsxRenderer(), TextRenderer()]

        self._renderers: dict[str, TemplateRenderer] = {}
        for renderer in renderers:
            for fmt in renderer.formats:
                self._renderers[fmt] = renderer

    @property
    def formats(self) -> list[str]:
        """지원 형식 목록."""
        return sorted(self._renderers)

    def process(self, template: bytes, data: Any, fmt: str) -> bytes:
        """
        템플릿 병합.

        Raises:
            EngineFailure: UNSUPPORTED_FORMAT, RENDER_FAILED
        """
        renderer = self._renderers.get(fmt.lower())
        if renderer is None:
            raise EngineFailure(
                ErrorCodes.UNSUPPORTED_FORMAT,
                f"Unsupported template format: {fmt}",
                format=fmt,
            )
        return renderer.render(template, data, fmt.lower())


__all__ = [
    "TemplateEngine",
    "TemplateRenderer",
    "build_context",
    "DocxRenderer",
    "XlsxRenderer",
    "TextRenderer",
    "PdfConverter",
]
