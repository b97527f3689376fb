"""
Word (DOCX) 렌더러: docxtpl 기반.

- placeholder: Jinja2 문법 ({{ name }}, {% for row in rows %})
- 메모리 내 처리 (BytesIO) → 임시 파일 없음
"""

from io import BytesIO
from typing import Any

from docxtpl import DocxTemplate

from src.domain.errors import EngineFailure, ErrorCodes
from src.render.base import DataEnvironment, TemplateRenderer, build_context


class DocxRenderer(TemplateRenderer):
    """
    Word 문서 렌더러.

    Usage:
        renderer = DocxRenderer()
        output = renderer.render(template_bytes, {"name": "홍길동"}, "docx")
    """

    formats = ("docx",)

    def __init__(self) -> None:
        self._env = DataEnvironment()

    def render(self, template: bytes, data: Any, fmt: str = "docx") -> bytes:
        """
        템플릿에 데이터를 채워 Word 문서 생성.

        Args:
            template: DOCX 템플릿 bytes
            data: JSON 역직렬화 값 (dict 권장)
            fmt: 형식 (docx)

        Returns:
            병합된 DOCX bytes

        Raises:
            EngineFailure: RENDER_FAILED
        """
        try:
            doc = DocxTemplate(BytesIO(template))
            doc.render(build_context(data), jinja_env=self._env)

            output = BytesIO()
            doc.save(output)
            return output.getvalue()

        except Exception as e:
            raise EngineFailure(
                ErrorCodes.RENDER_FAILED,
                str(e) or e.__class__.__name__,
                format=fmt,
            ) from e
