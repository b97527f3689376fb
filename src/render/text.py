"""
텍스트 렌더러: Jinja2 기반 (txt, html, xml, csv, md).

HTML/XML은 autoescape 적용.
"""

from typing import Any

from src.domain.errors import EngineFailure, ErrorCodes
from src.render.base import DataEnvironment, TemplateRenderer, build_context

ESCAPED_FORMATS = ("html", "htm", "xml")


class TextRenderer(TemplateRenderer):
    """UTF-8 텍스트 템플릿 렌더러."""

    formats = ("txt", "html", "htm", "xml", "csv", "md")

    def __init__(self) -> None:
        self._plain = DataEnvironment(keep_trailing_newline=True)
        self._escaped = DataEnvironment(keep_trailing_newline=True, autoescape=True)

    def render(self, template: bytes, data: Any, fmt: str = "txt") -> bytes:
        env = self._escaped if fmt in ESCAPED_FORMATS else self._plain
        try:
            source = template.decode("utf-8-sig")
            return env.from_string(source).render(build_context(data)).encode("utf-8")
        except Exception as e:
            raise EngineFailure(
                ErrorCodes.RENDER_FAILED,
                str(e) or e.__class__.__name__,
                format=fmt,
            ) from e
