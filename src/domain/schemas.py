"""
Data schemas for the templater server.

- TemplateRef: 요청된 템플릿 (이름, 확장자, 기본 이름, 원본 bytes)
- RenderedDocument: 최종 응답으로 나갈 문서
"""

import posixpath
from dataclasses import dataclass
from typing import Any

from src.domain.constants import mime_type_for
from src.domain.errors import MSG_MISSING_EXTENSION, ClientInputError, ErrorCodes


def split_extension(template_name: str) -> tuple[str, str]:
    """
    템플릿 이름을 (기본 이름, 확장자)로 분리.

    확장자는 파일명 마지막 "." 이후 텍스트.
    디렉터리 부분("reports/")은 기본 이름에서 제외.

    Raises:
        ClientInputError: MISSING_EXTENSION ("." 없음 또는 빈 확장자)
    """
    file_name = posixpath.basename(template_name)
    base_name, dot, ext = file_name.rpartition(".")
    if not dot or not ext:
        raise ClientInputError(
            ErrorCodes.MISSING_EXTENSION,
            MSG_MISSING_EXTENSION,
            template=template_name,
        )
    return base_name, ext


@dataclass(frozen=True)
class TemplateRef:
    """템플릿 참조 (templates/ 하위 상대 경로)."""
    name: str
    base_name: str
    extension: str
    content: bytes

    @property
    def format(self) -> str:
        """엔진에 전달할 형식 (소문자 확장자)."""
        return self.extension.lower()


@dataclass
class RenderedDocument:
    """응답 문서 (병합 결과 또는 PDF 변환 결과)."""
    content: bytes
    base_name: str
    extension: str

    @property
    def filename(self) -> str:
        return f"{self.base_name}.{self.extension}"

    @property
    def media_type(self) -> str:
        return mime_type_for(self.extension)

    def to_dict(self) -> dict[str, Any]:
        """로그 직렬화용 (본문 제외)."""
        return {
            "filename": self.filename,
            "media_type": self.media_type,
            "size": len(self.content),
        }
