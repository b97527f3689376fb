"""
Template Processing Service: 템플릿 검증 → JSON 파싱 → 병합 → (PDF 변환).

상태 흐름 (요청 단위):
    Validating → Parsing → Merging → (Converting) → Responding
어느 단계에서든 TemplaterError로 즉시 실패 응답. 재시도 없음.

검증 순서:
1. template 파라미터 존재 + templates/ 하위 파일 존재 → 아니면 400
2. 확장자 추출 가능 → 아니면 400
3. (라우터) 요청 본문 소비 → form 필드 병합
4. json 파라미터 파싱 (없으면 None, 형식 오류면 400 + byte offset)
"""

import json
import logging
from typing import Any

from src.core.assets import AssetStore, normalize_uri
from src.domain.errors import (
    MSG_CONVERSION_FAILED,
    MSG_TEMPLATE_NOT_FOUND,
    ClientInputError,
    ConversionFailure,
    ErrorCodes,
)
from src.domain.schemas import RenderedDocument, TemplateRef, split_extension
from src.render import PdfConverter, TemplateEngine

logger = logging.getLogger(__name__)


def parse_to_pdf(value: str | None) -> bool:
    """toPdf 파라미터: 정확히 "true"만 참."""
    return value == "true"


def parse_json_payload(payload: str | None) -> Any:
    """
    json 파라미터 → 역직렬화 값.

    Args:
        payload: JSON 문자열 (None이면 데이터 없음)

    Returns:
        dict/list/스칼라 또는 None

    Raises:
        ClientInputError: INVALID_JSON (메시지 + 실패 위치 byte offset)
    """
    if payload is None:
        return None

    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        offset = len(payload[: e.pos].encode("utf-8"))
        raise ClientInputError(
            ErrorCodes.INVALID_JSON,
            f"{e.msg} at offset {offset}",
            offset=offset,
        ) from e


class TemplateProcessingService:
    """
    템플릿 처리 오케스트레이터.

    Usage:
        service = TemplateProcessingService(assets, engine, converter)
        template = service.resolve_template("letter.docx")
        document = service.render(template, {"name": "x"}, to_pdf=False)
    """

    def __init__(
        self,
        assets: AssetStore,
        engine: TemplateEngine,
        converter: PdfConverter,
        templates_dir: str = "templates",
    ):
        self.assets = assets
        self.engine = engine
        self.converter = converter
        stripped = templates_dir.strip("/")
        self.templates_prefix = f"/{stripped}/" if stripped else "/"

    def resolve_template(self, template_name: str | None) -> TemplateRef:
        """
        템플릿 이름 검증 + 로드.

        Raises:
            ClientInputError: TEMPLATE_NOT_FOUND, MISSING_EXTENSION
        """
        content = None
        if template_name:
            key = normalize_uri(self.templates_prefix + template_name)
            # templates/ 밖을 가리키는 이름("../x")은 없는 것으로 처리
            if key is not None and key.startswith(self.templates_prefix):
                content = self.assets.get(key)

        if content is None:
            raise ClientInputError(
                ErrorCodes.TEMPLATE_NOT_FOUND,
                MSG_TEMPLATE_NOT_FOUND,
                template=template_name,
            )

        base_name, ext = split_extension(template_name)
        return TemplateRef(
            name=template_name,
            base_name=base_name,
            extension=ext,
            content=content,
        )

    def render(self, template: TemplateRef, data: Any, to_pdf: bool) -> RenderedDocument:
        """
        병합 + (선택) PDF 변환. 블로킹 → 스레드풀에서 호출.

        Raises:
            EngineFailure: 엔진 실패
            ConversionFailure: PDF 변환 실패
        """
        merged = self.engine.process(template.content, data, template.format)

        if not to_pdf:
            return RenderedDocument(
                content=merged,
                base_name=template.base_name,
                extension=template.extension,
            )

        pdf = self.converter.convert(merged, template.extension)
        if pdf is None:
            raise ConversionFailure(
                ErrorCodes.CONVERSION_FAILED,
                MSG_CONVERSION_FAILED,
                template=template.name,
            )

        return RenderedDocument(content=pdf, base_name=template.base_name, extension="pdf")
