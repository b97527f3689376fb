"""
App Services.

- TemplateProcessingService: 템플릿 검증 → 병합 → PDF 변환
"""

from .process import TemplateProcessingService, parse_json_payload, parse_to_pdf

__all__ = [
    "TemplateProcessingService",
    "parse_json_payload",
    "parse_to_pdf",
]
