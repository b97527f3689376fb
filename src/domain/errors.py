"""
Error definitions for the templater server.

규칙:
- 조용한 실패 금지 → TemplaterError 하위 클래스로 명시적 실패
- 각 에러는 HTTP 상태 코드를 가짐 (라우터가 그대로 응답으로 변환)
- 메시지는 사람이 읽을 수 있는 문장 (응답 본문으로 노출됨)
"""

from typing import Any


class TemplaterError(Exception):
    """
    요청 처리 실패 시 발생하는 에러의 기반 클래스.

    Usage:
        raise ClientInputError(ErrorCodes.INVALID_JSON, "Unexpected end", offset=5)
    """

    status_code: int = 500

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")


class ClientInputError(TemplaterError):
    """잘못된 요청 (템플릿 없음, 확장자 없음, JSON 파싱 실패)."""

    status_code = 400


class EngineFailure(TemplaterError):
    """템플릿 엔진 처리 실패."""

    status_code = 500


class ConversionFailure(TemplaterError):
    """PDF 변환 실패 (타임아웃, 결과 파일 없음, 프로세스 오류)."""

    status_code = 500


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Client Input ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    MISSING_EXTENSION = "MISSING_EXTENSION"
    INVALID_JSON = "INVALID_JSON"

    # === Render ===
    RENDER_FAILED = "RENDER_FAILED"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    # === PDF Conversion ===
    CONVERSION_FAILED = "CONVERSION_FAILED"
    CONVERTER_UNAVAILABLE = "CONVERTER_UNAVAILABLE"


# =============================================================================
# Messages
# =============================================================================

MSG_TEMPLATE_NOT_FOUND = "Missing template name or template not found."
MSG_MISSING_EXTENSION = "File must have an extension to indicate its type."
MSG_CONVERSION_FAILED = "Failed creating report"
MSG_URL_NOT_FOUND = "URL not found!"
