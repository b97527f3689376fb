"""
Domain Constants: 서버 전역 상수.

경로, 라우트, MIME 테이블 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Routes
# =============================================================================

INDEX_PATH = "/"
PROCESS_PATH = "/process"

# 메서드 구분 없이 동일 라우팅
ALL_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]

# =============================================================================
# Drive Directory Structure (정적 파일 루트)
# =============================================================================
# resources/
# ├── templates/     # 템플릿 파일 (읽기 전용 입력)
# ├── style.css
# └── app.js

DEFAULT_DRIVE_ROOT = "resources"
DEFAULT_TEMPLATES_DIR = "templates"

# =============================================================================
# Server / Converter Defaults
# =============================================================================

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7777

DEFAULT_OFFICE_EXECUTABLE = "libreoffice"
DEFAULT_CONVERSION_TIMEOUT_SECONDS = 30
# 변환 명령 고정 플래그 (입력 파일 경로는 마지막에 추가)
OFFICE_CONVERT_FLAGS = (
    "--norestore",
    "--nofirststartwizard",
    "--nologo",
    "--headless",
    "--convert-to",
    "pdf",
)
TEMP_FILE_PREFIX = "templaterDocument"

# =============================================================================
# Request Parameters
# =============================================================================

PARAM_TEMPLATE = "template"
PARAM_TO_PDF = "toPdf"
PARAM_JSON = "json"

# =============================================================================
# MIME Types
# =============================================================================
# 순서 중요: 접미사 매칭은 위에서부터 (예: "xhtml"도 html로 판정)

MIME_HTML = "text/html"
MIME_PLAINTEXT = "text/plain"
MIME_PDF = "application/pdf"

MIME_TYPES: tuple[tuple[str, str], ...] = (
    ("html", MIME_HTML),
    ("js", "text/javascript"),
    ("css", "text/css"),
    ("xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
    ("docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    ("pdf", MIME_PDF),
)


def mime_type_for(resource_path: str) -> str:
    """
    경로(또는 확장자)의 접미사로 MIME 타입 결정.

    Args:
        resource_path: 파일 경로 또는 확장자 (예: "/style.css", "docx")

    Returns:
        MIME 타입 (매칭 없으면 text/plain)
    """
    for suffix, mime in MIME_TYPES:
        if resource_path.endswith(suffix):
            return mime
    return MIME_PLAINTEXT
