"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run python -m src.app.main
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from src.app.routes import drive, process
from src.app.services.process import TemplateProcessingService
from src.core.assets import AssetStore
from src.core.logging import configure_logging
from src.domain.constants import (
    DEFAULT_CONVERSION_TIMEOUT_SECONDS,
    DEFAULT_DRIVE_ROOT,
    DEFAULT_HOST,
    DEFAULT_OFFICE_EXECUTABLE,
    DEFAULT_PORT,
    DEFAULT_TEMPLATES_DIR,
)
from src.domain.errors import TemplaterError
from src.render import PdfConverter, TemplateEngine

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

# 환경변수 → (섹션, 키, 변환)
ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "TEMPLATER_HOST": ("server", "host", str),
    "TEMPLATER_PORT": ("server", "port", int),
    "TEMPLATER_DRIVE_ROOT": ("paths", "drive_root", str),
    "TEMPLATER_OFFICE_BIN": ("converter", "executable", str),
    "TEMPLATER_LOG_LEVEL": ("logging", "level", str),
}

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def apply_env_overrides(config: dict, environ: dict[str, str] | None = None) -> dict:
    """
    환경변수로 설정 덮어쓰기.

    Args:
        config: load_config 결과
        environ: 환경변수 (None이면 os.environ)

    Returns:
        덮어쓴 설정 (입력 dict 수정 안 함)
    """
    environ = os.environ if environ is None else environ
    merged = {section: dict(values or {}) for section, values in config.items()}

    for env_name, (section, key, cast) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            merged.setdefault(section, {})[key] = cast(value)

    return merged


def _section(config: dict, name: str) -> dict[str, Any]:
    return config.get(name) or {}


def resolve_drive_root(config: dict) -> Path:
    """drive 루트 경로 (상대 경로는 프로젝트 루트 기준)."""
    drive_root = Path(_section(config, "paths").get("drive_root", DEFAULT_DRIVE_ROOT))
    if not drive_root.is_absolute():
        drive_root = PROJECT_ROOT / drive_root
    return drive_root


def build_converter(config: dict) -> PdfConverter:
    converter_config = _section(config, "converter")
    tmp_dir = converter_config.get("tmp_dir")
    return PdfConverter(
        executable=converter_config.get("executable", DEFAULT_OFFICE_EXECUTABLE),
        timeout=float(
            converter_config.get("timeout_seconds", DEFAULT_CONVERSION_TIMEOUT_SECONDS)
        ),
        tmp_dir=Path(tmp_dir) if tmp_dir else None,
    )


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 자원 저장소, 엔진, 변환기 구성 + 인덱스 페이지 1회 생성
    종료 시: 정리할 자원 없음 (캐시는 프로세스 수명)
    """
    config: dict = app.state.config
    templates_dir = _section(config, "paths").get("templates_dir", DEFAULT_TEMPLATES_DIR)

    assets = AssetStore(resolve_drive_root(config))
    engine = TemplateEngine()

    app.state.assets = assets
    app.state.processor = TemplateProcessingService(
        assets=assets,
        engine=engine,
        converter=build_converter(config),
        templates_dir=templates_dir,
    )

    template_names = assets.list_dir(templates_dir)
    if not template_names:
        logger.warning(f"No templates found under {assets.root / templates_dir}")
    app.state.index_html = drive.build_index_html(template_names)

    logger.info(
        f"Serving {assets.root} ({len(template_names)} templates, "
        f"formats: {', '.join(engine.formats)})"
    )

    yield


# =============================================================================
# App Factory
# =============================================================================


async def templater_error_handler(request: Request, exc: TemplaterError) -> PlainTextResponse:
    """TemplaterError → 상태 코드 + 메시지 본문."""
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def create_app(config: dict | None = None) -> FastAPI:
    """
    FastAPI 앱 생성.

    Args:
        config: 설정 dict (None이면 default.yaml + 환경변수)
    """
    if config is None:
        load_dotenv()
        config = apply_env_overrides(load_config())

    configure_logging(config)

    app = FastAPI(
        title="Templater Server",
        description="템플릿 + JSON → 문서 (DOCX/XLSX/텍스트, 선택적 PDF 변환)",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config

    app.add_exception_handler(TemplaterError, templater_error_handler)

    # 등록 순서: process → drive (catch-all)
    app.include_router(process.router, tags=["Process"])
    app.include_router(drive.router, tags=["Drive"])

    return app


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================


def main() -> None:
    import uvicorn

    server_config = _section(app.state.config, "server")
    uvicorn.run(
        app,
        host=server_config.get("host", DEFAULT_HOST),
        port=int(server_config.get("port", DEFAULT_PORT)),
    )


if __name__ == "__main__":
    main()
