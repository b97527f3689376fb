"""
Drive Routes: 인덱스 페이지 + 정적 파일.

- {method} / → 시작 시 생성된 인덱스 HTML
- {method} /<path> → drive 루트 하위 파일 (메모리 캐시), 없으면 404
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates

from src.core.assets import AssetStore
from src.domain.constants import ALL_METHODS, INDEX_PATH, mime_type_for
from src.domain.errors import MSG_URL_NOT_FOUND

router = APIRouter()

# Jinja2 templates (페이지 템플릿, 문서 템플릿 아님)
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
jinja_templates = Jinja2Templates(directory=TEMPLATES_DIR)


def build_index_html(template_names: list[str]) -> str:
    """
    인덱스 페이지 생성 (시작 시 1회).

    Args:
        template_names: templates/ 하위 파일 이름 (정렬됨, 비어 있을 수 있음)
    """
    page = jinja_templates.get_template("index.html")
    return page.render(templates=template_names)


@router.api_route(INDEX_PATH, methods=ALL_METHODS, response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """템플릿 목록 페이지."""
    return HTMLResponse(content=request.app.state.index_html)


@router.api_route("/{path:path}", methods=ALL_METHODS)
async def drive_file(request: Request) -> Response:
    """drive 루트 정적 파일."""
    assets: AssetStore = request.app.state.assets
    uri = request.url.path

    content = await run_in_threadpool(assets.get, uri)
    if content is None:
        return PlainTextResponse(MSG_URL_NOT_FOUND, status_code=404)

    return Response(content=content, media_type=mime_type_for(uri))
