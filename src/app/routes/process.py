"""
Process Route: 템플릿 처리 요청.

- {method} /process?template=<name>&toPdf=<true|생략>
- 본문: json=<urlencoded JSON> (form-urlencoded 또는 multipart)

응답:
- 200: 병합 문서 또는 PDF (attachment)
- 400: 템플릿 없음, 확장자 없음, 본문 파싱 실패, JSON 파싱 실패
- 500: 엔진 실패, PDF 변환 실패, 예상치 못한 에러
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException

from src.app.services.process import (
    TemplateProcessingService,
    parse_json_payload,
    parse_to_pdf,
)
from src.domain.constants import (
    ALL_METHODS,
    PARAM_JSON,
    PARAM_TEMPLATE,
    PARAM_TO_PDF,
    PROCESS_PATH,
)
from src.domain.errors import TemplaterError
from src.domain.schemas import RenderedDocument

logger = logging.getLogger(__name__)

router = APIRouter()


def content_disposition(filename: str) -> str:
    """
    attachment 헤더 값.

    latin-1로 인코딩 불가한 이름은 RFC 5987 filename* 추가.
    """
    try:
        filename.encode("latin-1")
        return f"attachment;filename={filename}"
    except UnicodeEncodeError:
        fallback = filename.encode("ascii", "replace").decode("ascii")
        return f"attachment;filename={fallback};filename*=UTF-8''{quote(filename)}"


def document_response(document: RenderedDocument) -> Response:
    """렌더링 결과 → 다운로드 응답."""
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Accept-Ranges": "bytes",
            "Content-Disposition": content_disposition(document.filename),
        },
    )


@router.api_route(PROCESS_PATH + "{suffix:path}", methods=ALL_METHODS)
async def process_template(request: Request) -> Response:
    """
    템플릿 처리.

    template, toPdf는 쿼리 문자열에서 읽고,
    본문(form)을 소비한 뒤 json 파라미터를 파싱.
    """
    service: TemplateProcessingService = request.app.state.processor
    params: dict[str, str] = dict(request.query_params)

    to_pdf = parse_to_pdf(params.get(PARAM_TO_PDF))
    template = await run_in_threadpool(service.resolve_template, params.get(PARAM_TEMPLATE))

    try:
        form = await request.form()
        for key, value in form.items():
            if isinstance(value, str):
                params[key] = value

        data = parse_json_payload(params.get(PARAM_JSON))
        document = await run_in_threadpool(service.render, template, data, to_pdf)

    except TemplaterError as e:
        log = logger.warning if e.status_code >= 500 else logger.info
        log(f"Processing {template.name} failed: {e}")
        raise

    except HTTPException as e:
        # 본문 파싱 실패 (잘못된 multipart 등)
        logger.info(f"Processing {template.name} rejected: {e.detail}")
        return PlainTextResponse(str(e.detail), status_code=e.status_code)

    except Exception as e:
        logger.exception(f"Unexpected error processing {template.name}")
        return PlainTextResponse(str(e) or e.__class__.__name__, status_code=500)

    logger.info(f"Processed {template.name} → {document.to_dict()}")
    return document_response(document)
