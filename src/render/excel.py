"""
Excel (XLSX) 렌더러: openpyxl + Jinja2 기반.

- 각 시트의 문자열 셀 중 Jinja2 태그({{ }}, {% %})가 있는 셀만 렌더링
- 셀 전체가 단일 표현식({{ amount }})이고 결과가 숫자면 숫자로 기록
- 서식/수식/이름 범위는 그대로 유지
"""

import re
from io import BytesIO
from typing import Any

from openpyxl import load_workbook
from openpyxl.workbook import Workbook

from src.domain.errors import EngineFailure, ErrorCodes
from src.render.base import DataEnvironment, TemplateRenderer, build_context

# 셀 전체가 하나의 변수 표현식인지 판단 ({{ a.b }} 형태)
SINGLE_EXPRESSION = re.compile(r"^\s*\{\{\s*([A-Za-z_][\w.]*)\s*\}\}\s*$")


class XlsxRenderer(TemplateRenderer):
    """
    Excel 문서 렌더러.

    Usage:
        renderer = XlsxRenderer()
        output = renderer.render(template_bytes, {"total": 10}, "xlsx")
    """

    formats = ("xlsx",)

    def __init__(self) -> None:
        self._env = DataEnvironment()

    def render(self, template: bytes, data: Any, fmt: str = "xlsx") -> bytes:
        """
        템플릿에 데이터를 채워 Excel 문서 생성.

        Raises:
            EngineFailure: RENDER_FAILED
        """
        try:
            wb = load_workbook(BytesIO(template))
            self._fill_cells(wb, build_context(data))

            output = BytesIO()
            wb.save(output)
            return output.getvalue()

        except Exception as e:
            raise EngineFailure(
                ErrorCodes.RENDER_FAILED,
                str(e) or e.__class__.__name__,
                format=fmt,
            ) from e

    def _fill_cells(self, wb: Workbook, context: dict[str, Any]) -> None:
        """태그가 있는 모든 셀 렌더링."""
        for ws in wb.worksheets:
            for row in ws.iter_rows():
                for cell in row:
                    value = cell.value
                    if not isinstance(value, str):
                        continue
                    if "{{" not in value and "{%" not in value:
                        continue
                    cell.value = self._render_cell(value, context)

    def _render_cell(self, value: str, context: dict[str, Any]) -> Any:
        """셀 하나 렌더링 (단일 숫자 표현식은 숫자 유지)."""
        match = SINGLE_EXPRESSION.match(value)
        if match:
            resolved = self._lookup(match.group(1), context)
            if isinstance(resolved, (int, float)):
                return resolved

        return self._env.from_string(value).render(context)

    @staticmethod
    def _lookup(expression: str, context: dict[str, Any]) -> Any:
        """점 표기 경로로 값 조회 (없으면 None)."""
        current: Any = context
        for part in expression.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return None
        return current
