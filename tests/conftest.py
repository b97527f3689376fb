"""
Pytest fixtures for the templater server tests.

구성:
- drive_root: 임시 drive 루트 (templates/ + 정적 파일)
- DOCX/XLSX 템플릿: python-docx / openpyxl로 생성
- client: 임시 drive 루트를 사용하는 FastAPI TestClient
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from docx import Document
from fastapi.testclient import TestClient
from openpyxl import Workbook

# =============================================================================
# Template Fixtures
# =============================================================================


def make_docx_template(path: Path) -> Path:
    """placeholder: {{ name }}, {{ city }}"""
    doc = Document()
    doc.add_heading("Invoice", 0)
    doc.add_paragraph("Customer: {{ name }}")
    doc.add_paragraph("City: {{ city }}")
    doc.save(path)
    return path


def make_xlsx_template(path: Path) -> Path:
    """A1: 텍스트 placeholder, B2: 숫자 placeholder, C3: 일반 값."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Report"
    ws["A1"] = "Customer: {{ name }}"
    ws["B2"] = "{{ total }}"
    ws["C3"] = "static"
    ws["D4"] = 42
    wb.save(path)
    return path


@pytest.fixture
def docx_template(tmp_path: Path) -> Path:
    return make_docx_template(tmp_path / "invoice.docx")


@pytest.fixture
def xlsx_template(tmp_path: Path) -> Path:
    return make_xlsx_template(tmp_path / "report.xlsx")


@pytest.fixture
def sample_templates() -> Path:
    """기본 drive에 포함된 예제 템플릿 디렉터리."""
    return Path(__file__).resolve().parent.parent / "resources" / "templates"


# =============================================================================
# Drive Fixtures
# =============================================================================


@pytest.fixture
def drive_root(tmp_path: Path) -> Path:
    """
    임시 drive 루트.

    포함:
    - templates/letter.txt, page.html, invoice.docx, report.xlsx, README (확장자 없음)
    - style.css, app.js
    """
    root = tmp_path / "drive"
    templates = root / "templates"
    templates.mkdir(parents=True)

    (templates / "letter.txt").write_text(
        "Dear {{ name }},\n{% for item in items %}- {{ item }}\n{% endfor %}",
        encoding="utf-8",
    )
    (templates / "page.html").write_text("<h1>{{ title }}</h1>", encoding="utf-8")
    (templates / "README").write_text("no extension", encoding="utf-8")
    make_docx_template(templates / "invoice.docx")
    make_xlsx_template(templates / "report.xlsx")

    (root / "style.css").write_text("body { margin: 0; }", encoding="utf-8")
    (root / "app.js").write_text("console.log('hi');", encoding="utf-8")

    return root


@pytest.fixture
def convert_dir(tmp_path: Path) -> Path:
    """PDF 변환 임시 디렉터리 (잔여 파일 검사용)."""
    path = tmp_path / "convert"
    path.mkdir()
    return path


@pytest.fixture
def app_config(drive_root: Path, convert_dir: Path) -> dict:
    """테스트용 설정."""
    return {
        "paths": {
            "drive_root": str(drive_root),
            "templates_dir": "templates",
        },
        "converter": {
            "executable": "libreoffice",
            "timeout_seconds": 30,
            "tmp_dir": str(convert_dir),
        },
        "logging": {"level": "DEBUG"},
    }


@pytest.fixture
def client(app_config: dict) -> Generator[TestClient, None, None]:
    """임시 drive 루트를 사용하는 TestClient."""
    from src.app.main import create_app

    with TestClient(create_app(app_config)) as client:
        yield client
