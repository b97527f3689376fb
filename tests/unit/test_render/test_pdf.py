"""
test_pdf.py - LibreOffice PDF 변환기 테스트

subprocess.run을 mock으로 대체:
- 성공: cwd에 <stem>.pdf 생성
- timeout: TimeoutExpired → None, 임시 파일 없음
- 결과 파일 없음 → None
- 실행 파일 없음 → ConversionFailure
"""

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from src.domain.errors import ConversionFailure, ErrorCodes
from src.render.pdf import PdfConverter


def fake_libreoffice(command: list[str], cwd: Path, **kwargs) -> subprocess.CompletedProcess:
    """입력 파일 옆에 PDF를 만드는 가짜 libreoffice."""
    input_path = Path(command[-1])
    (Path(cwd) / f"{input_path.stem}.pdf").write_bytes(b"%PDF-1.4 " + input_path.read_bytes())
    return subprocess.CompletedProcess(command, 0, b"", b"")


@pytest.fixture
def converter(convert_dir: Path) -> PdfConverter:
    return PdfConverter(executable="libreoffice", timeout=30, tmp_dir=convert_dir)


class TestBuildCommand:
    """명령 구성 테스트."""

    def test_fixed_flags(self, converter: PdfConverter):
        command = converter.build_command(Path("/tmp/templaterDocument1.docx"))

        assert command == [
            "libreoffice",
            "--norestore",
            "--nofirststartwizard",
            "--nologo",
            "--headless",
            "--convert-to",
            "pdf",
            "/tmp/templaterDocument1.docx",
        ]


class TestConvert:
    """convert 테스트."""

    def test_success_returns_pdf_bytes(self, converter: PdfConverter, convert_dir: Path):
        with patch("src.render.pdf.subprocess.run", side_effect=fake_libreoffice) as run:
            result = converter.convert(b"document", "docx")

        assert result == b"%PDF-1.4 document"
        assert list(convert_dir.iterdir()) == []

        command = run.call_args.args[0]
        input_path = Path(command[-1])
        assert input_path.name.startswith("templaterDocument")
        assert input_path.suffix == ".docx"
        assert run.call_args.kwargs["cwd"] == input_path.parent
        assert run.call_args.kwargs["timeout"] == 30

    def test_temp_files_unique_per_call(self, converter: PdfConverter):
        with patch("src.render.pdf.subprocess.run", side_effect=fake_libreoffice) as run:
            converter.convert(b"a", "docx")
            converter.convert(b"b", "docx")

        first, second = (call.args[0][-1] for call in run.call_args_list)
        assert first != second

    def test_timeout_returns_none_and_cleans_up(
        self, converter: PdfConverter, convert_dir: Path
    ):
        with patch(
            "src.render.pdf.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="libreoffice", timeout=30),
        ):
            result = converter.convert(b"document", "docx")

        assert result is None
        assert list(convert_dir.iterdir()) == []

    def test_missing_output_returns_none(self, converter: PdfConverter, convert_dir: Path):
        completed = subprocess.CompletedProcess([], 1, b"", b"boom")
        with patch("src.render.pdf.subprocess.run", return_value=completed):
            result = converter.convert(b"document", "xlsx")

        assert result is None
        assert list(convert_dir.iterdir()) == []

    def test_output_read_error_still_cleans_up(
        self, converter: PdfConverter, convert_dir: Path
    ):
        def write_pdf(command, cwd, **kwargs):
            (Path(cwd) / f"{Path(command[-1]).stem}.pdf").write_bytes(b"%PDF")
            return subprocess.CompletedProcess(command, 0, b"", b"")

        with patch("src.render.pdf.subprocess.run", side_effect=write_pdf):
            with patch.object(Path, "read_bytes", side_effect=OSError("disk error")):
                with pytest.raises(OSError):
                    converter.convert(b"document", "docx")

        assert list(convert_dir.iterdir()) == []

    def test_missing_executable_raises(self, convert_dir: Path):
        converter = PdfConverter(
            executable="definitely-not-libreoffice-xyz",
            timeout=5,
            tmp_dir=convert_dir,
        )

        with pytest.raises(ConversionFailure) as exc_info:
            converter.convert(b"document", "docx")

        assert exc_info.value.code == ErrorCodes.CONVERTER_UNAVAILABLE
        assert exc_info.value.status_code == 500
        assert list(convert_dir.iterdir()) == []

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell script")
    def test_real_timeout_kills_process(self, convert_dir: Path, tmp_path: Path):
        """실제 프로세스 timeout (sleep 스크립트로 대체)."""
        script = tmp_path / "slow-office"
        script.write_text("#!/bin/sh\nexec sleep 5\n", encoding="utf-8")
        script.chmod(0o755)

        converter = PdfConverter(executable=str(script), timeout=0.2, tmp_dir=convert_dir)

        assert converter.convert(b"document", "docx") is None
        assert list(convert_dir.iterdir()) == []
