"""
PDF 변환기: LibreOffice headless 서브프로세스.

절차:
1. 병합 결과를 고유 이름 임시 파일(원래 확장자)로 기록
2. libreoffice --headless --convert-to pdf <file> 실행 (cwd = 임시 디렉터리)
3. timeout 초과 시 프로세스 kill → 결과 없음
4. 결과 파일(<stem>.pdf) 읽기
5. 입력/출력 임시 파일은 성공/실패 관계없이 항상 삭제
"""

import logging
import subprocess
import tempfile
from pathlib import Path

from src.domain.constants import (
    DEFAULT_CONVERSION_TIMEOUT_SECONDS,
    DEFAULT_OFFICE_EXECUTABLE,
    OFFICE_CONVERT_FLAGS,
    TEMP_FILE_PREFIX,
)
from src.domain.errors import ConversionFailure, ErrorCodes

logger = logging.getLogger(__name__)


class PdfConverter:
    """
    LibreOffice 기반 PDF 변환기.

    Usage:
        converter = PdfConverter(timeout=30)
        pdf_bytes = converter.convert(docx_bytes, "docx")  # None이면 실패
    """

    def __init__(
        self,
        executable: str = DEFAULT_OFFICE_EXECUTABLE,
        timeout: float = DEFAULT_CONVERSION_TIMEOUT_SECONDS,
        tmp_dir: Path | None = None,
    ):
        """
        Args:
            executable: LibreOffice 실행 파일 (PATH 검색 또는 절대 경로)
            timeout: 프로세스 대기 시간 (초)
            tmp_dir: 임시 파일 디렉터리 (None이면 시스템 기본)
        """
        self.executable = executable
        self.timeout = timeout
        self.tmp_dir = tmp_dir

    def build_command(self, input_path: Path) -> list[str]:
        """변환 명령 구성."""
        return [self.executable, *OFFICE_CONVERT_FLAGS, str(input_path)]

    def convert(self, document: bytes, ext: str) -> bytes | None:
        """
        문서 bytes → PDF bytes.

        Args:
            document: 원본 문서 bytes
            ext: 원본 확장자 (예: "docx")

        Returns:
            PDF bytes, timeout 또는 결과 파일 없음이면 None

        Raises:
            ConversionFailure: CONVERTER_UNAVAILABLE (실행 파일 실행 불가)
        """
        with tempfile.NamedTemporaryFile(
            prefix=TEMP_FILE_PREFIX,
            suffix=f".{ext}",
            dir=self.tmp_dir,
            delete=False,
        ) as tmp:
            tmp.write(document)
            input_path = Path(tmp.name)

        output_path = input_path.with_suffix(".pdf")

        try:
            if not self._run(input_path):
                return None
            if not output_path.is_file():
                logger.warning(f"PDF output not produced for {input_path.name}")
                return None
            return output_path.read_bytes()

        finally:
            for path in (input_path, output_path):
                try:
                    path.unlink(missing_ok=True)
                except OSError as e:
                    logger.warning(f"Failed to remove temp file {path}: {e}")

    def _run(self, input_path: Path) -> bool:
        """
        변환 프로세스 실행.

        Returns:
            timeout 내 종료 여부
        """
        command = self.build_command(input_path)
        try:
            # timeout 시 subprocess.run이 자식 프로세스를 kill + 회수
            completed = subprocess.run(
                command,
                cwd=input_path.parent,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                f"PDF conversion timed out after {self.timeout}s: {input_path.name}"
            )
            return False
        except OSError as e:
            raise ConversionFailure(
                ErrorCodes.CONVERTER_UNAVAILABLE,
                f"Unable to start {self.executable}: {e}",
                executable=self.executable,
            ) from e

        if completed.returncode != 0:
            logger.warning(
                f"{self.executable} exited with {completed.returncode}: "
                f"{completed.stderr.decode('utf-8', 'replace').strip()}"
            )
        return True
