"""
App layer: HTTP 서버 (FastAPI).

역할:
- 라우팅: / (인덱스), /process (템플릿 처리), 그 외 (정적 파일)
- 요청 파라미터/본문 처리, 블로킹 작업은 스레드풀로 위임
- 병합/변환 로직 없음 (render에 위임)

주의: 폴더 구분
- src/app/templates/ → Jinja2 HTML (인덱스 페이지)
- resources/templates/ → 문서 템플릿 (drive 루트 하위, 처리 대상)
"""
