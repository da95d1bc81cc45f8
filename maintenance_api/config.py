"""애플리케이션 환경 설정 모듈.

Application configuration module using pydantic-settings.
All settings can be overridden via environment variables or a .env file.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# .env 파일 절대 경로: CWD와 무관하게 항상 프로젝트 루트의 .env를 참조
# Absolute path to .env file: ensures correct loading regardless of CWD
_ENV_FILE: Path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """애플리케이션 전역 설정: 환경 변수 기반 구성.

    Global application settings loaded from environment variables.
    Uses pydantic-settings for automatic env var parsing and .env file support.

    Attributes:
        DATA_DIR: 기관별 JSON 파일 루트 디렉토리 (Root directory holding institutions/)
        PUBLIC_BASE_URL: 미디어 URL 기본 주소 (Base URL for media links; request host if empty)
        MEDIA_MAX_BYTES: 업로드 최대 크기 (Upload size ceiling in bytes)
        MEDIA_ALLOWED_PREFIXES: 허용 MIME 접두사 (Accepted MIME type prefixes)
        MEDIA_CLEANUP_INTERVAL_SECONDS: 고아 미디어 정리 주기 (Orphan sweep interval, 0 disables)
        CORS_ORIGINS: 허용된 CORS 출처 목록 (Allowed CORS origin URLs)
        DEBUG: 디버그 모드, 오류 시 트레이스백 응답 (FastAPI debug mode)
        LOG_LEVEL: 로그 레벨 (Root logging level)
    """

    # 앱 메타데이터: Application metadata
    APP_NAME: str = "Maintenance Tracker API"
    DEBUG: bool = False

    # 저장소: JSON 파일 저장 위치 (JSON file storage location)
    DATA_DIR: str = "data"

    # 미디어 업로드 설정: Media upload settings
    PUBLIC_BASE_URL: str = ""  # 비어 있으면 요청 호스트 사용 (Empty: use the request's base URL)
    MEDIA_MAX_BYTES: int = 50 * 1024 * 1024  # 50MB
    MEDIA_ALLOWED_PREFIXES: List[str] = ["image/", "video/"]
    MEDIA_CLEANUP_INTERVAL_SECONDS: int = 3600  # 1시간 (Hourly)

    # CORS 설정: 모바일 클라이언트가 임의 출처에서 접근 (Mobile clients connect from any origin)
    CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    # Axiom 로깅 설정: Axiom observability platform settings
    AXIOM_API_TOKEN: str = ""  # Axiom API 토큰 (API token from Axiom dashboard)
    AXIOM_DATASET: str = ""  # Axiom 데이터셋 이름 (Dataset name for API logs)

    model_config = {"env_file": _ENV_FILE, "env_file_encoding": "utf-8"}


# 전역 설정 싱글턴 인스턴스: Global settings singleton instance
settings: Settings = Settings()
