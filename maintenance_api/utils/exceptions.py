"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error taxonomy
of the tracker. Every subclass is rendered by ``app_error_handler`` as
``{"success": false, "message": ...}`` so mobile clients only ever see a
boolean flag and a message, never a stack trace.

Usage:
    from maintenance_api.utils.exceptions import NotFoundError
    raise NotFoundError("Item not found")
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse


class AppError(HTTPException):
    """애플리케이션 예외 기본 클래스.

    Base class for errors surfaced to clients with a success flag.
    """

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(AppError):
    """404 Not Found 예외: 항목/파일을 찾을 수 없을 때 사용.

    Raised when a requested item or media file does not exist.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class BadRequestError(AppError):
    """400 Bad Request 예외: 잘못된 요청 데이터 시 사용.

    Raised for malformed identifiers and unknown ids in merge updates.
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class InvalidCredentialsError(AppError):
    """401 Unauthorized 예외: 로그인 실패 시 사용."""

    def __init__(self, detail: str = "Invalid credentials") -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail)


class UnsupportedMediaTypeError(AppError):
    """415 예외: 이미지/동영상이 아닌 업로드."""

    def __init__(self, detail: str = "Only image and video files are allowed") -> None:
        super().__init__(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail)


class PayloadTooLargeError(AppError):
    """413 예외: 업로드 크기 제한 초과."""

    def __init__(self, detail: str = "File too large") -> None:
        super().__init__(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """AppError를 success 플래그 응답으로 변환합니다.

    Render an AppError as ``{"success": false, "message": detail}``.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=exc.headers,
    )
