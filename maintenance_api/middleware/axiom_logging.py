"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and sends structured logs to Axiom.
Logs: institution id, endpoint, method, JSON body, status code, error message.
Passwords in login bodies and worker rosters are masked; multipart media
uploads are never captured.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from maintenance_api.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴: Fields to mask in request bodies
_SENSITIVE_KEYS = re.compile(r"(password|passwd|secret|token|authorization)", re.IGNORECASE)

# 로깅 제외 경로: Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 기관 경로에서 ID 추출: /institutions/<id>/...
_INSTITUTION_PATH = re.compile(r"^/institutions/([^/]+)/")


def _mask(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹: Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask(item, depth + 1) for item in data[:20]]
    return data


def _error_message(body: bytes) -> str:
    """에러 응답 본문에서 사유 추출: {"message"} or FastAPI's {"detail"}."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:500]
    if isinstance(data, dict):
        return str(data.get("message") or data.get("detail") or data)[:500]
    return str(data)[:500]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom. Without a
    token and dataset configured it is a passthrough.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS or not self._client:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path
        match = _INSTITUTION_PATH.match(path)
        institution_id = match.group(1) if match else None

        # JSON 본문만 수집: Only JSON bodies are captured
        request_body: Any = None
        content_type = request.headers.get("content-type", "")
        if method in ("POST", "PUT") and content_type.startswith("application/json"):
            body_bytes = await request.body()
            try:
                request_body = _mask(json.loads(body_bytes)) if body_bytes else None
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(invalid json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _error_message(resp_body)

                # 소비한 body를 다시 응답으로 반환: Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if institution_id:
                log_event["institution_id"] = institution_id
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception:
                # 로깅 실패가 요청 처리에 영향주지 않도록: Never break a request on log failure
                logger.warning("Axiom ingest failed for %s %s", method, path, exc_info=True)

        return response
