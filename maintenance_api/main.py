"""FastAPI 애플리케이션 엔트리포인트: 미들웨어, 라우터, 주기 작업 등록.

FastAPI application entry point: Middleware, routers and background tasks.
On startup the last-update tracker is seeded from file modification times
and the orphaned-media sweep is scheduled.
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from maintenance_api.api.auth import router as auth_router
from maintenance_api.api.deps import get_store, get_tracker
from maintenance_api.api.institutions import institutions_router
from maintenance_api.config import settings
from maintenance_api.middleware.axiom_logging import AxiomLoggingMiddleware
from maintenance_api.scheduler import cleanup_loop
from maintenance_api.utils.exceptions import AppError, app_error_handler

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """시작 시 추적기 초기화 및 정리 작업 시작, 종료 시 취소."""
    store = get_store()
    get_tracker().seed(store.paths)

    cleanup_task: asyncio.Task | None = None
    if settings.MEDIA_CLEANUP_INTERVAL_SECONDS > 0:
        cleanup_task = asyncio.create_task(
            cleanup_loop(store, settings.MEDIA_CLEANUP_INTERVAL_SECONDS)
        )
        logger.info(
            "Media cleanup scheduled every %d seconds", settings.MEDIA_CLEANUP_INTERVAL_SECONDS
        )
    try:
        yield
    finally:
        if cleanup_task is not None:
            cleanup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await cleanup_task


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Axiom API 로깅 미들웨어: CORS보다 먼저 등록하여 모든 요청을 캡처
# Registered before CORS to capture all requests
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(auth_router, tags=["Auth"])
app.include_router(institutions_router, prefix="/institutions/{institution_id}")
