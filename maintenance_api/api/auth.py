"""인증 라우터: 작업자 로그인.

Auth Router: Worker login across all institutions.
"""

import asyncio

from fastapi import APIRouter

from maintenance_api.api.deps import StoreDep
from maintenance_api.schemas.auth import LoginRequest, LoginResponse
from maintenance_api.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, store: StoreDep) -> LoginResponse:
    """로그인: 실패 시 401 {"success": false}.

    Authenticate a worker and report the owning institution. The roster
    scan and its bcrypt comparisons run in a worker thread.
    """
    return await asyncio.to_thread(auth_service.authenticate, store, data)
