"""기관 API 라우터 패키지: 모든 기관 범위 엔드포인트 통합.

Institution API Router package: Aggregates every endpoint scoped under
``/institutions/{institution_id}``.

Included routers:
    - maintenance_requests: 정비 요청 및 상태 전이 (Requests and transitions)
    - roster: 작업자/도시 참조 데이터 (Workers and cities)
    - media: 첨부 파일 (Media attachments)
    - sync: 최종 업데이트 폴링 (Last-update polling)
"""

from fastapi import APIRouter

from maintenance_api.api.institutions.maintenance_requests import router as maintenance_requests_router
from maintenance_api.api.institutions.media import router as media_router
from maintenance_api.api.institutions.roster import router as roster_router
from maintenance_api.api.institutions.sync import router as sync_router

institutions_router: APIRouter = APIRouter()

institutions_router.include_router(maintenance_requests_router, tags=["Maintenance Requests"])
institutions_router.include_router(roster_router, tags=["Roster"])
institutions_router.include_router(media_router, tags=["Media"])
institutions_router.include_router(sync_router, tags=["Sync"])
