"""동기화 라우터: 최종 업데이트 시각 폴링.

Sync Router: Clients poll the last-update timestamp and refetch the
collections only when it changed.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from maintenance_api.api.deps import InstitutionDep, TrackerDep
from maintenance_api.schemas.common import LastUpdateResponse

router: APIRouter = APIRouter()


@router.get("/last-update", response_model=LastUpdateResponse)
async def get_last_update(institution_id: InstitutionDep, tracker: TrackerDep) -> LastUpdateResponse:
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return LastUpdateResponse(
        lastUpdate=tracker.get_last_update(institution_id),
        timestamp=now,
    )
