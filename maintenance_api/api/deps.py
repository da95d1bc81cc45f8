"""FastAPI 의존성 주입 모듈: 저장소 및 업데이트 추적기.

FastAPI dependency injection module: Collection store and update tracker.
Both are process-wide singletons built from settings; tests replace them
through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends

from maintenance_api.config import settings
from maintenance_api.repositories.base import JsonCollectionStore
from maintenance_api.repositories.paths import InstitutionPaths, ensure_safe_segment
from maintenance_api.services.update_tracker import UpdateTracker

_tracker: UpdateTracker = UpdateTracker()
_store: JsonCollectionStore = JsonCollectionStore(
    InstitutionPaths(settings.DATA_DIR), listener=_tracker
)


def get_tracker() -> UpdateTracker:
    return _tracker


def get_store() -> JsonCollectionStore:
    return _store


def get_institution_id(institution_id: str) -> str:
    """경로의 기관 ID를 검증합니다 (Validate the institution id path parameter)."""
    return ensure_safe_segment(institution_id, "institution id")


StoreDep = Annotated[JsonCollectionStore, Depends(get_store)]
TrackerDep = Annotated[UpdateTracker, Depends(get_tracker)]
InstitutionDep = Annotated[str, Depends(get_institution_id)]
