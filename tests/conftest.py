"""테스트 인프라: 임시 데이터 디렉토리, 저장소, httpx 클라이언트 픽스처.

Test infrastructure: Temporary data directory, collection store and httpx
client fixtures. Every test gets a fresh ``tmp_path`` data root and a fresh
update tracker injected through FastAPI dependency overrides.
"""

import json
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from maintenance_api.api.deps import get_store, get_tracker
from maintenance_api.main import app
from maintenance_api.repositories.base import JsonCollectionStore
from maintenance_api.repositories.paths import InstitutionPaths, ResourceKind
from maintenance_api.services.update_tracker import UpdateTracker

INSTITUTION = "hospitalA"


# ---------------------------------------------------------------------------
# Function-scoped: 경로, 추적기, 저장소
# ---------------------------------------------------------------------------
@pytest.fixture
def paths(tmp_path: Path) -> InstitutionPaths:
    return InstitutionPaths(tmp_path)


@pytest.fixture
def tracker() -> UpdateTracker:
    return UpdateTracker()


@pytest.fixture
def store(paths: InstitutionPaths, tracker: UpdateTracker) -> JsonCollectionStore:
    return JsonCollectionStore(paths, listener=tracker)


@pytest.fixture
def write_collection(paths: InstitutionPaths) -> Callable[..., Path]:
    """추적기를 거치지 않고 컬렉션 파일을 직접 작성합니다.

    Write a collection file directly, bypassing the store and tracker.
    """
    def _write(kind: ResourceKind, items: Any, institution_id: str = INSTITUTION) -> Path:
        path = paths.resource_file(institution_id, kind)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(items), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_collection(paths: InstitutionPaths) -> Callable[..., Any]:
    def _read(kind: ResourceKind, institution_id: str = INSTITUTION) -> Any:
        return json.loads(paths.resource_file(institution_id, kind).read_text(encoding="utf-8"))

    return _read


@pytest_asyncio.fixture
async def client(
    store: JsonCollectionStore, tracker: UpdateTracker
) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트: 저장소와 추적기를 오버라이드합니다."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_tracker] = lambda: tracker

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
