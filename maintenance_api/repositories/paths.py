"""기관 디렉토리 경로 해석기.

Institution directory resolver.
Maps an institution identifier to its on-disk root and per-resource file
paths::

    <DATA_DIR>/institutions/<institution_id>/maintenance_requests.json
    <DATA_DIR>/institutions/<institution_id>/completed_maintenance_requests.json
    <DATA_DIR>/institutions/<institution_id>/workers.json
    <DATA_DIR>/institutions/<institution_id>/cities.json
    <DATA_DIR>/institutions/<institution_id>/media/<filename>

Identifiers come straight from the URL, so each path segment is checked
against a folder-safe pattern before it is joined.
"""

import re
from enum import Enum
from pathlib import Path

from maintenance_api.utils.exceptions import BadRequestError

# 폴더에 안전한 세그먼트: No separators, no leading dot, no control chars
_SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9_\-][A-Za-z0-9_\-.]*$")

MEDIA_DIRNAME: str = "media"


class ResourceKind(str, Enum):
    """기관별 리소스 종류: 파일 이름의 기준 (Base name of each resource file)."""

    OPEN = "maintenance_requests"
    COMPLETED = "completed_maintenance_requests"
    WORKERS = "workers"
    CITIES = "cities"

    @property
    def filename(self) -> str:
        return f"{self.value}.json"

    @property
    def tracks_updates(self) -> bool:
        """last-update 추적 대상 여부 (Only maintenance-request writes are tracked)."""
        return self in (ResourceKind.OPEN, ResourceKind.COMPLETED)


def ensure_safe_segment(value: str, label: str = "identifier") -> str:
    """경로 세그먼트를 검증합니다.

    Validate a single path segment (institution id or media filename).

    Raises:
        BadRequestError: 경로 탐색 가능성이 있는 값 (Value could escape its directory)
    """
    if not value or not _SAFE_SEGMENT.match(value) or value in (".", ".."):
        raise BadRequestError(f"Invalid {label}")
    return value


class InstitutionPaths:
    """기관별 파일 경로를 계산하는 해석기.

    Resolver computing per-institution file paths under a data root.

    Attributes:
        root: 데이터 루트 디렉토리 (Data root; institutions live in root/institutions)
    """

    def __init__(self, root: Path | str) -> None:
        self.root: Path = Path(root)

    @property
    def institutions_dir(self) -> Path:
        return self.root / "institutions"

    def institution_dir(self, institution_id: str) -> Path:
        return self.institutions_dir / ensure_safe_segment(institution_id, "institution id")

    def resource_file(self, institution_id: str, kind: ResourceKind) -> Path:
        return self.institution_dir(institution_id) / kind.filename

    def media_dir(self, institution_id: str) -> Path:
        return self.institution_dir(institution_id) / MEDIA_DIRNAME

    def media_file(self, institution_id: str, filename: str) -> Path:
        return self.media_dir(institution_id) / ensure_safe_segment(filename, "filename")

    def list_institutions(self) -> list[str]:
        """존재하는 기관 ID 목록을 반환합니다.

        Return the ids of every institution directory on disk.
        Sorted for reproducibility; callers must not rely on the order.
        """
        if not self.institutions_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.institutions_dir.iterdir()
            if entry.is_dir() and _SAFE_SEGMENT.match(entry.name)
        )
