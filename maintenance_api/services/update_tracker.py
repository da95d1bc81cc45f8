"""최종 업데이트 시각 추적기.

Update-time tracker: Process-wide map from institution id to the ISO
timestamp of its last maintenance-request write. Polling clients compare
this value instead of diffing whole collections.

The map lives only for the process lifetime. ``seed`` rebuilds it at
startup from file modification times so a cold start does not report
"never updated" for existing data.
"""

import logging
from datetime import datetime, timezone

from maintenance_api.repositories.paths import InstitutionPaths, ResourceKind

logger = logging.getLogger(__name__)


def _iso(ts: datetime) -> str:
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UpdateTracker:
    """기관별 최종 업데이트 시각 저장소.

    Injectable in-memory store of last-update timestamps.
    """

    def __init__(self) -> None:
        self._last_updates: dict[str, str] = {}

    def record_update(self, institution_id: str) -> None:
        self._last_updates[institution_id] = _iso(datetime.now(timezone.utc))

    def get_last_update(self, institution_id: str) -> str | None:
        return self._last_updates.get(institution_id)

    def reset(self) -> None:
        self._last_updates.clear()

    def seed(self, paths: InstitutionPaths) -> dict[str, str]:
        """파일 수정 시각으로 초기값을 설정합니다.

        Set each institution's value to the newest modification time of its
        open/completed files. Institutions with neither file are skipped.

        Args:
            paths: 경로 해석기 (Institution path resolver)

        Returns:
            dict[str, str]: 설정된 기관별 시각 (Seeded timestamps by institution)
        """
        seeded: dict[str, str] = {}
        for institution_id in paths.list_institutions():
            mtimes: list[float] = []
            for kind in (ResourceKind.OPEN, ResourceKind.COMPLETED):
                path = paths.resource_file(institution_id, kind)
                if path.exists():
                    mtimes.append(path.stat().st_mtime)
            if not mtimes:
                continue
            stamp = _iso(datetime.fromtimestamp(max(mtimes), tz=timezone.utc))
            self._last_updates[institution_id] = stamp
            seeded[institution_id] = stamp
        logger.info("Seeded last-update times for %d institution(s)", len(seeded))
        return seeded
