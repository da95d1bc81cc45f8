"""최종 업데이트 추적기 테스트.

Update tracker tests: record/get/reset and seeding from file mtimes.
"""

import os
from datetime import datetime, timezone

from maintenance_api.repositories.paths import ResourceKind
from maintenance_api.services.update_tracker import UpdateTracker


class TestUpdateTracker:

    def test_unknown_institution(self):
        assert UpdateTracker().get_last_update("x") is None

    def test_record_and_reset(self):
        tracker = UpdateTracker()
        tracker.record_update("a")
        stamp = tracker.get_last_update("a")
        assert stamp is not None and stamp.endswith("Z")

        tracker.reset()
        assert tracker.get_last_update("a") is None

    def test_seed_uses_newest_request_file(self, paths, write_collection):
        """두 요청 파일 중 가장 최근 수정 시각으로 초기화."""
        open_path = write_collection(ResourceKind.OPEN, [], "a")
        done_path = write_collection(ResourceKind.COMPLETED, [], "a")
        os.utime(open_path, (1_600_000_000, 1_600_000_000))
        os.utime(done_path, (1_700_000_000, 1_700_000_000))

        tracker = UpdateTracker()
        seeded = tracker.seed(paths)

        expected = datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert seeded == {"a": tracker.get_last_update("a")}
        assert tracker.get_last_update("a").startswith(expected.strftime("%Y-%m-%dT%H:%M:%S"))

    def test_seed_ignores_roster_only_institutions(self, paths, write_collection):
        write_collection(ResourceKind.WORKERS, [], "rosterOnly")

        tracker = UpdateTracker()
        assert tracker.seed(paths) == {}
        assert tracker.get_last_update("rosterOnly") is None
