"""JSON 컬렉션 저장소 테스트.

JSON collection store tests: Missing/blank/corrupt files, atomic writes,
tracker notification and path validation.
"""

import json

import pytest

from maintenance_api.repositories.base import JsonCollectionStore, parse_collection
from maintenance_api.repositories.paths import InstitutionPaths, ResourceKind, ensure_safe_segment
from maintenance_api.utils.exceptions import BadRequestError
from tests.conftest import INSTITUTION


class TestLoad:
    """컬렉션 읽기 테스트."""

    def test_missing_file_is_empty(self, store: JsonCollectionStore):
        assert store.load(INSTITUTION, ResourceKind.OPEN) == []

    def test_blank_file_is_empty_and_untouched(self, store, paths: InstitutionPaths):
        path = paths.resource_file(INSTITUTION, ResourceKind.OPEN)
        path.parent.mkdir(parents=True)
        path.write_text("   \n", encoding="utf-8")

        assert store.load(INSTITUTION, ResourceKind.OPEN) == []
        assert path.read_text(encoding="utf-8") == "   \n"

    def test_invalid_json_resets_file(self, store, paths: InstitutionPaths):
        """손상된 JSON: 빈 배열 반환 후 파일도 빈 배열로 복구."""
        path = paths.resource_file(INSTITUTION, ResourceKind.OPEN)
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        assert store.load(INSTITUTION, ResourceKind.OPEN) == []
        assert json.loads(path.read_text(encoding="utf-8")) == []
        assert store.load(INSTITUTION, ResourceKind.OPEN) == []

    def test_invalid_utf8_resets_file(self, store, paths: InstitutionPaths):
        """UTF-8이 아닌 바이트: 예외 없이 빈 배열로 복구."""
        path = paths.resource_file(INSTITUTION, ResourceKind.OPEN)
        path.parent.mkdir(parents=True)
        path.write_bytes(b'[{"id": "\xff\xfe"}]')

        assert store.load(INSTITUTION, ResourceKind.OPEN) == []
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_non_array_document_resets_file(self, store, write_collection, read_collection):
        write_collection(ResourceKind.CITIES, {"name": "Haifa"})

        assert store.load(INSTITUTION, ResourceKind.CITIES) == []
        assert read_collection(ResourceKind.CITIES) == []

    def test_recovery_does_not_touch_tracker(self, store, tracker, write_collection):
        path = write_collection(ResourceKind.OPEN, [])
        path.write_text("oops", encoding="utf-8")

        store.load(INSTITUTION, ResourceKind.OPEN)
        assert tracker.get_last_update(INSTITUTION) is None

    def test_parse_collection_reports_error(self):
        result = parse_collection('"text"')
        assert not result.ok
        assert result.items == []
        assert parse_collection('[{"id": "1"}]').items == [{"id": "1"}]


class TestSave:
    """컬렉션 쓰기 테스트."""

    def test_save_creates_institution_directory(self, store, paths, read_collection):
        store.save("newInstitution", ResourceKind.WORKERS, [{"username": "bob"}])

        assert paths.institution_dir("newInstitution").is_dir()
        assert read_collection(ResourceKind.WORKERS, "newInstitution") == [{"username": "bob"}]

    def test_save_leaves_no_temp_files(self, store, paths):
        store.save(INSTITUTION, ResourceKind.OPEN, [{"id": "1"}])

        names = [p.name for p in paths.institution_dir(INSTITUTION).iterdir()]
        assert names == ["maintenance_requests.json"]

    def test_save_is_indented_json(self, store, paths):
        store.save(INSTITUTION, ResourceKind.OPEN, [{"id": "1"}])
        text = paths.resource_file(INSTITUTION, ResourceKind.OPEN).read_text(encoding="utf-8")
        assert text.startswith("[\n  {")

    @pytest.mark.parametrize("kind", [ResourceKind.OPEN, ResourceKind.COMPLETED])
    def test_request_writes_record_update(self, store, tracker, kind):
        store.save(INSTITUTION, kind, [])
        assert tracker.get_last_update(INSTITUTION) is not None

    @pytest.mark.parametrize("kind", [ResourceKind.WORKERS, ResourceKind.CITIES])
    def test_roster_writes_do_not_record_update(self, store, tracker, kind):
        store.save(INSTITUTION, kind, [])
        assert tracker.get_last_update(INSTITUTION) is None


class TestPaths:
    """경로 해석 테스트."""

    def test_resource_layout(self, paths: InstitutionPaths, tmp_path):
        assert paths.resource_file("a", ResourceKind.COMPLETED) == (
            tmp_path / "institutions" / "a" / "completed_maintenance_requests.json"
        )
        assert paths.media_file("a", "x.jpg") == tmp_path / "institutions" / "a" / "media" / "x.jpg"

    @pytest.mark.parametrize("value", ["", ".", "..", "../etc", "a/b", "a\\b", ".hidden"])
    def test_unsafe_segments_rejected(self, value):
        with pytest.raises(BadRequestError):
            ensure_safe_segment(value)

    def test_list_institutions_only_directories(self, paths: InstitutionPaths):
        assert paths.list_institutions() == []
        (paths.institutions_dir / "b").mkdir(parents=True)
        (paths.institutions_dir / "a").mkdir()
        (paths.institutions_dir / "stray.txt").write_text("x")

        assert paths.list_institutions() == ["a", "b"]
