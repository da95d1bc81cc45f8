"""미디어 첨부 API 및 정리 테스트.

Media attachment tests: Upload validation, serve, idempotent delete and
the orphaned-file sweep.
"""

import pytest
from httpx import AsyncClient

from maintenance_api.config import settings
from maintenance_api.repositories.paths import ResourceKind
from maintenance_api.scheduler import run_cleanup_pass
from maintenance_api.services.media_service import (
    filename_from_uri,
    media_filename,
    media_service,
)
from tests.conftest import INSTITUTION

URL = f"/institutions/{INSTITUTION}"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _media(paths, *names: str) -> None:
    media_dir = paths.media_dir(INSTITUTION)
    media_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (media_dir / name).write_bytes(b"data")


class TestUpload:
    """업로드 테스트."""

    async def test_upload_image(self, client: AsyncClient, paths):
        """PNG 업로드: 기관 ID와 파일 이름이 포함된 URL 반환."""
        res = await client.post(
            f"{URL}/upload-media",
            files={"media": ("photo.png", PNG_BYTES, "image/png")},
            data={"itemId": "42"},
        )
        assert res.status_code == 200
        data = res.json()
        filename = data["filename"]
        assert filename.startswith("42_")
        assert filename.endswith(".png")
        assert data["mediaUrl"] == f"http://test/institutions/{INSTITUTION}/media/{filename}"
        assert (paths.media_dir(INSTITUTION) / filename).read_bytes() == PNG_BYTES

    async def test_upload_pdf_rejected(self, client: AsyncClient, paths):
        res = await client.post(
            f"{URL}/upload-media",
            files={"media": ("doc.pdf", b"%PDF-1.4", "application/pdf")},
            data={"itemId": "42"},
        )
        assert res.status_code == 415
        assert res.json()["success"] is False
        assert not paths.media_dir(INSTITUTION).exists()

    async def test_upload_too_large(self, client: AsyncClient, paths, monkeypatch):
        monkeypatch.setattr(settings, "MEDIA_MAX_BYTES", 8)

        res = await client.post(
            f"{URL}/upload-media",
            files={"media": ("clip.mp4", b"0123456789", "video/mp4")},
            data={"itemId": "42"},
        )
        assert res.status_code == 413
        assert list(paths.media_dir(INSTITUTION).iterdir()) == []

    async def test_public_base_url(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "PUBLIC_BASE_URL", "https://files.example.org/")

        res = await client.post(
            f"{URL}/upload-media",
            files={"media": ("photo.png", PNG_BYTES, "image/png")},
            data={"itemId": "1"},
        )
        assert res.json()["mediaUrl"].startswith(
            f"https://files.example.org/institutions/{INSTITUTION}/media/1_"
        )

    async def test_interrupted_upload_leaves_no_file(self, store, paths):
        """업로드 중단: 부분 파일 제거 후 예외 전파."""

        class BrokenUpload:
            content_type = "video/mp4"
            filename = "clip.mp4"

            def __init__(self) -> None:
                self.reads = 0

            async def read(self, size: int = -1) -> bytes:
                self.reads += 1
                if self.reads > 1:
                    raise ConnectionResetError("client disconnected")
                return b"partial"

        with pytest.raises(ConnectionResetError):
            await media_service.upload(store, INSTITUTION, "9", BrokenUpload(), "http://test")

        assert list(paths.media_dir(INSTITUTION).iterdir()) == []

    def test_filename_defaults_to_jpg(self):
        assert media_filename("7", None, 1700000000000) == "7_1700000000000.jpg"
        assert media_filename("7", "blob", 1) == "7_1.jpg"
        assert media_filename("7", "movie.MOV", 1) == "7_1.MOV"


class TestServeAndDelete:
    """조회/삭제 테스트."""

    async def test_serve_file(self, client: AsyncClient, paths):
        _media(paths, "1_100.jpg")

        res = await client.get(f"{URL}/media/1_100.jpg")
        assert res.status_code == 200
        assert res.content == b"data"

    async def test_serve_missing(self, client: AsyncClient):
        res = await client.get(f"{URL}/media/nothing.jpg")
        assert res.status_code == 404

    async def test_delete_is_idempotent(self, client: AsyncClient, paths):
        """삭제: 두 번째 호출도 성공."""
        _media(paths, "1_100.jpg")

        res = await client.delete(f"{URL}/media/1_100.jpg")
        assert res.status_code == 200
        assert not (paths.media_dir(INSTITUTION) / "1_100.jpg").exists()

        res = await client.delete(f"{URL}/media/1_100.jpg")
        assert res.status_code == 200
        assert res.json() == {"success": True}


class TestCleanup:
    """고아 파일 정리 테스트."""

    def test_filename_from_uri(self):
        assert filename_from_uri("http://h/institutions/a/media/1_2.jpg?x=1") == "1_2.jpg"
        assert filename_from_uri("1_2.jpg") == "1_2.jpg"

    def test_orphans_removed_referenced_kept(self, store, paths, write_collection):
        _media(paths, "open.jpg", "done.mp4", "orphan.png")
        write_collection(
            ResourceKind.OPEN,
            [{"id": "1", "mediaUris": [f"http://test/institutions/{INSTITUTION}/media/open.jpg"]}],
        )
        write_collection(ResourceKind.COMPLETED, [{"id": "2", "mediaUris": ["done.mp4"]}])

        removed = media_service.cleanup_orphans(store, INSTITUTION)

        assert removed == ["orphan.png"]
        assert sorted(p.name for p in paths.media_dir(INSTITUTION).iterdir()) == ["done.mp4", "open.jpg"]

    async def test_deleted_item_media_survives_until_sweep(
        self, client: AsyncClient, store, paths, write_collection
    ):
        """항목 삭제 후에도 다음 정리 전까지 파일 유지."""
        _media(paths, "1_100.jpg")
        write_collection(ResourceKind.OPEN, [{"id": "1", "mediaUris": ["1_100.jpg"]}])

        await client.post(f"{URL}/delete", json={"ids": ["1"]})
        assert (paths.media_dir(INSTITUTION) / "1_100.jpg").exists()

        assert run_cleanup_pass(store) == 1
        assert not (paths.media_dir(INSTITUTION) / "1_100.jpg").exists()

    def test_no_media_dir(self, store, write_collection):
        write_collection(ResourceKind.OPEN, [])
        assert media_service.cleanup_orphans(store, INSTITUTION) == []

    @pytest.mark.parametrize("institution_id", ["a", "b"])
    def test_cleanup_all_covers_every_institution(self, store, paths, institution_id):
        media_dir = paths.media_dir(institution_id)
        media_dir.mkdir(parents=True)
        (media_dir / "stale.jpg").write_bytes(b"x")

        assert media_service.cleanup_all(store) == {institution_id: ["stale.jpg"]}
