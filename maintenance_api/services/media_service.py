"""미디어 첨부 서비스: 업로드, 조회, 삭제, 고아 파일 정리.

Media attachment service: Upload, serve, delete and orphan cleanup.
Files live in ``<institution>/media/`` and are referenced from request
records through their ``mediaUris`` list.

Cleanup is a lazy garbage collector: deleting a request never deletes its
files synchronously. The periodic sweep removes every file no open or
completed record references, so an attachment can outlive its record by
up to one sweep interval.
"""

import asyncio
import logging
import re
import time
from pathlib import Path
from typing import Any, Iterable
from urllib.parse import unquote, urlsplit

from fastapi import UploadFile

from maintenance_api.config import settings
from maintenance_api.repositories.base import JsonCollectionStore
from maintenance_api.repositories.paths import ResourceKind
from maintenance_api.schemas.common import MediaUploadResponse
from maintenance_api.utils.exceptions import (
    NotFoundError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
)

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION: str = ".jpg"
_CHUNK_SIZE: int = 1024 * 1024
_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


def media_filename(item_id: str, original_name: str | None, uploaded_ms: int) -> str:
    """저장 파일 이름 생성: ``<itemId>_<millis><ext>``, 확장자 기본값 .jpg."""
    ext = Path(original_name or "").suffix
    if not _EXTENSION.match(ext):
        ext = DEFAULT_EXTENSION
    return f"{item_id}_{uploaded_ms}{ext}"


def filename_from_uri(uri: str) -> str:
    """미디어 URI의 마지막 경로 세그먼트 (Last path segment, query stripped)."""
    path = urlsplit(uri).path or uri
    return unquote(path.rstrip("/").rsplit("/", 1)[-1])


def referenced_filenames(records: Iterable[Any]) -> set[str]:
    names: set[str] = set()
    for record in records:
        if not isinstance(record, dict):
            continue
        for uri in record.get("mediaUris") or []:
            if isinstance(uri, str) and uri:
                names.add(filename_from_uri(uri))
    return names


class MediaService:
    """미디어 파일 관리 서비스."""

    def is_allowed_type(self, content_type: str | None) -> bool:
        if not content_type:
            return False
        return any(content_type.startswith(prefix) for prefix in settings.MEDIA_ALLOWED_PREFIXES)

    async def upload(
        self,
        store: JsonCollectionStore,
        institution_id: str,
        item_id: str,
        upload: UploadFile,
        base_url: str,
    ) -> MediaUploadResponse:
        """업로드 파일을 기관 미디어 디렉토리에 저장합니다.

        Validate and store an uploaded file under the institution's media
        directory. The body is streamed in chunks and written from a worker
        thread; any failure, including exceeding the size ceiling, removes
        the partial file.

        Args:
            store: JSON 컬렉션 저장소 (Collection store, for path resolution)
            institution_id: 기관 ID (Institution identifier)
            item_id: 첨부 대상 항목 id (Item the file belongs to)
            upload: 업로드 파일 (Multipart upload)
            base_url: URL 생성용 기본 주소 (Base used to build the returned URL)

        Returns:
            MediaUploadResponse: URL과 파일 이름 (URL and stored filename)

        Raises:
            UnsupportedMediaTypeError: 이미지/동영상이 아닐 때 (Not image/video)
            PayloadTooLargeError: 크기 제한 초과 (Over MEDIA_MAX_BYTES)
        """
        if not self.is_allowed_type(upload.content_type):
            raise UnsupportedMediaTypeError()

        filename = media_filename(item_id, upload.filename, int(time.time() * 1000))
        path = store.paths.media_file(institution_id, filename)
        path.parent.mkdir(parents=True, exist_ok=True)

        max_bytes: int = settings.MEDIA_MAX_BYTES
        written = 0
        try:
            with path.open("wb") as fh:
                while True:
                    chunk = await upload.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise PayloadTooLargeError(f"File exceeds {max_bytes} bytes")
                    await asyncio.to_thread(fh.write, chunk)
        except BaseException:
            # 부분 파일 제거: partial file never outlives a failed upload
            path.unlink(missing_ok=True)
            raise

        logger.info("Stored media %s for institution %s (%d bytes)", filename, institution_id, written)
        media_url = f"{base_url.rstrip('/')}/institutions/{institution_id}/media/{filename}"
        return MediaUploadResponse(mediaUrl=media_url, filename=filename)

    def get_path(self, store: JsonCollectionStore, institution_id: str, filename: str) -> Path:
        path = store.paths.media_file(institution_id, filename)
        if not path.is_file():
            raise NotFoundError("File not found")
        return path

    def delete(self, store: JsonCollectionStore, institution_id: str, filename: str) -> bool:
        """미디어 파일을 삭제합니다: 멱등.

        Idempotent delete: a missing file counts as success so clients can
        retry. Other OS errors propagate.

        Returns:
            bool: 실제로 삭제했으면 True (True if a file was removed)
        """
        path = store.paths.media_file(institution_id, filename)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Deleted media %s for institution %s", filename, institution_id)
        return True

    def cleanup_orphans(self, store: JsonCollectionStore, institution_id: str) -> list[str]:
        """참조되지 않는 미디어 파일을 삭제합니다.

        Delete every file in the media directory that no open or completed
        record references.

        Returns:
            list[str]: 삭제된 파일 이름 (Removed filenames)
        """
        media_dir = store.paths.media_dir(institution_id)
        if not media_dir.is_dir():
            return []

        referenced = referenced_filenames(
            [
                *store.load(institution_id, ResourceKind.OPEN),
                *store.load(institution_id, ResourceKind.COMPLETED),
            ]
        )
        removed: list[str] = []
        for entry in sorted(media_dir.iterdir()):
            if not entry.is_file() or entry.name in referenced:
                continue
            entry.unlink(missing_ok=True)
            removed.append(entry.name)
        if removed:
            logger.info("Removed %d orphaned media file(s) for institution %s", len(removed), institution_id)
        return removed

    def cleanup_all(self, store: JsonCollectionStore) -> dict[str, list[str]]:
        return {
            institution_id: self.cleanup_orphans(store, institution_id)
            for institution_id in store.paths.list_institutions()
        }


media_service: MediaService = MediaService()
