"""JSON 컬렉션 저장소: 모든 리소스 종류의 부모 저장 계층.

JSON collection store: Storage primitive shared by all four resource kinds.
Each resource is a single JSON array per institution; every mutation
rewrites the whole file.

Corruption policy:
    파일이 JSON 배열로 해석되지 않으면 빈 배열로 덮어쓰고 경고를 남깁니다.
    If a file does not parse as a JSON array it is reset to ``[]`` and a
    warning is logged. This is bounded data loss, never an error for the
    caller.

No locking is performed: concurrent writers to the same file race and the
last writer wins.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from maintenance_api.repositories.paths import InstitutionPaths, ResourceKind

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class UpdateListener(Protocol):
    """쓰기 완료 알림 수신자 (Receives a call after tracked writes)."""

    def record_update(self, institution_id: str) -> None:
        ...


@dataclass
class ParseResult:
    """JSON 파싱 결과.

    Outcome of parsing a collection file.

    Attributes:
        items: 파싱된 레코드 목록, 실패 시 빈 목록 (Parsed records, empty on failure)
        error: 실패 사유, 성공 시 None (Failure reason, None on success)
    """

    items: list[Any]
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_collection(raw: str | bytes) -> ParseResult:
    """파일 내용을 JSON 배열로 파싱합니다.

    Parse raw file content as a JSON array. Blank content is an empty
    collection, not a failure. Bytes that are not valid UTF-8 are a
    failure like any other unparsable content.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            return ParseResult(items=[], error=f"invalid UTF-8: {exc}")
    if not raw.strip():
        return ParseResult(items=[])
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        return ParseResult(items=[], error=f"invalid JSON: {exc}")
    if not isinstance(data, list):
        return ParseResult(items=[], error=f"expected array, got {type(data).__name__}")
    return ParseResult(items=data)


class JsonCollectionStore:
    """기관별 JSON 컬렉션 읽기/쓰기.

    Reads and writes per-institution JSON collections.

    Attributes:
        paths: 경로 해석기 (Institution path resolver)
        listener: 추적 대상 쓰기 후 호출 (Notified after writes to tracked kinds)
    """

    def __init__(
        self,
        paths: InstitutionPaths,
        listener: UpdateListener | None = None,
    ) -> None:
        self.paths: InstitutionPaths = paths
        self.listener: UpdateListener | None = listener

    def load(self, institution_id: str, kind: ResourceKind) -> list[Any]:
        """컬렉션을 읽습니다.

        Load a collection. A missing file yields ``[]``; a corrupt file is
        reset to ``[]`` on disk and ``[]`` is returned.

        Args:
            institution_id: 기관 ID (Institution identifier)
            kind: 리소스 종류 (Resource kind)

        Returns:
            list[Any]: 레코드 목록 (Records in file order)
        """
        path: Path = self.paths.resource_file(institution_id, kind)
        if not path.exists():
            return []

        result = parse_collection(path.read_bytes())
        if not result.ok:
            self._recover(path, result)
        return result.items

    def save(self, institution_id: str, kind: ResourceKind, items: list[Any]) -> None:
        """컬렉션 전체를 덮어씁니다.

        Serialize the full collection and replace the file. Writes go to a
        temporary sibling first so readers never see a partial document.
        Tracked kinds notify the listener afterwards.
        """
        path: Path = self.paths.resource_file(institution_id, kind)
        self._write(path, items)
        if kind.tracks_updates and self.listener is not None:
            self.listener.record_update(institution_id)

    def _recover(self, path: Path, result: ParseResult) -> None:
        # 손상된 파일 복구: reset corrupt file to an empty array
        logger.warning("Resetting corrupt collection %s (%s)", path, result.error)
        self._write(path, [])

    @staticmethod
    def _write(path: Path, items: list[Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
