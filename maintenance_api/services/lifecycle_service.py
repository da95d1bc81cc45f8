"""정비 요청 수명주기 서비스.

Maintenance request lifecycle service: Moves items between the open
("to-do") and completed sets and applies partial updates, replacements,
deletions and assignee merges by id.

Partition rule:
    한 기관 안에서 같은 id가 열린 목록과 완료 목록에 동시에 존재하지 않습니다.
    For one institution an id is never in both sets; complete/reopen move
    items instead of copying them.
"""

from typing import Any, Iterable

from maintenance_api.repositories.base import JsonCollectionStore, Record
from maintenance_api.repositories.paths import ResourceKind
from maintenance_api.utils.exceptions import BadRequestError, NotFoundError


# 객체가 아닌 레코드는 어떤 id와도 일치하지 않음 (Non-object records match no id)
_NO_ID = object()


def _item_id(item: Any) -> Any:
    return item.get("id") if isinstance(item, dict) else _NO_ID


def _partition(items: list[Any], ids: Iterable[Any]) -> tuple[list[Any], list[Any]]:
    """(일치 항목, 나머지)로 분할: Split into (matching, remaining), order preserved."""
    wanted = list(ids)
    matched: list[Any] = []
    remaining: list[Any] = []
    for item in items:
        (matched if _item_id(item) in wanted else remaining).append(item)
    return matched, remaining


def _merge_unique(existing: Iterable[Any], extra: Iterable[Any]) -> list[Any]:
    merged: list[Any] = []
    for value in [*existing, *extra]:
        if value not in merged:
            merged.append(value)
    return merged


class LifecycleService:

    # --- 조회/생성 (Read & create) ---

    def list_items(
        self, store: JsonCollectionStore, institution_id: str, kind: ResourceKind
    ) -> list[Any]:
        return store.load(institution_id, kind)

    def create_item(
        self, store: JsonCollectionStore, institution_id: str, record: Record
    ) -> None:
        items = store.load(institution_id, ResourceKind.OPEN)
        items.append(record)
        store.save(institution_id, ResourceKind.OPEN, items)

    def replace_all(
        self, store: JsonCollectionStore, institution_id: str, records: list[Any]
    ) -> None:
        """열린 목록 전체를 교체합니다 (클라이언트 동기화용).

        Overwrite the whole open set, used by clients pushing a full sync.
        """
        store.save(institution_id, ResourceKind.OPEN, records)

    # --- 상태 전이 (Transitions) ---

    def _move(
        self,
        store: JsonCollectionStore,
        institution_id: str,
        ids: list[Any],
        source: ResourceKind,
        target: ResourceKind,
    ) -> int:
        source_items = store.load(institution_id, source)
        target_items = store.load(institution_id, target)
        moved, remaining = _partition(source_items, ids)
        store.save(institution_id, source, remaining)
        store.save(institution_id, target, [*target_items, *moved])
        return len(moved)

    def complete(self, store: JsonCollectionStore, institution_id: str, ids: list[Any]) -> int:
        """열린 항목을 완료 목록으로 이동합니다.

        Move matching open items to the end of the completed set.
        Unknown ids are ignored.

        Returns:
            int: 이동된 항목 수 (Number of items moved)
        """
        return self._move(store, institution_id, ids, ResourceKind.OPEN, ResourceKind.COMPLETED)

    def reopen(self, store: JsonCollectionStore, institution_id: str, ids: list[Any]) -> int:
        """완료 항목을 열린 목록으로 되돌립니다 (complete의 역연산)."""
        return self._move(store, institution_id, ids, ResourceKind.COMPLETED, ResourceKind.OPEN)

    # --- 수정 (Mutations) ---

    def update_item(
        self,
        store: JsonCollectionStore,
        institution_id: str,
        item_id: Any,
        patch: Record,
    ) -> Record:
        """항목에 부분 필드를 병합합니다.

        Shallow-merge ``patch`` onto the open item with ``item_id``. Patch
        fields win on collision except ``id``, which never changes.

        Raises:
            BadRequestError: 해당 id가 없을 때, 아무것도 저장하지 않음
                             (Unknown id; nothing is written)
        """
        items = store.load(institution_id, ResourceKind.OPEN)
        for index, item in enumerate(items):
            if _item_id(item) == item_id:
                merged: Record = {**item, **patch, "id": item["id"]}
                items[index] = merged
                store.save(institution_id, ResourceKind.OPEN, items)
                return merged
        raise BadRequestError("Invalid id")

    def replace_item(
        self,
        store: JsonCollectionStore,
        institution_id: str,
        kind: ResourceKind,
        item_id: str,
        body: Record,
    ) -> Record:
        """항목 전체를 교체하되 id는 경로 값으로 고정합니다.

        Replace every field of the item, forcing ``id`` to ``item_id``.

        Raises:
            NotFoundError: 해당 id가 없을 때 (Unknown id)
        """
        items = store.load(institution_id, kind)
        for index, item in enumerate(items):
            if _item_id(item) == item_id:
                replacement: Record = {**body, "id": item_id}
                items[index] = replacement
                store.save(institution_id, kind, items)
                return replacement
        raise NotFoundError("Item not found")

    def delete_items(
        self,
        store: JsonCollectionStore,
        institution_id: str,
        kind: ResourceKind,
        ids: list[Any],
    ) -> int:
        items = store.load(institution_id, kind)
        removed, remaining = _partition(items, ids)
        store.save(institution_id, kind, remaining)
        return len(removed)

    def assign(
        self,
        store: JsonCollectionStore,
        institution_id: str,
        ids: list[Any],
        worker_ids: list[Any],
    ) -> int:
        """담당자를 합집합으로 병합합니다.

        Union ``worker_ids`` into ``assignees`` of every matching open item.
        Applying the same assignment twice is a no-op.

        Returns:
            int: 갱신된 항목 수 (Number of items touched)
        """
        items = store.load(institution_id, ResourceKind.OPEN)
        touched = 0
        for item in items:
            if not isinstance(item, dict) or item.get("id") not in ids:
                continue
            existing = item.get("assignees") or []
            if not isinstance(existing, list):
                existing = [existing]
            item["assignees"] = _merge_unique(existing, worker_ids)
            touched += 1
        store.save(institution_id, ResourceKind.OPEN, items)
        return touched


lifecycle_service: LifecycleService = LifecycleService()
