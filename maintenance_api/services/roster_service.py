"""작업자 명단 및 도시/거리 참조 데이터 서비스.

Roster service: Worker roster and city/street reference data.
Both are edited by administrators as whole documents; only the targeted
deletes below operate per record. These writes do not move the
institution's last-update timestamp.
"""

from typing import Any

from maintenance_api.repositories.base import JsonCollectionStore
from maintenance_api.repositories.paths import ResourceKind


def _field(item: Any, key: str) -> Any:
    return item.get(key) if isinstance(item, dict) else None


class RosterService:

    # --- Workers ---

    def list_workers(self, store: JsonCollectionStore, institution_id: str) -> list[Any]:
        return store.load(institution_id, ResourceKind.WORKERS)

    def replace_workers(
        self, store: JsonCollectionStore, institution_id: str, workers: list[Any]
    ) -> None:
        store.save(institution_id, ResourceKind.WORKERS, workers)

    def delete_worker(self, store: JsonCollectionStore, institution_id: str, username: str) -> bool:
        workers = store.load(institution_id, ResourceKind.WORKERS)
        remaining = [w for w in workers if _field(w, "username") != username]
        store.save(institution_id, ResourceKind.WORKERS, remaining)
        return len(remaining) != len(workers)

    # --- Cities ---

    def list_cities(self, store: JsonCollectionStore, institution_id: str) -> list[Any]:
        return store.load(institution_id, ResourceKind.CITIES)

    def replace_cities(
        self, store: JsonCollectionStore, institution_id: str, cities: list[Any]
    ) -> None:
        store.save(institution_id, ResourceKind.CITIES, cities)

    def delete_city(self, store: JsonCollectionStore, institution_id: str, city_name: str) -> bool:
        cities = store.load(institution_id, ResourceKind.CITIES)
        remaining = [c for c in cities if _field(c, "name") != city_name]
        store.save(institution_id, ResourceKind.CITIES, remaining)
        return len(remaining) != len(cities)

    def delete_street(
        self,
        store: JsonCollectionStore,
        institution_id: str,
        city_name: str,
        street_name: str,
    ) -> bool:
        """도시에서 거리 이름을 제거합니다.

        Remove every occurrence of ``street_name`` from the named city.
        Unknown city or street is a no-op.

        Returns:
            bool: 제거된 거리가 있으면 True (True if anything was removed)
        """
        cities = store.load(institution_id, ResourceKind.CITIES)
        removed = False
        for city in cities:
            if _field(city, "name") != city_name:
                continue
            streets = city.get("streets") or []
            kept = [s for s in streets if s != street_name]
            if len(kept) != len(streets):
                city["streets"] = kept
                removed = True
        store.save(institution_id, ResourceKind.CITIES, cities)
        return removed


roster_service: RosterService = RosterService()
