"""작업자/도시 라우터: 명단 및 참조 데이터 API.

Roster Router: Worker roster and city/street reference data.
GET returns the whole document; POST overwrites it.
"""

from typing import Any

from fastapi import APIRouter, Body

from maintenance_api.api.deps import InstitutionDep, StoreDep
from maintenance_api.schemas.common import (
    DeleteCityRequest,
    DeleteStreetRequest,
    DeleteWorkerRequest,
    SuccessResponse,
)
from maintenance_api.services.roster_service import roster_service

router: APIRouter = APIRouter()


@router.get("/workers")
async def list_workers(institution_id: InstitutionDep, store: StoreDep) -> list[Any]:
    return roster_service.list_workers(store, institution_id)


@router.post("/workers", response_model=SuccessResponse)
async def replace_workers(
    institution_id: InstitutionDep,
    store: StoreDep,
    workers: list[Any] = Body(...),
) -> dict:
    """작업자 명단 전체 저장."""
    roster_service.replace_workers(store, institution_id, workers)
    return {"success": True}


@router.post("/workers/delete", response_model=SuccessResponse)
async def delete_worker(data: DeleteWorkerRequest, institution_id: InstitutionDep, store: StoreDep) -> dict:
    roster_service.delete_worker(store, institution_id, data.username)
    return {"success": True}


@router.get("/cities")
async def list_cities(institution_id: InstitutionDep, store: StoreDep) -> list[Any]:
    return roster_service.list_cities(store, institution_id)


@router.post("/cities", response_model=SuccessResponse)
async def replace_cities(
    institution_id: InstitutionDep,
    store: StoreDep,
    cities: list[Any] = Body(...),
) -> dict:
    """도시/거리 목록 전체 저장."""
    roster_service.replace_cities(store, institution_id, cities)
    return {"success": True}


@router.post("/cities/delete", response_model=SuccessResponse)
async def delete_city(data: DeleteCityRequest, institution_id: InstitutionDep, store: StoreDep) -> dict:
    roster_service.delete_city(store, institution_id, data.cityName)
    return {"success": True}


@router.post("/cities/deleteStreet", response_model=SuccessResponse)
async def delete_street(data: DeleteStreetRequest, institution_id: InstitutionDep, store: StoreDep) -> dict:
    roster_service.delete_street(store, institution_id, data.cityName, data.streetName)
    return {"success": True}
