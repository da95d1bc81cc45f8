"""정비 요청 라우터: 열린/완료 목록과 상태 전이 API.

Maintenance request router: Open and completed collections plus the
complete/reopen/update/replace/delete/assign transitions.
"""

from typing import Any

from fastapi import APIRouter, Body

from maintenance_api.api.deps import InstitutionDep, StoreDep
from maintenance_api.repositories.paths import ResourceKind
from maintenance_api.schemas.common import (
    AssignRequest,
    IdsRequest,
    SuccessResponse,
    UpdateItemRequest,
)
from maintenance_api.services.lifecycle_service import lifecycle_service

router: APIRouter = APIRouter()


# --- 열린 목록 (Open / to-do) ---

@router.get("/maintenance_requests")
async def list_open_requests(institution_id: InstitutionDep, store: StoreDep) -> list[Any]:
    """열린 정비 요청 목록."""
    return lifecycle_service.list_items(store, institution_id, ResourceKind.OPEN)


@router.post("/maintenance_requests", status_code=201, response_model=SuccessResponse)
async def create_request(
    institution_id: InstitutionDep,
    store: StoreDep,
    record: dict[str, Any] = Body(...),
) -> dict:
    """정비 요청 등록: 열린 목록 끝에 추가."""
    lifecycle_service.create_item(store, institution_id, record)
    return {"success": True}


@router.put("/maintenance_requests", response_model=SuccessResponse)
async def replace_open_requests(
    institution_id: InstitutionDep,
    store: StoreDep,
    records: list[Any] = Body(...),
) -> dict:
    """열린 목록 전체 교체 (클라이언트 동기화)."""
    lifecycle_service.replace_all(store, institution_id, records)
    return {"success": True}


@router.post("/maintenance_requests/update", response_model=SuccessResponse)
async def update_request(
    data: UpdateItemRequest,
    institution_id: InstitutionDep,
    store: StoreDep,
) -> dict:
    """부분 필드 병합: 없는 id는 400."""
    lifecycle_service.update_item(store, institution_id, data.id, data.updatedItem)
    return {"success": True}


@router.put("/todo/{item_id}", response_model=SuccessResponse)
async def replace_open_request(
    item_id: str,
    institution_id: InstitutionDep,
    store: StoreDep,
    body: dict[str, Any] = Body(...),
) -> dict:
    lifecycle_service.replace_item(store, institution_id, ResourceKind.OPEN, item_id, body)
    return {"success": True}


@router.post("/complete", response_model=SuccessResponse)
@router.post("/maintenance_requests/complete", response_model=SuccessResponse, include_in_schema=False)
async def complete_requests(data: IdsRequest, institution_id: InstitutionDep, store: StoreDep) -> dict:
    """열린 항목을 완료 목록으로 이동."""
    lifecycle_service.complete(store, institution_id, data.ids)
    return {"success": True}


@router.post("/delete", response_model=SuccessResponse)
@router.post("/maintenance_requests/delete", response_model=SuccessResponse, include_in_schema=False)
async def delete_open_requests(data: IdsRequest, institution_id: InstitutionDep, store: StoreDep) -> dict:
    lifecycle_service.delete_items(store, institution_id, ResourceKind.OPEN, data.ids)
    return {"success": True}


@router.post("/assign", response_model=SuccessResponse)
async def assign_workers(data: AssignRequest, institution_id: InstitutionDep, store: StoreDep) -> dict:
    """담당자 합집합 병합."""
    lifecycle_service.assign(store, institution_id, data.ids, data.workers)
    return {"success": True}


# --- 완료 목록 (Completed / done) ---

@router.get("/completed_maintenance_requests")
async def list_completed_requests(institution_id: InstitutionDep, store: StoreDep) -> list[Any]:
    return lifecycle_service.list_items(store, institution_id, ResourceKind.COMPLETED)


@router.post("/completed_maintenance_requests/reopen", response_model=SuccessResponse)
async def reopen_requests(data: IdsRequest, institution_id: InstitutionDep, store: StoreDep) -> dict:
    """완료 항목을 열린 목록으로 되돌림."""
    lifecycle_service.reopen(store, institution_id, data.ids)
    return {"success": True}


@router.post("/completed_maintenance_requests/delete", response_model=SuccessResponse)
async def delete_completed_requests(
    data: IdsRequest, institution_id: InstitutionDep, store: StoreDep
) -> dict:
    lifecycle_service.delete_items(store, institution_id, ResourceKind.COMPLETED, data.ids)
    return {"success": True}


@router.put("/completed/{item_id}", response_model=SuccessResponse)
async def replace_completed_request(
    item_id: str,
    institution_id: InstitutionDep,
    store: StoreDep,
    body: dict[str, Any] = Body(...),
) -> dict:
    lifecycle_service.replace_item(store, institution_id, ResourceKind.COMPLETED, item_id, body)
    return {"success": True}
