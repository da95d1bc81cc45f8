"""공통 Pydantic 요청/응답 스키마 정의.

Common Pydantic request/response schema definitions.
Request bodies keep the camelCase field names the mobile clients send.
Maintenance records themselves are free-form JSON objects and are not
modelled here.
"""

from typing import Any

from pydantic import BaseModel, Field


# === 정비 요청 (Maintenance request) 스키마 ===

class IdsRequest(BaseModel):
    """id 목록 요청: complete/reopen/delete 공용.

    Attributes:
        ids: 대상 항목 id 목록 (Target item ids; unknown ids are ignored)
    """

    ids: list[Any] = Field(default_factory=list)


class UpdateItemRequest(BaseModel):
    """부분 업데이트 요청 스키마.

    Attributes:
        id: 대상 항목 id (Target item id)
        updatedItem: 병합할 필드 (Fields merged onto the item)
    """

    id: Any
    updatedItem: dict[str, Any] = Field(default_factory=dict)


class AssignRequest(BaseModel):
    """담당자 배정 요청 스키마.

    Attributes:
        ids: 대상 항목 id 목록 (Target item ids)
        workers: 추가할 작업자 id 목록 (Worker ids unioned into assignees)
    """

    ids: list[Any] = Field(default_factory=list)
    workers: list[Any] = Field(default_factory=list)


# === 명단/참조 데이터 (Roster & reference data) 스키마 ===

class DeleteWorkerRequest(BaseModel):
    username: str


class DeleteCityRequest(BaseModel):
    cityName: str


class DeleteStreetRequest(BaseModel):
    cityName: str
    streetName: str


# === 응답 (Responses) ===

class SuccessResponse(BaseModel):
    """단순 성공 응답 (Plain success flag)."""

    success: bool = True


class LastUpdateResponse(BaseModel):
    """최종 업데이트 조회 응답.

    Attributes:
        lastUpdate: 마지막 추적 쓰기 시각, 없으면 null (Last tracked write, null if none)
        timestamp: 서버 현재 시각 (Server time when answered)
    """

    lastUpdate: str | None
    timestamp: str


class MediaUploadResponse(BaseModel):
    """미디어 업로드 응답.

    Attributes:
        mediaUrl: 조회 가능한 URL (Retrievable URL)
        filename: 저장된 파일 이름 (Stored filename)
    """

    success: bool = True
    mediaUrl: str
    filename: str
