"""미디어 라우터: 첨부 파일 업로드/조회/삭제 API.

Media Router: Upload, serve and delete attachments.
Uploaded files are referenced from request records by the returned URL;
orphans are swept by the periodic cleanup task, not by these endpoints.
"""

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import FileResponse

from maintenance_api.api.deps import InstitutionDep, StoreDep
from maintenance_api.config import settings
from maintenance_api.schemas.common import MediaUploadResponse, SuccessResponse
from maintenance_api.services.media_service import media_service

router: APIRouter = APIRouter()


@router.post("/upload-media", response_model=MediaUploadResponse)
async def upload_media(
    request: Request,
    institution_id: InstitutionDep,
    store: StoreDep,
    media: UploadFile = File(...),
    itemId: str = Form("unknown"),
) -> MediaUploadResponse:
    """미디어 업로드: 이미지/동영상만 허용.

    Store an image or video and return its retrievable URL.
    """
    base_url: str = settings.PUBLIC_BASE_URL or str(request.base_url)
    return await media_service.upload(store, institution_id, itemId, media, base_url)


@router.get("/media/{filename}")
async def get_media(filename: str, institution_id: InstitutionDep, store: StoreDep) -> FileResponse:
    return FileResponse(media_service.get_path(store, institution_id, filename))


@router.delete("/media/{filename}", response_model=SuccessResponse)
async def delete_media(filename: str, institution_id: InstitutionDep, store: StoreDep) -> dict:
    """미디어 삭제: 파일이 없어도 성공 (Idempotent)."""
    media_service.delete(store, institution_id, filename)
    return {"success": True}
