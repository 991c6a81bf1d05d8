# medlink/routers/upload_router.py

from fastapi import APIRouter, Depends
from medlink.core.security import get_current_user_id
from medlink.core.storage import ObjectStorage, get_storage
from medlink.services.upload_service import UploadService
from medlink.schemas.upload_schema import ResumeUploadRequest, PresignedUploadOut, StorageBaseUrlOut

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post("/resume-url", response_model=PresignedUploadOut, summary="取得履歷上傳 URL")
async def get_resume_upload_url(
    request_data: ResumeUploadRequest,
    user_id: int = Depends(get_current_user_id),
    storage: ObjectStorage = Depends(get_storage)
):
    """
    回傳 24 小時內有效的 PUT presigned URL，客戶端直接上傳到物件儲存。
    後端不檢查檔案內容、大小或類型。
    """
    return await UploadService(storage).create_resume_upload_url(user_id, request_data)


@router.get("/base-url", response_model=StorageBaseUrlOut, summary="物件儲存的公開 base URL")
async def get_storage_base_url(storage: ObjectStorage = Depends(get_storage)):
    return UploadService(storage).get_base_url()
