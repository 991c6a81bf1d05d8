# medlink/services/upload_service.py

import time
from medlink.core.config import settings
from medlink.core.storage import ObjectStorage
from medlink.schemas.upload_schema import ResumeUploadRequest, PresignedUploadOut, StorageBaseUrlOut

class UploadService:
    def __init__(self, storage: ObjectStorage):
        self.storage = storage

    async def create_resume_upload_url(self, user_id: int, request: ResumeUploadRequest) -> PresignedUploadOut:
        """
        產生履歷上傳用的 presigned URL。
        key 格式: user-{id}/{毫秒時間戳}-{檔名}
        """
        timestamp = int(time.time() * 1000)
        key = f"user-{user_id}/{timestamp}-{request.file_name}"
        url = await self.storage.get_presigned_upload_url(
            bucket_name=settings.RESUME_BUCKET,
            key=key,
            content_type=request.content_type,
            expiration=settings.RESUME_UPLOAD_EXPIRE_SECONDS,
        )
        return PresignedUploadOut(presigned_url=url, file_name=key)

    def get_base_url(self) -> StorageBaseUrlOut:
        return StorageBaseUrlOut(base_url=self.storage.public_base_url)
