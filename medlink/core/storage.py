# medlink/core/storage.py
# 物件儲存 (MinIO / S3 相容) 閘道：只負責產生 presigned URL
import logging
import aioboto3
from fastapi import Request

logger = logging.getLogger(__name__)


class ObjectStorage:
    """
    S3 相容物件儲存的精簡封裝。
    由 lifespan 建立一次，放在 app.state.storage，透過 Dependency 注入。
    """

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        endpoint_url: str | None,
        public_base_url: str,
    ):
        self.credentials = {
            "aws_access_key_id": access_key_id,
            "aws_secret_access_key": secret_access_key,
            "region_name": region,
        }
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings) -> "ObjectStorage":
        return cls(
            access_key_id=settings.S3_ACCESS_KEY_ID,
            secret_access_key=settings.S3_SECRET_ACCESS_KEY,
            region=settings.S3_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
            public_base_url=settings.STORAGE_PUBLIC_BASE_URL,
        )

    async def get_presigned_upload_url(
        self,
        bucket_name: str,
        key: str,
        content_type: str,
        expiration: int,
    ) -> str:
        """
        產生 PUT 用的 presigned URL (客戶端直接上傳，不經過後端)

        Args:
            bucket_name: Bucket 名稱
            key: 物件 key
            content_type: 客戶端宣告的 MIME type
            expiration: 有效秒數
        """
        if not bucket_name:
            raise ValueError("Bucket name must be provided")
        if not key:
            raise ValueError("Key must be provided")

        session = aioboto3.Session(**self.credentials)
        async with session.client("s3", endpoint_url=self.endpoint_url) as client:
            url = await client.generate_presigned_url(
                "put_object",
                Params={"Bucket": bucket_name, "Key": key, "ContentType": content_type},
                ExpiresIn=expiration,
            )
        logger.info(f"Presigned upload URL issued for {bucket_name}/{key}")
        return url


def get_storage(request: Request) -> ObjectStorage:
    """FastAPI Dependency: 取得物件儲存閘道"""
    return request.app.state.storage
