# medlink/schemas/upload_schema.py
from pydantic import Field
from medlink.schemas.base_schema import CamelModel

class ResumeUploadRequest(CamelModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    # 客戶端宣告的 MIME type，後端不驗證檔案內容
    content_type: str = Field(..., min_length=1)

class PresignedUploadOut(CamelModel):
    presigned_url: str
    file_name: str

class StorageBaseUrlOut(CamelModel):
    base_url: str
