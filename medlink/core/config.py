# medlink/core/config.py
# 應用程式設定 (例如資料庫連線字串、JWT 秘鑰、物件儲存)
from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 資料庫設定 (正式環境: mysql+aiomysql://..., 測試: sqlite+aiosqlite://)
    DATABASE_URL: str
    # 設為 True 會在 console 印出 SQL 語句
    SQL_ECHO: bool = False

    # JWT 設定
    JWT_SECRET_KEY: str
    # JWT 演算法
    JWT_ALGORITHM: str = "HS256"
    # 存取令牌過期時間（分鐘），約一年
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 365

    # CORS 允許來源
    CORS_ORIGINS: List[str] = ["*"]

    # 物件儲存 (MinIO / S3 相容)
    S3_ENDPOINT_URL: Optional[str] = None
    S3_ACCESS_KEY_ID: str = "minioadmin"
    S3_SECRET_ACCESS_KEY: str = "minioadmin"
    S3_REGION: str = "us-east-1"
    RESUME_BUCKET: str = "resumes"
    # 履歷上傳 URL 有效時間 (秒)，24 小時
    RESUME_UPLOAD_EXPIRE_SECONDS: int = 24 * 60 * 60
    # 前端組合檔案 URL 用的公開 base URL
    STORAGE_PUBLIC_BASE_URL: str = "http://localhost:9000"

    # 環境變數檔案
    class Config:
        env_file = ".env"

# 建立設定實例
settings = Settings()
