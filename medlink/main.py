import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from medlink.core.config import settings
from medlink.core.database import create_engine_and_sessionmaker, create_tables
from medlink.core.storage import ObjectStorage
from medlink.routers import (
    auth_router, user_router,
    post_router, connection_router, message_router,
    organization_router, job_router, application_router, upload_router
)

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from medlink.models import user
from medlink.models import medical_profile
from medlink.models import post
from medlink.models import connection
from medlink.models import message
from medlink.models import organization
from medlink.models import application


# 設定基礎日誌
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__) # 建立一個 logger 實例


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    啟動時建立 DB 引擎、Session 工廠與物件儲存閘道，關閉時釋放連線池。
    (測試不經過 lifespan，會自行設定 app.state)
    """
    engine, session_factory = create_engine_and_sessionmaker(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    await create_tables(engine)
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.storage = ObjectStorage.from_settings(settings)
    logger.info("Database engine and object storage initialized")
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Database engine disposed")


app = FastAPI(title="MedLink API", lifespan=lifespan)

# --- 設定 CORS (跨來源資源共用) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"], # 允許所有 HTTP 方法
    allow_headers=["*"], # 允許所有 HTTP 標頭
)

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "Backend is running!"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(post_router.router)
app.include_router(connection_router.router)
app.include_router(message_router.router)
app.include_router(organization_router.router)
app.include_router(job_router.router)
app.include_router(application_router.router)
app.include_router(upload_router.router)
