import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from medlink.core.database import get_db
from medlink.services.auth_service import AuthService
from medlink.schemas.user_schema import AuthResponse, UserCreate, UserLogin


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth", # 路由前綴
    tags=["Auth"]    # API 文件分類標籤
)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_new_user(
    user_data: UserCreate, # Request Body 會被 Pydantic 驗證
    db: AsyncSession = Depends(get_db)
):
    """
    註冊新使用者並同時建立醫療專業 Profile

    - 密碼至少 6 碼。
    - 成功後直接回傳 Token，不需再登入。
    """
    auth_service = AuthService(db)

    # 服務層中的 HTTPException 會自動被 FastAPI 捕捉並回傳
    return await auth_service.register_user(user_data)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """
    以 email 和密碼取得 Token
    """
    auth_service = AuthService(db)
    return await auth_service.login(credentials.email, credentials.password)
