# medlink/routers/user_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from medlink.core.database import get_db
from medlink.core.security import get_current_user_id
from medlink.services.auth_service import AuthService
from medlink.schemas.user_schema import UserOut

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)

@router.get("/me", response_model=UserOut)
async def read_users_me(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取當前登入使用者的基本資料與醫療 Profile (不含密碼)
    """
    return await AuthService(db).get_current_user(user_id)
