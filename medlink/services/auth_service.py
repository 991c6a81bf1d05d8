# medlink/services/auth_service.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from medlink.repositories.user_repo import UserRepository
from medlink.core.security import verify_password, create_access_token, get_password_hash
from medlink.models.user import User
from medlink.models.medical_profile import MedicalProfile
from medlink.schemas.user_schema import UserCreate, AuthResponse, UserOut

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    async def register_user(self, user_create: UserCreate) -> AuthResponse:
        """
        處理使用者註冊：同時建立 User 與 MedicalProfile，並回傳 Token
        """
        # 1. 檢查 Email 是否已被註冊
        existing_user = await self.user_repo.get_user_by_email(user_create.email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="此 Email 已經被註冊",
            )

        # 2. 雜湊密碼
        hashed_password = get_password_hash(user_create.password)

        # 3. 建立 ORM 模型
        new_user = User(
            email=user_create.email,
            password_hash=hashed_password,
            first_name=user_create.first_name,
            last_name=user_create.last_name,
        )
        profile = MedicalProfile(
            profession_type=user_create.profession_type,
            specialty=user_create.specialty,
            years_of_experience=user_create.years_of_experience,
            license_number=user_create.license_number,
            current_position=user_create.current_position,
            bio=user_create.bio,
            location=user_create.location,
        )

        # 4. 儲存 (同一次 commit)
        try:
            created_user = await self.user_repo.create_user_with_profile(new_user, profile)
        except IntegrityError:
            # 同時有兩個請求註冊同一個 Email
            await self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="此 Email 已經被註冊",
            )

        logger.info(f"User registered: {created_user.id}")
        return self._build_auth_response(created_user)

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """
        驗證使用者帳號密碼。
        成功回傳 User 物件，失敗回傳 None。
        """
        user = await self.user_repo.get_user_by_email(email)

        # 1. 檢查使用者是否存在
        if not user:
            return None

        # 2. 檢查密碼是否正確
        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def login(self, email: str, password: str) -> AuthResponse:
        user = await self.authenticate_user(email, password)
        if not user:
            # 帳號不存在與密碼錯誤回傳同一個訊息
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="不正確的帳號或密碼",
                headers={"WWW-Authenticate": "Bearer"},
            )

        logger.info(f"User logged in: {user.id}")
        return self._build_auth_response(user)

    async def get_current_user(self, user_id: int) -> User:
        """
        取得 Token 對應的使用者；Token 發出後使用者被刪除則回傳 404
        """
        user = await self.user_repo.get_user_by_id(user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="使用者不存在")
        return user

    def create_login_token(self, user: User) -> str:
        """
        為指定使用者建立 access token
        """
        return create_access_token(
            data={
                "sub": str(user.id), # 'sub' 是 JWT 的標準欄位
                "user_id": user.id,
            }
        )

    def _build_auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            token=self.create_login_token(user),
            user=UserOut.model_validate(user),
        )
