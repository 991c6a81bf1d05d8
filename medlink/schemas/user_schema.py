# medlink/schemas/user_schema.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from medlink.schemas.base_schema import CamelModel
from medlink.schemas.profile_schema import MedicalProfileOut, ProfileSummaryOut

# 登入請求的格式
class UserLogin(CamelModel):
    email: EmailStr
    password: str

# Token 內的資料
class TokenData(BaseModel):
    user_id: int


# 註冊請求 Body (使用者 + 醫療專業 Profile 一起建立)
class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    profession_type: str = Field(..., min_length=1, max_length=100)
    specialty: str = Field(..., min_length=1, max_length=255)
    years_of_experience: int = Field(..., ge=0)
    license_number: Optional[str] = Field(None, max_length=100)
    current_position: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)

# 公開的使用者資訊 (不含密碼)
class UserOut(CamelModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    medical_profile: Optional[MedicalProfileOut] = None

# 註冊 / 登入成功的回應
class AuthResponse(CamelModel):
    token: str
    user: UserOut

# 用於巢狀顯示其他使用者 (連結、訊息...)，不含 email
class UserSummaryOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    medical_profile: Optional[ProfileSummaryOut] = None

# 作者 / 留言者 / 應徵者：包含完整 Profile
class UserWithProfileOut(CamelModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    medical_profile: Optional[MedicalProfileOut] = None
