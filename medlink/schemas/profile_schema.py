# medlink/schemas/profile_schema.py
from typing import Optional
from medlink.schemas.base_schema import CamelModel

class MedicalProfileOut(CamelModel):
    id: int
    user_id: int
    profession_type: str
    specialty: str
    years_of_experience: int
    license_number: Optional[str] = None
    current_position: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    profile_picture_url: Optional[str] = None

# 精簡版，用於連結清單、邀請清單
class ProfileSummaryOut(CamelModel):
    profession_type: str
    specialty: str
    profile_picture_url: Optional[str] = None
    location: Optional[str] = None
    current_position: Optional[str] = None
