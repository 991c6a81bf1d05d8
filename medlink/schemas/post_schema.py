# medlink/schemas/post_schema.py
from pydantic import Field
from datetime import datetime
from typing import List, Optional
from medlink.schemas.base_schema import CamelModel
from medlink.schemas.user_schema import UserWithProfileOut

# --- 建立 (Create) ---
class PostCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)
    image_url: Optional[str] = Field(None, max_length=500)

class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=500)

# --- 讀取 (Read / Out) ---
class LikeUserOut(CamelModel):
    id: int
    first_name: str
    last_name: str

class LikeOut(CamelModel):
    id: int
    user_id: int
    post_id: int
    user: Optional[LikeUserOut] = None

class CommentOut(CamelModel):
    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime
    user: Optional[UserWithProfileOut] = None

class PostOut(CamelModel):
    id: int
    author_id: int
    content: str
    image_url: Optional[str] = None
    created_at: datetime
    author: Optional[UserWithProfileOut] = None
    likes: List[LikeOut] = []
    comments: List[CommentOut] = []

class FeedOut(CamelModel):
    posts: List[PostOut]
    next_cursor: Optional[int] = None

class LikeToggleOut(CamelModel):
    liked: bool
