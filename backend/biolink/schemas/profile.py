from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProfileResponse(BaseModel):
    """Schema for profile response"""
    id: str
    username: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    theme: str = "default"
    is_public: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
