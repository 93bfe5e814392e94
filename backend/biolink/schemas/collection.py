from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CollectionCreate(BaseModel):
    """Schema for creating a collection"""
    title: str = Field(..., max_length=255)
    description: Optional[str] = None


class CollectionUpdate(BaseModel):
    """Schema for editing a collection"""
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class CollectionResponse(BaseModel):
    """Schema for collection response"""
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    position: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
