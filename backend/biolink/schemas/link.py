from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class LinkCreate(BaseModel):
    """Schema for adding a link to a profile"""
    url: str = Field(..., description="Target URL, https:// is assumed when missing", min_length=1, max_length=2048)
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=100)
    collection_id: Optional[str] = Field(None, description="Collection to append to, ungrouped when omitted")


class LinkUpdate(BaseModel):
    """Schema for editing a link"""
    title: Optional[str] = Field(None, max_length=255)
    url: Optional[str] = Field(None, min_length=1, max_length=2048)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None


class LinkResponse(BaseModel):
    """Schema for link response"""
    id: str
    user_id: str
    collection_id: Optional[str] = None
    title: str
    url: str
    description: Optional[str] = None
    icon: Optional[str] = None
    position: int
    is_active: bool
    click_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClickResponse(BaseModel):
    """Schema for a recorded click"""
    id: int
    clicked_at: Optional[datetime] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referrer: Optional[str] = None

    class Config:
        from_attributes = True


class LinkClicks(BaseModel):
    """Schema for paginated click history"""
    link_id: str
    click_count: int
    total: int
    limit: int
    offset: int
    clicks: list[ClickResponse]


class TrackClickRequest(BaseModel):
    """Body of the public click tracking call"""
    link_id: Optional[str] = Field(None, alias="linkId")

    @field_validator("link_id", mode="before")
    @classmethod
    def coerce_link_id(cls, value):
        # Numeric ids are looked up like any other unknown id
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value
