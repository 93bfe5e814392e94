from sqlalchemy import Column, String, Text, DateTime, Boolean, func
from sqlalchemy.orm import relationship
from ..database import Base


class Profile(Base):
    """Public profile of an authenticated user"""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, index=True)  # Identity provider user id
    username = Column(String(30), unique=True, index=True, nullable=False)
    display_name = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String(2048), nullable=True)
    theme = Column(String(30), default="default")
    is_public = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    links = relationship("Link", back_populates="owner", cascade="all, delete-orphan")
    collections = relationship("Collection", back_populates="owner", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Profile {self.username}>"
