import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, func, Index
from sqlalchemy.orm import relationship
from ..database import Base


class Collection(Base):
    """Named group of links on a profile"""
    __tablename__ = "collections"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("Profile", back_populates="collections")
    # Member links survive deletion, the foreign key nulls their collection_id
    links = relationship("Link", back_populates="collection", passive_deletes=True)

    __table_args__ = (
        Index('idx_collections_owner_position', 'user_id', 'position'),
    )

    def __repr__(self):
        return f"<Collection {self.title} #{self.position}>"
