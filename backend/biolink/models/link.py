import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, func, Index
from sqlalchemy.orm import relationship
from ..database import Base


class Link(Base):
    """Profile link model"""
    __tablename__ = "links"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    collection_id = Column(
        String(36), ForeignKey("collections.id", ondelete="SET NULL"), nullable=True
    )  # NULL means ungrouped
    title = Column(String(255), nullable=False)
    url = Column(String(2048), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)
    position = Column(Integer, nullable=False, default=0)  # Ordering within the bucket only
    is_active = Column(Boolean, default=True)
    click_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("Profile", back_populates="links")
    collection = relationship("Collection", back_populates="links")
    clicks = relationship("LinkClick", back_populates="link", cascade="all, delete-orphan")

    # Bucket lookup: owner + collection, ordered by position
    __table_args__ = (
        Index('idx_links_bucket', 'user_id', 'collection_id', 'position'),
    )

    def __repr__(self):
        return f"<Link {self.title} -> {self.url}>"
