from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base


class LinkClick(Base):
    """Click record, appended once per tracked click"""
    __tablename__ = "link_clicks"

    id = Column(Integer, primary_key=True, index=True)
    link_id = Column(String(36), ForeignKey("links.id", ondelete="CASCADE"), nullable=False, index=True)
    clicked_at = Column(DateTime(timezone=True), server_default=func.now())
    ip_address = Column(String(45), nullable=True)  # IPv4 or IPv6
    user_agent = Column(String(512), nullable=True)
    referrer = Column(String(512), nullable=True)

    # Relationship with link
    link = relationship("Link", back_populates="clicks")

    def __repr__(self):
        return f"<LinkClick {self.id} for link {self.link_id}>"
