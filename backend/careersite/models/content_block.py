"""Content block model: one displayable section of a company's careers page."""
from datetime import datetime
from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
import uuid
import enum

from careersite.database import Base
from careersite.database_types import GUID


class SectionType(str, enum.Enum):
    """Closed set of section variants."""
    TEXT = "text"          # title + rich text + optional image
    CARDS = "cards"        # layout = list of card records
    CAROUSEL = "carousel"  # layout = list of slide records
    VIDEO = "video"        # media_url is an external video link


class ContentBlock(Base):
    __tablename__ = "company_sections"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(
        GUID,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    
    # Stored as a plain string; rows written before validation existed may hold anything
    type = Column(String, nullable=False, default=SectionType.TEXT.value)
    
    title = Column(String, nullable=True)
    content = Column(Text, nullable=True)  # HTML from the rich text editor
    media_url = Column(String, nullable=True)
    
    # Serialized JSON list for cards/carousel, NULL otherwise.
    # Kept as text so a corrupt payload can still be loaded (and rendered as empty).
    layout = Column(Text, nullable=True)
    
    order_index = Column(Integer, nullable=False, default=0)
    visible = Column(Boolean, nullable=False, default=True)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    company = relationship("Company", back_populates="sections")
    
    __table_args__ = (
        # Page reads always fetch one company's sections in display order
        Index('idx_sections_company_order', 'company_id', 'order_index'),
    )
