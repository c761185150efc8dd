"""Company model: one branded careers microsite."""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.orm import relationship
import uuid

from careersite.database import Base
from careersite.database_types import GUID


class Company(Base):
    __tablename__ = "companies"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    
    # Owning account (auth lives outside this service)
    owner_id = Column(GUID, nullable=False, index=True)
    
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)  # Only public lookup key
    tagline = Column(String(140), nullable=True)
    website = Column(String, nullable=True)
    
    # Branding (opaque URLs from object storage)
    logo_url = Column(String, nullable=True)
    banner_url = Column(String, nullable=True)
    primary_color = Column(String(9), nullable=True)
    accent_color = Column(String(9), nullable=True)
    culture_video_url = Column(String, nullable=True)
    
    # Unpublished companies are invisible on the public page
    published = Column(Boolean, default=False, nullable=False)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # Relationships (children are removed with explicit deletes, see services.companies)
    sections = relationship(
        "ContentBlock",
        back_populates="company",
        cascade="all",
        passive_deletes=True,
    )
    jobs = relationship(
        "Job",
        back_populates="company",
        cascade="all",
        passive_deletes=True,
    )
