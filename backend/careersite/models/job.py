"""Job listing shown on a company's careers page."""
from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import uuid

from careersite.database import Base
from careersite.database_types import GUID


class Job(Base):
    __tablename__ = "jobs"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(
        GUID,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    
    # Job details
    title = Column(String, nullable=False)
    location = Column(String, nullable=True)
    department = Column(String, nullable=True)
    employment_type = Column(String, nullable=True)  # Full-time | Part-time | Contract | Internship
    experience_level = Column(String, nullable=True)  # Junior | Mid-level | Senior
    salary_range = Column(String, nullable=True)
    work_policy = Column(String, nullable=True)  # Remote | Hybrid | Onsite
    description = Column(Text, nullable=True)
    
    # Only active jobs are listed on public and preview pages
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # Relationships
    company = relationship("Company", back_populates="jobs")
