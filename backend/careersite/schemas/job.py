"""Job-related Pydantic schemas."""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator


EmploymentType = Literal["Full-time", "Part-time", "Contract", "Internship"]
ExperienceLevel = Literal["Junior", "Mid-level", "Senior"]
WorkPolicy = Literal["Remote", "Hybrid", "Onsite"]


class JobBase(BaseModel):
    """Base schema with common job fields."""
    title: str = Field(..., min_length=1)
    location: Optional[str] = None
    department: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[ExperienceLevel] = None
    salary_range: Optional[str] = None
    work_policy: Optional[WorkPolicy] = None
    description: Optional[str] = None


class JobCreate(JobBase):
    """Schema for creating a job."""
    is_active: bool = True


class JobUpdate(BaseModel):
    """Partial job update."""
    title: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    department: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[ExperienceLevel] = None
    salary_range: Optional[str] = None
    work_policy: Optional[WorkPolicy] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("title", "is_active")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class JobResponse(JobBase):
    """Schema for job response."""
    id: UUID
    company_id: UUID
    is_active: bool
    created_at: datetime

    # Stored values are not re-validated against the Literal choices
    employment_type: Optional[str] = None
    experience_level: Optional[str] = None
    work_policy: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class JobFilters(BaseModel):
    """Careers page job search parameters."""
    q: Optional[str] = None  # Matches title or department
    location: Optional[str] = None
    department: Optional[str] = None
    employment_type: Optional[str] = None  # Exact match
