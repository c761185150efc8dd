"""Company-related Pydantic schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from careersite.schemas.section import SectionResponse


SLUG_PATTERN = r"^[a-z0-9-]+$"


class CompanyCreate(BaseModel):
    """Request body for creating a company."""
    owner_id: UUID
    name: str = Field(..., min_length=2)
    slug: str = Field(..., min_length=3, pattern=SLUG_PATTERN)
    tagline: Optional[str] = Field(None, max_length=140)


class CompanyUpdate(BaseModel):
    """Partial update of company details and theme."""
    name: Optional[str] = Field(None, min_length=2)
    slug: Optional[str] = Field(None, min_length=3, pattern=SLUG_PATTERN)
    tagline: Optional[str] = Field(None, max_length=140)
    website: Optional[HttpUrl] = None
    logo_url: Optional[HttpUrl] = None
    banner_url: Optional[HttpUrl] = None
    primary_color: Optional[str] = Field(None, min_length=3, max_length=9)
    accent_color: Optional[str] = Field(None, min_length=3, max_length=9)
    culture_video_url: Optional[HttpUrl] = None

    @field_validator("name", "slug")
    @classmethod
    def not_null(cls, value):
        # Omit the field to leave it unchanged; it cannot be cleared
        if value is None:
            raise ValueError("may not be null")
        return value


class PublishRequest(BaseModel):
    published: bool


class CompanyResponse(BaseModel):
    """Full company record."""
    id: UUID
    owner_id: UUID
    name: str
    slug: str
    tagline: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    primary_color: Optional[str] = None
    accent_color: Optional[str] = None
    culture_video_url: Optional[str] = None
    published: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompanySummary(BaseModel):
    """Dashboard list entry."""
    id: UUID
    name: str
    slug: str
    tagline: Optional[str] = None
    published: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompanyEditorResponse(BaseModel):
    """Company plus every section (hidden ones included) for the editor."""
    company: CompanyResponse
    sections: list[SectionResponse]
    loaded_at: datetime  # Send back as snapshot_at when saving
