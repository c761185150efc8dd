"""View models produced by the page renderer."""
import enum
from typing import Annotated, Literal, Optional, Union
from uuid import UUID
from pydantic import BaseModel, Field

from careersite.schemas.job import JobResponse
from careersite.schemas.section import CardItem, SlideItem


class Theme(BaseModel):
    primary_color: str
    accent_color: str


class VideoStatus(str, enum.Enum):
    """Outcome of resolving an external video link."""
    PLAYABLE = "playable"
    UNPLAYABLE = "unplayable"          # A link is set but its shape is not recognized
    NOT_CONFIGURED = "not_configured"  # No link at all


class VideoEmbed(BaseModel):
    status: VideoStatus
    source_url: Optional[str] = None
    embed_url: Optional[str] = None


class RenderedText(BaseModel):
    kind: Literal["text"] = "text"
    id: UUID
    title: Optional[str] = None
    content_html: str = ""
    media_url: Optional[str] = None


class RenderedCards(BaseModel):
    kind: Literal["cards"] = "cards"
    id: UUID
    title: Optional[str] = None
    accent_color: str
    cards: list[CardItem] = []


class RenderedCarousel(BaseModel):
    kind: Literal["carousel"] = "carousel"
    id: UUID
    title: Optional[str] = None
    slides: list[SlideItem] = []


class RenderedVideo(BaseModel):
    kind: Literal["video"] = "video"
    id: UUID
    title: Optional[str] = None
    video: VideoEmbed


RenderedSection = Annotated[
    Union[RenderedText, RenderedCards, RenderedCarousel, RenderedVideo],
    Field(discriminator="kind"),
]


class CompanyHeader(BaseModel):
    name: str
    slug: str
    tagline: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None


class RenderedPage(BaseModel):
    """Everything a careers page (public or preview) displays."""
    company: CompanyHeader
    theme: Theme
    culture_video: VideoEmbed
    sections: list[RenderedSection]
    jobs: list[JobResponse]
    job_count: int
    preview: bool = False
