"""Section (content block) Pydantic schemas."""
from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator

from careersite.models.content_block import SectionType


# ============================================================
# LAYOUT ITEMS
# ============================================================

class CardItem(BaseModel):
    """One card of a `cards` section."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None  # Editor-side key, not a database id
    title: str = ""
    subtitle: Optional[str] = None
    body: Optional[str] = None
    image: Optional[str] = None


class SlideItem(BaseModel):
    """One slide of a `carousel` section."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    title: Optional[str] = None
    image: Optional[str] = None


# ============================================================
# TYPED VARIANTS (read side)
# ============================================================

class _BlockBase(BaseModel):
    id: UUID
    title: Optional[str] = None
    order_index: int = 0
    visible: bool = True


class TextBlock(_BlockBase):
    type: Literal["text"] = "text"
    content: Optional[str] = None
    media_url: Optional[str] = None


class CardsBlock(_BlockBase):
    type: Literal["cards"] = "cards"
    cards: list[CardItem] = []


class CarouselBlock(_BlockBase):
    type: Literal["carousel"] = "carousel"
    slides: list[SlideItem] = []


class VideoBlock(_BlockBase):
    type: Literal["video"] = "video"
    video_url: Optional[str] = None


ContentBlockVariant = Annotated[
    Union[TextBlock, CardsBlock, CarouselBlock, VideoBlock],
    Field(discriminator="type"),
]


# ============================================================
# REQUEST/RESPONSE SCHEMAS
# ============================================================

class SectionInput(BaseModel):
    """
    One section as held by the editor.

    `id` is either a persisted UUID or a provisional `new-...` id.
    `layout` may be a list of items or its JSON serialization.
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    type: str = SectionType.TEXT.value
    title: Optional[str] = None
    content: Optional[str] = None
    media_url: Optional[str] = None
    layout: Optional[Union[str, list[Any]]] = None
    order_index: Optional[int] = None
    visible: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        if isinstance(value, UUID):
            return str(value)
        return value


class SectionResponse(BaseModel):
    """Persisted section as stored."""
    id: UUID
    company_id: UUID
    type: str
    title: Optional[str] = None
    content: Optional[str] = None
    media_url: Optional[str] = None
    layout: Optional[str] = None
    order_index: int
    visible: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReconcileRequest(BaseModel):
    """Full desired section list for a company."""
    sections: list[SectionInput]
    snapshot_at: Optional[datetime] = None  # When the editor loaded the sections
    reject_conflicts: bool = False


class ReconcileResponse(BaseModel):
    """Authoritative section list after a save."""
    sections: list[SectionResponse]
    inserted: int = 0
    updated: int = 0
    unchanged: int = 0
    deleted: int = 0
    conflicts: list[str] = []


# ============================================================
# EDITOR COMMANDS
# ============================================================

class AddSectionCommand(BaseModel):
    """Append (or insert at `position`) a new section built from its type's template."""
    op: Literal["add"] = "add"
    type: SectionType = SectionType.TEXT
    title: Optional[str] = None
    content: Optional[str] = None
    media_url: Optional[str] = None
    layout: Optional[Union[str, list[Any]]] = None
    visible: bool = True
    position: Optional[int] = Field(None, ge=0)


class UpdateSectionCommand(BaseModel):
    """Patch fields of an existing section; unset fields are left alone."""
    op: Literal["update"] = "update"
    id: str
    type: Optional[SectionType] = None
    title: Optional[str] = None
    content: Optional[str] = None
    media_url: Optional[str] = None
    layout: Optional[Union[str, list[Any]]] = None
    visible: Optional[bool] = None

    def patch(self) -> dict:
        data = self.model_dump(exclude_unset=True, exclude={"op", "id"})
        # type and visible cannot be cleared; an explicit null leaves them alone
        for name in ("type", "visible"):
            if name in data and data[name] is None:
                del data[name]
        if "type" in data:
            data["type"] = SectionType(data["type"]).value
        return data


class RemoveSectionCommand(BaseModel):
    op: Literal["remove"] = "remove"
    id: str


class MoveSectionCommand(BaseModel):
    op: Literal["move"] = "move"
    id: str
    to_index: int = Field(..., ge=0)


SectionCommand = Annotated[
    Union[AddSectionCommand, UpdateSectionCommand, RemoveSectionCommand, MoveSectionCommand],
    Field(discriminator="op"),
]


class CommandBatchRequest(BaseModel):
    """Editor commands to apply on top of the persisted sections, then save."""
    commands: list[SectionCommand]
    snapshot_at: Optional[datetime] = None
    reject_conflicts: bool = False
