"""
Content block model: section variants and their layout payloads.

Writes are strict (a bad layout is rejected before it reaches the database),
reads are permissive (whatever is stored, a block always comes back as one of
the typed variants, with an unreadable layout treated as no items).
"""
import json
import logging
import re
import time
import uuid
from typing import Any, Optional, Union
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ValidationError

from careersite.config import settings
from careersite.errors import SectionValidationError
from careersite.models.content_block import ContentBlock, SectionType
from careersite.schemas.page import VideoEmbed, VideoStatus
from careersite.schemas.section import (
    CardItem,
    SlideItem,
    TextBlock,
    CardsBlock,
    CarouselBlock,
    VideoBlock,
)

logger = logging.getLogger(__name__)


# Layout item shape per variant; variants not listed here carry no layout
LAYOUT_ITEM_MODELS: dict[SectionType, type[BaseModel]] = {
    SectionType.CARDS: CardItem,
    SectionType.CAROUSEL: SlideItem,
}

YOUTUBE_EMBED_BASE = "https://www.youtube.com/embed/"
_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{6,64}$")


# ============================================================
# IDENTIFIERS
# ============================================================

def is_provisional_id(section_id: Optional[str]) -> bool:
    """True for client-created ids of sections that were never saved."""
    return bool(section_id) and str(section_id).startswith(settings.provisional_id_prefix)


def new_provisional_id() -> str:
    return f"{settings.provisional_id_prefix}{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def coerce_section_type(value: Any) -> Optional[SectionType]:
    """Map a stored or submitted type tag to SectionType, None if unknown."""
    try:
        return SectionType(value)
    except ValueError:
        return None


# ============================================================
# LAYOUT
# ============================================================

def parse_layout(section_type: Union[SectionType, str], raw: Any) -> list:
    """
    Parse a stored layout into item models. Never raises.

    Unparseable JSON or a non-list payload gives an empty list; individual
    entries that do not fit the item shape are dropped.
    """
    model = LAYOUT_ITEM_MODELS.get(coerce_section_type(section_type))
    if model is None or raw in (None, ""):
        return []

    data = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.debug(f"Unparseable {section_type} layout ignored")
            return []

    if not isinstance(data, list):
        return []

    items = []
    for entry in data:
        if not isinstance(entry, dict):
            continue
        try:
            items.append(model.model_validate(entry))
        except ValidationError:
            continue
    return items


def normalize_layout(section_type: Optional[SectionType], layout: Any, section_id: Optional[str] = None) -> Optional[str]:
    """
    Validate a submitted layout and return its canonical JSON text.

    Raises:
        SectionValidationError: If a cards/carousel layout is not a list of
            well-formed items
    """
    model = LAYOUT_ITEM_MODELS.get(section_type)
    if model is None or layout is None or layout == "":
        return None

    data = layout
    if isinstance(layout, str):
        try:
            data = json.loads(layout)
        except ValueError:
            raise SectionValidationError(
                f"Layout for {section_type.value} section is not valid JSON",
                section_id=section_id,
            )

    if not isinstance(data, list):
        raise SectionValidationError(
            f"Layout for {section_type.value} section must be a list",
            section_id=section_id,
        )

    try:
        items = [model.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise SectionValidationError(
            f"Invalid {section_type.value} layout item: {e.errors()[0]['msg']}",
            section_id=section_id,
        )

    return json.dumps([item.model_dump(exclude_none=True) for item in items])


# ============================================================
# TYPED VARIANTS
# ============================================================

def to_content_block(row: ContentBlock):
    """
    Convert a stored row into its typed variant.

    Unknown type tags fall back to a text block.
    """
    section_type = coerce_section_type(row.type) or SectionType.TEXT
    common = {
        "id": row.id,
        "title": row.title,
        "order_index": row.order_index if row.order_index is not None else 0,
        "visible": row.visible if row.visible is not None else True,
    }

    if section_type == SectionType.CARDS:
        return CardsBlock(cards=parse_layout(section_type, row.layout), **common)
    if section_type == SectionType.CAROUSEL:
        return CarouselBlock(slides=parse_layout(section_type, row.layout), **common)
    if section_type == SectionType.VIDEO:
        return VideoBlock(video_url=row.media_url, **common)
    return TextBlock(content=row.content, media_url=row.media_url, **common)


# ============================================================
# MEDIA
# ============================================================

def resolve_video_embed(url: Optional[str]) -> VideoEmbed:
    """
    Resolve an external video link to an embeddable URL.

    Accepted shapes:
    - https://youtu.be/<id>
    - https://www.youtube.com/watch?v=<id>
    - https://www.youtube.com/embed/<id>
    """
    if not url or not url.strip():
        return VideoEmbed(status=VideoStatus.NOT_CONFIGURED)

    source = url.strip()
    unplayable = VideoEmbed(status=VideoStatus.UNPLAYABLE, source_url=source)
    try:
        parsed = urlparse(source)
    except ValueError:
        return unplayable

    host = (parsed.hostname or "").lower()
    video_id = None
    if host == "youtu.be" or host.endswith(".youtu.be"):
        video_id = parsed.path.lstrip("/").split("/")[0]
    elif host == "youtube.com" or host.endswith(".youtube.com"):
        ids = parse_qs(parsed.query).get("v")
        if ids:
            video_id = ids[0]
        elif parsed.path.startswith("/embed/"):
            video_id = parsed.path[len("/embed/"):].split("/")[0]

    if not video_id or not _VIDEO_ID_RE.match(video_id):
        return unplayable

    return VideoEmbed(
        status=VideoStatus.PLAYABLE,
        source_url=source,
        embed_url=f"{YOUTUBE_EMBED_BASE}{video_id}",
    )


def fix_image_url(url: Optional[str]) -> Optional[str]:
    """Rewrite Unsplash photo-page links to a direct image URL."""
    if not url:
        return None
    if "unsplash.com/photos/" in url:
        photo_id = url.rstrip("/").split("/")[-1]
        if photo_id:
            return f"https://images.unsplash.com/photo-{photo_id}?w=1200&q=80&auto=format&fit=crop"
    return url


# ============================================================
# TEMPLATES
# ============================================================

def new_section_template(section_type: SectionType, section_id: str) -> dict:
    """Starting fields for a section added in the editor."""
    template = {
        "id": section_id,
        "type": section_type.value,
        "title": "New Section",
        "content": None,
        "media_url": None,
        "layout": None,
        "visible": True,
    }
    if section_type == SectionType.TEXT:
        template["content"] = "Add your content description here."
    elif section_type == SectionType.CARDS:
        template["title"] = "Our Values"
        template["layout"] = [
            {"id": f"{section_id}-c1", "title": "Value 1", "subtitle": "Subtitle", "body": "Description..."},
            {"id": f"{section_id}-c2", "title": "Value 2", "subtitle": "Subtitle", "body": "Description..."},
        ]
    elif section_type == SectionType.CAROUSEL:
        template["layout"] = [{"id": f"{section_id}-s1", "title": "Slide 1"}]
    elif section_type == SectionType.VIDEO:
        template["title"] = "Culture Video"
    return template
