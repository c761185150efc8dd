"""
Page renderer: persisted sections -> view models for the careers page.

Pure functions, no database access. Each section renders on its own; a
section that cannot be rendered is logged and left out without affecting
the rest of the page.
"""
import logging
from typing import Iterable, Optional

from careersite.config import settings
from careersite.models.company import Company
from careersite.models.content_block import ContentBlock
from careersite.schemas.job import JobResponse
from careersite.schemas.page import (
    CompanyHeader,
    RenderedCards,
    RenderedCarousel,
    RenderedPage,
    RenderedText,
    RenderedVideo,
    Theme,
)
from careersite.schemas.section import CardsBlock, CarouselBlock, VideoBlock
from careersite.services.blocks import fix_image_url, resolve_video_embed, to_content_block
from careersite.services.company_loader import CompanyAggregate

logger = logging.getLogger(__name__)


def resolve_theme(company: Company) -> Theme:
    """Company colors, falling back to the configured defaults."""
    return Theme(
        primary_color=company.primary_color or settings.default_primary_color,
        accent_color=company.accent_color or settings.default_accent_color,
    )


def render_section(section: ContentBlock, theme: Theme):
    """
    Render one section.

    Returns None when the section has nothing to show: a text section with
    no title, content or image, or a carousel without slides. A cards
    section with an unreadable layout renders with zero cards.
    """
    block = to_content_block(section)

    if isinstance(block, CardsBlock):
        return RenderedCards(
            id=block.id,
            title=block.title,
            accent_color=theme.primary_color,
            cards=[card.model_copy(update={"image": fix_image_url(card.image)}) for card in block.cards],
        )

    if isinstance(block, CarouselBlock):
        if not block.slides:
            return None
        return RenderedCarousel(
            id=block.id,
            title=block.title,
            slides=[slide.model_copy(update={"image": fix_image_url(slide.image)}) for slide in block.slides],
        )

    if isinstance(block, VideoBlock):
        return RenderedVideo(id=block.id, title=block.title, video=resolve_video_embed(block.video_url))

    if not (block.title or block.content or block.media_url):
        return None
    return RenderedText(
        id=block.id,
        title=block.title,
        content_html=block.content or "",
        media_url=fix_image_url(block.media_url),
    )


def render_sections(sections: Iterable[ContentBlock], theme: Theme) -> list:
    """Render sections in order, skipping empty ones and ones that fail."""
    rendered = []
    for section in sections:
        try:
            view = render_section(section, theme)
        except Exception:
            logger.exception(f"Failed to render section {getattr(section, 'id', None)}; skipping")
            continue
        if view is not None:
            rendered.append(view)
    return rendered


def render_page(aggregate: CompanyAggregate, theme: Optional[Theme] = None) -> RenderedPage:
    """Build the full careers page for a loaded company."""
    company = aggregate.company
    theme = theme or resolve_theme(company)
    jobs = [JobResponse.model_validate(job) for job in aggregate.jobs]

    return RenderedPage(
        company=CompanyHeader(
            name=company.name,
            slug=company.slug,
            tagline=company.tagline,
            website=company.website,
            logo_url=company.logo_url,
            banner_url=fix_image_url(company.banner_url),
        ),
        theme=theme,
        culture_video=resolve_video_embed(company.culture_video_url),
        sections=render_sections(aggregate.sections, theme),
        jobs=jobs,
        job_count=len(jobs),
        preview=aggregate.preview,
    )
