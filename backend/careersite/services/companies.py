"""Company administration business logic."""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.database import store_errors
from careersite.errors import CompanyNotFoundError, SlugTakenError
from careersite.models.company import Company
from careersite.models.content_block import ContentBlock
from careersite.models.job import Job

logger = logging.getLogger(__name__)


# Pydantic HttpUrl values must be stored as plain strings
URL_FIELDS = ("website", "logo_url", "banner_url", "culture_video_url")


async def get_company(db: AsyncSession, company_id) -> Company:
    """Fetch a company by id or raise CompanyNotFoundError."""
    with store_errors("company lookup"):
        result = await db.execute(select(Company).where(Company.id == company_id))
    company = result.scalar_one_or_none()
    if not company:
        raise CompanyNotFoundError(str(company_id))
    return company


async def _ensure_slug_free(db: AsyncSession, slug: str) -> None:
    result = await db.execute(select(Company.id).where(Company.slug == slug))
    if result.scalar_one_or_none() is not None:
        raise SlugTakenError(slug)


async def create_company(
    db: AsyncSession,
    owner_id,
    name: str,
    slug: str,
    tagline: Optional[str] = None,
) -> Company:
    """Create an unpublished company owned by `owner_id`."""
    with store_errors("company create"):
        await _ensure_slug_free(db, slug)

        company = Company(owner_id=owner_id, name=name, slug=slug, tagline=tagline)
        db.add(company)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race with another create for the same slug
            await db.rollback()
            raise SlugTakenError(slug)
        await db.refresh(company)

    logger.info(f"Created company {company.id} ({slug}) for owner {owner_id}")
    return company


async def list_companies(db: AsyncSession, owner_id) -> list[Company]:
    """Companies of one owner, newest first."""
    with store_errors("company list"):
        result = await db.execute(
            select(Company)
            .where(Company.owner_id == owner_id)
            .order_by(Company.created_at.desc())
        )
    return list(result.scalars().all())


async def update_company(db: AsyncSession, company_id, update_data: dict) -> Company:
    """Apply a partial update of company fields."""
    company = await get_company(db, company_id)

    with store_errors("company update"):
        new_slug = update_data.get("slug")
        previous_slug = company.slug
        if new_slug and new_slug != previous_slug:
            await _ensure_slug_free(db, new_slug)

        for field, value in update_data.items():
            if field in URL_FIELDS and value is not None:
                value = str(value)
            setattr(company, field, value)

        company.updated_at = datetime.utcnow()
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            if new_slug and new_slug != previous_slug:
                # Lost a race with another company taking the same slug
                raise SlugTakenError(new_slug)
            raise
        await db.refresh(company)

    logger.info(f"Updated company {company_id}: {', '.join(sorted(update_data)) or 'no fields'}")
    return company


async def set_published(db: AsyncSession, company_id, published: bool) -> Company:
    """Publish or unpublish the public careers page."""
    company = await get_company(db, company_id)
    company.published = published
    company.updated_at = datetime.utcnow()

    with store_errors("company publish"):
        await db.commit()
        await db.refresh(company)

    logger.info(f"Company {company_id} {'published' if published else 'unpublished'}")
    return company


async def delete_company(db: AsyncSession, company_id) -> None:
    """
    Delete a company together with its sections and jobs.

    Children are deleted explicitly in the same transaction; the FK
    ON DELETE CASCADE covers PostgreSQL, but SQLite does not enforce it
    unless foreign keys are switched on.
    """
    company = await get_company(db, company_id)

    with store_errors("company delete"):
        sections = await db.execute(delete(ContentBlock).where(ContentBlock.company_id == company_id))
        jobs = await db.execute(delete(Job).where(Job.company_id == company_id))
        await db.delete(company)
        await db.commit()

    logger.info(
        f"Deleted company {company_id} with {sections.rowcount} section(s) and {jobs.rowcount} job(s)"
    )
