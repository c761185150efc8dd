"""
Company aggregate loader: the read path shared by the public page, the
preview page and the editor.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.database import store_errors
from careersite.errors import CompanyNotFoundError
from careersite.models.company import Company
from careersite.models.content_block import ContentBlock
from careersite.models.job import Job
from careersite.schemas.job import JobFilters
from careersite.services.reconciler import list_sections

logger = logging.getLogger(__name__)


@dataclass
class CompanyAggregate:
    company: Company
    sections: list[ContentBlock] = field(default_factory=list)
    jobs: list[Job] = field(default_factory=list)
    preview: bool = False


async def load_company_for_public(
    db: AsyncSession,
    slug: str,
    filters: Optional[JobFilters] = None,
) -> CompanyAggregate:
    """
    Load a published company with its visible sections and matching active jobs.

    Raises:
        CompanyNotFoundError: Unknown slug, or the company is not published.
            Both cases raise the identical error.
    """
    with store_errors("public page load"):
        result = await db.execute(
            select(Company).where(
                and_(Company.slug == slug, Company.published.is_(True))
            )
        )
        company = result.scalar_one_or_none()
        if not company:
            logger.info(f"Public page requested for unavailable slug '{slug}'")
            raise CompanyNotFoundError(slug)

        sections = await list_sections(db, company.id, visible_only=True)
        jobs = await list_active_jobs(db, company.id, filters)

    return CompanyAggregate(company=company, sections=sections, jobs=jobs)


async def load_company_for_preview(db: AsyncSession, slug: str) -> CompanyAggregate:
    """
    Load a company regardless of publication, with all sections (hidden ones
    included) and its active jobs.
    """
    with store_errors("preview page load"):
        result = await db.execute(select(Company).where(Company.slug == slug))
        company = result.scalar_one_or_none()
        if not company:
            raise CompanyNotFoundError(slug)

        sections = await list_sections(db, company.id)
        jobs = await list_active_jobs(db, company.id)

    return CompanyAggregate(company=company, sections=sections, jobs=jobs, preview=True)


async def load_company_by_id(
    db: AsyncSession,
    company_id,
    visible_only: bool = False,
    filters: Optional[JobFilters] = None,
) -> CompanyAggregate:
    """Internal lookup by id (editor, admin)."""
    with store_errors("company load"):
        result = await db.execute(select(Company).where(Company.id == company_id))
        company = result.scalar_one_or_none()
        if not company:
            raise CompanyNotFoundError(str(company_id))

        sections = await list_sections(db, company.id, visible_only=visible_only)
        jobs = await list_active_jobs(db, company.id, filters)

    return CompanyAggregate(company=company, sections=sections, jobs=jobs, preview=True)


async def list_active_jobs(
    db: AsyncSession,
    company_id,
    filters: Optional[JobFilters] = None,
) -> list[Job]:
    """
    Active jobs of a company, newest first.

    Text filters are case-insensitive substring matches; employment_type
    must match exactly.
    """
    query = select(Job).where(
        and_(Job.company_id == company_id, Job.is_active.is_(True))
    )

    clauses = job_filter_clauses(filters) if filters else []
    if clauses:
        query = query.where(and_(*clauses))

    query = query.order_by(Job.created_at.desc())

    result = await db.execute(query)
    return list(result.scalars().all())


def job_filter_clauses(filters: JobFilters) -> list:
    clauses = []
    if filters.q and filters.q.strip():
        term = filters.q.strip()
        clauses.append(or_(
            Job.title.icontains(term, autoescape=True),
            Job.department.icontains(term, autoescape=True),
        ))
    if filters.location and filters.location.strip():
        clauses.append(Job.location.icontains(filters.location.strip(), autoescape=True))
    if filters.department and filters.department.strip():
        clauses.append(Job.department.icontains(filters.department.strip(), autoescape=True))
    if filters.employment_type:
        clauses.append(Job.employment_type == filters.employment_type)
    return clauses
