"""Job listing business logic."""
import logging
from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.database import store_errors
from careersite.errors import JobNotFoundError
from careersite.models.job import Job
from careersite.services.companies import get_company

logger = logging.getLogger(__name__)


async def create_job(db: AsyncSession, company_id, job_data: dict) -> Job:
    """Create a job for an existing company."""
    await get_company(db, company_id)

    job = Job(company_id=company_id, **job_data)
    with store_errors("job create"):
        db.add(job)
        await db.commit()
        await db.refresh(job)

    logger.info(f"Created job {job.id}: {job.title} for company {company_id}")
    return job


async def list_jobs(db: AsyncSession, company_id, include_inactive: bool = True) -> list[Job]:
    """All jobs of a company for the admin view, newest first."""
    await get_company(db, company_id)

    query = select(Job).where(Job.company_id == company_id)
    if not include_inactive:
        query = query.where(Job.is_active.is_(True))
    query = query.order_by(Job.created_at.desc())

    with store_errors("job list"):
        result = await db.execute(query)
    return list(result.scalars().all())


async def get_job(db: AsyncSession, company_id, job_id) -> Job:
    with store_errors("job lookup"):
        result = await db.execute(
            select(Job).where(and_(Job.id == job_id, Job.company_id == company_id))
        )
    job = result.scalar_one_or_none()
    if not job:
        raise JobNotFoundError(job_id)
    return job


async def update_job(db: AsyncSession, company_id, job_id, update_data: dict) -> Job:
    """Partial update of a job (including activating/deactivating it)."""
    job = await get_job(db, company_id, job_id)

    for field, value in update_data.items():
        setattr(job, field, value)
    job.updated_at = datetime.utcnow()

    with store_errors("job update"):
        await db.commit()
        await db.refresh(job)

    logger.info(f"Updated job {job_id}: {', '.join(sorted(update_data)) or 'no fields'}")
    return job


async def delete_job(db: AsyncSession, company_id, job_id) -> None:
    job = await get_job(db, company_id, job_id)

    with store_errors("job delete"):
        await db.delete(job)
        await db.commit()

    logger.info(f"Deleted job {job_id}")
