"""
Job endpoints.
Admin CRUD for a company's job listings.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.database import get_db
from careersite.errors import NotFoundError
from careersite.schemas.job import JobCreate, JobResponse, JobUpdate
from careersite.services.jobs import create_job, delete_job, list_jobs, update_job

logger = logging.getLogger(__name__)
router = APIRouter()


# Endpoints
@router.post("/{company_id}/jobs/", response_model=JobResponse, status_code=201)
async def create_job_endpoint(
    company_id: UUID,
    job: JobCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a job listing for a company."""
    try:
        return await create_job(db, company_id, job.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{company_id}/jobs/", response_model=list[JobResponse])
async def list_jobs_endpoint(
    company_id: UUID,
    include_inactive: bool = Query(True, description="Include deactivated jobs"),
    db: AsyncSession = Depends(get_db)
):
    """List a company's jobs, newest first (admin view, inactive included by default)."""
    try:
        return await list_jobs(db, company_id, include_inactive=include_inactive)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{company_id}/jobs/{job_id}", response_model=JobResponse)
async def update_job_endpoint(
    company_id: UUID,
    job_id: UUID,
    payload: JobUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Partially update a job. Set is_active=false to hide it from the careers page."""
    try:
        return await update_job(db, company_id, job_id, payload.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{company_id}/jobs/{job_id}", status_code=204)
async def delete_job_endpoint(
    company_id: UUID,
    job_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Delete a job listing."""
    try:
        await delete_job(db, company_id, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return None
