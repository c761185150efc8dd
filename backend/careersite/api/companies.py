"""
Company administration endpoints.
Create, list, edit, publish and delete careers sites.
"""
import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.database import get_db
from careersite.errors import CompanyNotFoundError, SlugTakenError, StoreUnavailableError
from careersite.schemas.company import (
    CompanyCreate,
    CompanyEditorResponse,
    CompanyResponse,
    CompanySummary,
    CompanyUpdate,
    PublishRequest,
)
from careersite.schemas.section import SectionResponse
from careersite.services.companies import (
    create_company,
    delete_company,
    list_companies,
    set_published,
    update_company,
)
from careersite.services.company_loader import load_company_by_id

logger = logging.getLogger(__name__)
router = APIRouter()


# Endpoints
@router.post("/", response_model=CompanyResponse, status_code=201)
async def create_company_endpoint(
    payload: CompanyCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a new (unpublished) company.
    
    Returns 409 if the slug is already taken.
    """
    try:
        return await create_company(db, payload.owner_id, payload.name, payload.slug, payload.tagline)
    except SlugTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/", response_model=list[CompanySummary])
async def list_companies_endpoint(
    owner_id: UUID = Query(..., description="Owner account id"),
    db: AsyncSession = Depends(get_db)
):
    """List an owner's companies, newest first."""
    return await list_companies(db, owner_id)


@router.get("/{company_id}", response_model=CompanyEditorResponse)
async def get_company_for_editor(
    company_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """
    Load a company and ALL of its sections (hidden ones included) for the editor.
    
    `loaded_at` should be sent back as `snapshot_at` when saving so that
    concurrent edits can be detected.
    """
    loaded_at = datetime.utcnow()
    try:
        aggregate = await load_company_by_id(db, company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    
    return CompanyEditorResponse(
        company=CompanyResponse.model_validate(aggregate.company),
        sections=[SectionResponse.model_validate(s) for s in aggregate.sections],
        loaded_at=loaded_at,
    )


@router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company_endpoint(
    company_id: UUID,
    payload: CompanyUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update company details and theme (partial update)."""
    try:
        return await update_company(db, company_id, payload.model_dump(exclude_unset=True))
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SlugTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{company_id}/publish", response_model=CompanyResponse)
async def publish_company(
    company_id: UUID,
    payload: PublishRequest,
    db: AsyncSession = Depends(get_db)
):
    """Publish or unpublish the public careers page."""
    try:
        return await set_published(db, company_id, payload.published)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{company_id}", status_code=204)
async def delete_company_endpoint(
    company_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Delete a company. Its sections and jobs are deleted with it."""
    try:
        await delete_company(db, company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError:
        raise
    except Exception as e:
        logger.error(f"Error deleting company {company_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(status_code=500, detail="Failed to delete company")
    return None
