"""
Careers page endpoints.
Public (published companies only) and preview renderings of a company's page.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.database import get_db
from careersite.errors import CompanyNotFoundError
from careersite.schemas.job import JobFilters
from careersite.schemas.page import RenderedPage
from careersite.services.company_loader import load_company_for_preview, load_company_for_public
from careersite.services.renderer import render_page

logger = logging.getLogger(__name__)
router = APIRouter()

NOT_FOUND_DETAIL = "Careers page not found"


# Endpoints
@router.get("/{slug}", response_model=RenderedPage)
async def get_careers_page(
    slug: str,
    q: Optional[str] = Query(None, description="Search job titles and departments"),
    location: Optional[str] = Query(None, description="Filter by location (partial match)"),
    department: Optional[str] = Query(None, description="Filter by department (partial match)"),
    employment_type: Optional[str] = Query(None, description="Filter by employment type (exact)"),
    db: AsyncSession = Depends(get_db)
):
    """
    Public careers page.
    
    Unknown and unpublished slugs both return the same 404.
    """
    filters = JobFilters(q=q, location=location, department=department, employment_type=employment_type)
    try:
        aggregate = await load_company_for_public(db, slug, filters)
    except CompanyNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    
    return render_page(aggregate)


@router.get("/{slug}/preview", response_model=RenderedPage)
async def get_preview_page(
    slug: str,
    db: AsyncSession = Depends(get_db)
):
    """Owner preview: unpublished companies and hidden sections included."""
    try:
        aggregate = await load_company_for_preview(db, slug)
    except CompanyNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    
    return render_page(aggregate)
