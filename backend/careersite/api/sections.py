"""
Section endpoints.
Saving the editor's section list (reconciliation) and editor commands.
"""
import logging
from datetime import datetime
from typing import Optional, Sequence, Union
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.database import get_db
from careersite.errors import (
    CompanyNotFoundError,
    SectionConflictError,
    SectionValidationError,
    SectionWriteError,
    StoreUnavailableError,
)
from careersite.schemas.section import (
    CommandBatchRequest,
    ReconcileRequest,
    ReconcileResponse,
    SectionInput,
    SectionResponse,
)
from careersite.services.editor import SectionDraft
from careersite.services.reconciler import DesiredBuilder, reconcile_sections

logger = logging.getLogger(__name__)
router = APIRouter()


async def _save_sections(
    db: AsyncSession,
    company_id: UUID,
    sections: Union[Sequence[SectionInput], DesiredBuilder],
    snapshot_at: Optional[datetime],
    reject_conflicts: bool,
) -> ReconcileResponse:
    """Run reconciliation and translate its failures into HTTP errors."""
    try:
        result = await reconcile_sections(
            db,
            company_id,
            sections,
            snapshot_at=snapshot_at,
            reject_conflicts=reject_conflicts,
        )
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SectionValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "section_id": e.section_id}
        )
    except SectionConflictError as e:
        raise HTTPException(
            status_code=409,
            detail={"error": str(e), "section_ids": e.section_ids}
        )
    except SectionWriteError as e:
        # Covers PartialWriteError; detail says what was applied and whether it was rolled back
        raise HTTPException(status_code=500, detail=e.to_detail())
    except StoreUnavailableError:
        raise
    except Exception as e:
        logger.error(f"Error saving sections for company {company_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(status_code=500, detail="Failed to save sections")

    return ReconcileResponse(
        sections=[SectionResponse.model_validate(s) for s in result.sections],
        inserted=result.inserted,
        updated=result.updated,
        unchanged=result.unchanged,
        deleted=result.deleted,
        conflicts=result.conflicts,
    )


# Endpoints
@router.put("/{company_id}/sections", response_model=ReconcileResponse)
async def save_sections(
    company_id: UUID,
    payload: ReconcileRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Save the full section list of a company.
    
    - Ids starting with `new-` are inserted
    - Other ids update the existing section
    - Persisted sections missing from the list are deleted
    
    Returns the sections as stored (with real ids), in display order.
    """
    return await _save_sections(
        db, company_id, payload.sections, payload.snapshot_at, payload.reject_conflicts
    )


@router.post("/{company_id}/sections/commands", response_model=ReconcileResponse)
async def apply_section_commands(
    company_id: UUID,
    payload: CommandBatchRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Apply editor commands (add, update, remove, move) to the stored sections and save.
    
    Commands run in order against the current stored list; an unknown section
    id rejects the whole batch with 422 and nothing is saved.
    """
    def build_draft(rows):
        # Runs after the company lock is taken, against the rows read under it
        draft = SectionDraft.from_rows(rows).apply_all(payload.commands)
        logger.info(f"Applied {len(payload.commands)} editor command(s) for company {company_id}")
        return draft.sections
    
    return await _save_sections(
        db, company_id, build_draft, payload.snapshot_at, payload.reject_conflicts
    )
