"""
Section reconciliation.

Turns the editor's full list of sections into database writes for one
company: provisional ids become inserts, persisted ids become updates, and
persisted sections missing from the list are deleted. ALL section writes
for a company go through reconcile_sections().
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence, Union

from sqlalchemy import select
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.database import store_errors
from careersite.errors import (
    CompanyNotFoundError,
    PartialWriteError,
    SectionConflictError,
    SectionValidationError,
    SectionWriteError,
    StoreUnavailableError,
)
from careersite.models.company import Company
from careersite.models.content_block import ContentBlock
from careersite.schemas.section import SectionInput
from careersite.services.blocks import coerce_section_type, is_provisional_id, normalize_layout

logger = logging.getLogger(__name__)


DesiredBuilder = Callable[[list[ContentBlock]], Sequence[SectionInput]]


@dataclass
class SectionOperation:
    """One planned write."""
    kind: str  # delete | insert | update
    section_id: str
    values: dict = field(default_factory=dict)

    def describe(self) -> dict:
        return {"op": self.kind, "section_id": self.section_id, "fields": sorted(self.values)}


@dataclass
class ReconcilePlan:
    deletes: list[SectionOperation] = field(default_factory=list)
    writes: list[SectionOperation] = field(default_factory=list)  # inserts and updates, in desired order
    unchanged: int = 0
    conflicts: list[str] = field(default_factory=list)

    @property
    def operations(self) -> list[SectionOperation]:
        # Deletes go first so reused order indices never collide mid-save
        return self.deletes + self.writes

    def count(self, kind: str) -> int:
        return sum(1 for op in self.operations if op.kind == kind)


@dataclass
class ReconcileResult:
    sections: list[ContentBlock]
    inserted: int = 0
    updated: int = 0
    unchanged: int = 0
    deleted: int = 0
    conflicts: list[str] = field(default_factory=list)


# ============================================================
# PLANNING
# ============================================================

def plan_reconciliation(
    persisted: Sequence[ContentBlock],
    desired: Sequence[SectionInput],
    snapshot_at: Optional[datetime] = None,
) -> ReconcilePlan:
    """
    Diff the desired sections against the persisted ones without touching the database.

    Args:
        persisted: Current rows for the company
        desired: Sections as the editor wants them, in display order
        snapshot_at: When the editor loaded its copy; rows changed after this
            that the plan would overwrite or delete are reported as conflicts

    Raises:
        SectionValidationError: Missing, malformed, duplicate or foreign ids,
            unknown section types, or invalid layouts
    """
    by_id = {str(row.id): row for row in persisted}
    snapshot = _as_naive_utc(snapshot_at)
    plan = ReconcilePlan()
    seen: set[str] = set()

    for position, item in enumerate(desired):
        if not item.id:
            raise SectionValidationError(f"Section at position {position} has no id")
        if item.id in seen:
            raise SectionValidationError(f"Section {item.id} appears more than once", section_id=item.id)
        seen.add(item.id)

        row = None
        key = item.id
        if not is_provisional_id(item.id):
            try:
                key = str(uuid.UUID(item.id))
            except ValueError:
                raise SectionValidationError(f"'{item.id}' is not a valid section id", section_id=item.id)

            if key != item.id and key in seen:
                raise SectionValidationError(f"Section {item.id} appears more than once", section_id=item.id)
            row = by_id.get(key)
            if row is None:
                raise SectionValidationError(
                    f"Section {item.id} does not belong to this company", section_id=item.id
                )
            seen.add(key)

        values = {
            "type": item.type,
            "title": item.title,
            "content": item.content,
            "media_url": item.media_url,
            "layout": item.layout,
            "order_index": item.order_index if item.order_index is not None else position,
            "visible": item.visible,
        }

        # Stored type and layout left as they are are kept verbatim, even when
        # they predate validation; only submitted changes are checked
        type_kept = row is not None and item.type == row.type
        section_type = coerce_section_type(item.type)
        if section_type is None and not type_kept:
            raise SectionValidationError(f"Unknown section type '{item.type}'", section_id=item.id)
        if section_type is not None:
            values["type"] = section_type.value
        if not (type_kept and item.layout == row.layout):
            values["layout"] = normalize_layout(section_type, item.layout, section_id=item.id)

        if row is None:
            plan.writes.append(SectionOperation("insert", item.id, values))
            continue

        changes = {name: value for name, value in values.items() if getattr(row, name) != value}
        if not changes:
            plan.unchanged += 1
            continue
        plan.writes.append(SectionOperation("update", key, changes))
        if _modified_since(row, snapshot):
            plan.conflicts.append(key)

    for key, row in by_id.items():
        if key not in seen:
            plan.deletes.append(SectionOperation("delete", key))
            if _modified_since(row, snapshot):
                plan.conflicts.append(key)

    return plan


def _as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Stored timestamps are naive UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _modified_since(row: ContentBlock, snapshot: Optional[datetime]) -> bool:
    return snapshot is not None and row.updated_at is not None and row.updated_at > snapshot


# ============================================================
# APPLYING
# ============================================================

async def list_sections(
    db: AsyncSession,
    company_id,
    visible_only: bool = False,
) -> list[ContentBlock]:
    """Sections of a company in display order (order_index, then insertion order)."""
    query = select(ContentBlock).where(ContentBlock.company_id == company_id)
    if visible_only:
        query = query.where(ContentBlock.visible.is_(True))
    query = query.order_by(
        ContentBlock.order_index.asc(),
        ContentBlock.created_at.asc(),
        ContentBlock.id.asc(),
    ).execution_options(populate_existing=True)

    result = await db.execute(query)
    return list(result.scalars().all())


async def reconcile_sections(
    db: AsyncSession,
    company_id,
    desired: Union[Sequence[SectionInput], DesiredBuilder],
    snapshot_at: Optional[datetime] = None,
    reject_conflicts: bool = False,
) -> ReconcileResult:
    """
    Make the company's persisted sections match `desired` in one transaction.

    The company row is locked for the duration so two saves for the same
    company are serialized (PostgreSQL; SQLite ignores the lock).

    Args:
        db: Database session (committed on success, rolled back on failure)
        company_id: Company whose sections are saved
        desired: Full section list as the editor holds it, or a callable
            building that list from the persisted rows read under the lock
            (editor commands)
        snapshot_at: When the editor loaded its copy, for conflict detection
        reject_conflicts: Refuse the save instead of overwriting newer changes

    Returns:
        ReconcileResult with the freshly re-read sections in display order

    Raises:
        CompanyNotFoundError: Unknown company
        SectionValidationError: Nothing was written
        SectionConflictError: Nothing was written (reject_conflicts only)
        SectionWriteError: The first write failed; nothing was written
        PartialWriteError: A later write failed after earlier ones were applied
        StoreUnavailableError: Database unreachable
    """
    with store_errors("section reconciliation"):
        await _lock_company(db, company_id)
        persisted = await list_sections(db, company_id)

    try:
        if callable(desired):
            desired = desired(persisted)
        plan = plan_reconciliation(persisted, desired, snapshot_at)
    except SectionValidationError:
        await _rollback_quietly(db)
        raise

    if plan.conflicts:
        logger.warning(
            f"Company {company_id}: {len(plan.conflicts)} section(s) changed since editor snapshot "
            f"{snapshot_at}: {', '.join(plan.conflicts)}"
        )
        if reject_conflicts:
            await _rollback_quietly(db)
            raise SectionConflictError(plan.conflicts)

    by_id = {str(row.id): row for row in persisted}
    now = datetime.utcnow()
    applied: list[SectionOperation] = []

    for op in plan.operations:
        try:
            await _apply_operation(db, company_id, op, by_id, now, len(applied))
            await db.flush()
        except (OperationalError, InterfaceError) as e:
            await _rollback_quietly(db)
            raise StoreUnavailableError("section reconciliation") from e
        except SQLAlchemyError as e:
            raise await _write_failure(db, company_id, applied, op, e) from e
        except asyncio.CancelledError:
            await _rollback_quietly(db)
            raise
        applied.append(op)

    try:
        await db.commit()
    except (OperationalError, InterfaceError) as e:
        await _rollback_quietly(db)
        raise StoreUnavailableError("section reconciliation") from e
    except SQLAlchemyError as e:
        raise await _write_failure(db, company_id, applied, None, e) from e

    with store_errors("section reload"):
        sections = await list_sections(db, company_id)

    result = ReconcileResult(
        sections=sections,
        inserted=plan.count("insert"),
        updated=plan.count("update"),
        unchanged=plan.unchanged,
        deleted=plan.count("delete"),
        conflicts=plan.conflicts,
    )
    logger.info(
        f"Reconciled sections for company {company_id}: inserted={result.inserted} "
        f"updated={result.updated} unchanged={result.unchanged} deleted={result.deleted}"
    )
    return result


async def _lock_company(db: AsyncSession, company_id) -> Company:
    result = await db.execute(
        select(Company).where(Company.id == company_id).with_for_update()
    )
    company = result.scalar_one_or_none()
    if not company:
        raise CompanyNotFoundError(str(company_id))
    return company


async def _apply_operation(
    db: AsyncSession,
    company_id,
    op: SectionOperation,
    by_id: dict[str, ContentBlock],
    now: datetime,
    sequence: int,
) -> None:
    """Stage a single operation in the session (flushed by the caller)."""
    if op.kind == "delete":
        await db.delete(by_id[op.section_id])
    elif op.kind == "insert":
        db.add(ContentBlock(
            company_id=company_id,
            # Microsecond offsets keep insertion order as the tie-breaker within one save
            created_at=now + timedelta(microseconds=sequence),
            updated_at=now,
            **op.values,
        ))
    elif op.kind == "update":
        row = by_id[op.section_id]
        for name, value in op.values.items():
            setattr(row, name, value)
        row.updated_at = now
    else:
        raise ValueError(f"Unknown section operation {op.kind}")


async def _write_failure(
    db: AsyncSession,
    company_id,
    applied: list[SectionOperation],
    failed: Optional[SectionOperation],
    error: Exception,
) -> SectionWriteError:
    """Roll back and build the error describing how far the save got."""
    step = failed.describe() if failed else "commit"
    logger.error(
        f"Section write failed for company {company_id} at {step} "
        f"after {len(applied)} applied operation(s): {error}",
        exc_info=True,
    )
    rolled_back = await _rollback_quietly(db)

    if applied:
        return PartialWriteError(
            f"Section save failed after {len(applied)} of the planned writes",
            applied=list(applied),
            failed=failed,
            rolled_back=rolled_back,
        )
    return SectionWriteError(
        "Section save failed before any write was applied",
        failed=failed,
        rolled_back=rolled_back,
    )


async def _rollback_quietly(db: AsyncSession) -> bool:
    """Roll back, reporting (not raising) a failed rollback."""
    try:
        await db.rollback()
        return True
    except SQLAlchemyError:
        logger.error("Rollback failed; persisted sections may be partially updated", exc_info=True)
        return False
