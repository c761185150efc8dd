"""
Typed failures raised by the careers site services.

API routers translate these into HTTP responses; nothing in the services
layer raises HTTPException directly.
"""
from typing import Any, Optional


class CareersiteError(Exception):
    """Base class for all domain errors."""
    pass


class NotFoundError(CareersiteError):
    """Raised when a requested entity does not exist (or is hidden)."""
    pass


class CompanyNotFoundError(NotFoundError):
    """
    Raised for an unknown company.

    Public lookups of unpublished companies raise this too, with the same
    message, so callers cannot tell "never existed" from "not published".
    """

    def __init__(self, lookup: str):
        self.lookup = lookup
        super().__init__("Company not found")


class JobNotFoundError(NotFoundError):
    """Raised for an unknown job id."""

    def __init__(self, job_id: Any):
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found")


class SectionValidationError(CareersiteError):
    """Raised before any write when submitted sections are unusable."""

    def __init__(self, message: str, section_id: Optional[str] = None):
        self.section_id = section_id
        super().__init__(message)


class SlugTakenError(CareersiteError):
    """Raised when a company slug is already in use."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug '{slug}' is already taken")


class SectionConflictError(CareersiteError):
    """Raised when a save would overwrite sections changed by someone else."""

    def __init__(self, section_ids: list[str]):
        self.section_ids = section_ids
        super().__init__(
            f"{len(section_ids)} section(s) were modified after the editor loaded them"
        )


class SectionWriteError(CareersiteError):
    """
    Raised when a reconciliation write fails.

    Attributes:
        applied: Operations that had been flushed before the failure
        failed: The operation that failed (None if the commit itself failed)
        rolled_back: Whether the transaction was rolled back cleanly, i.e.
            whether the persisted sections are known to be untouched
    """

    def __init__(
        self,
        message: str,
        applied: Optional[list] = None,
        failed: Any = None,
        rolled_back: bool = True,
    ):
        self.applied = applied or []
        self.failed = failed
        self.rolled_back = rolled_back
        super().__init__(message)

    def to_detail(self) -> dict:
        return {
            "error": str(self),
            "applied": [op.describe() for op in self.applied],
            "failed": self.failed.describe() if self.failed is not None else None,
            "rolled_back": self.rolled_back,
        }


class PartialWriteError(SectionWriteError):
    """Raised when some reconciliation writes succeeded before a later one failed."""
    pass


class StoreUnavailableError(CareersiteError):
    """Raised when the database cannot be reached. Not retried."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Database unavailable during {operation}")
