"""
Database engine, session factory and declarative base.
"""
import logging
from contextlib import contextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from careersite.config import settings
from careersite.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


engine = create_async_engine(settings.database_url, echo=settings.debug)

AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with AsyncSessionLocal() as session:
        yield session


@contextmanager
def store_errors(operation: str):
    """
    Translate connectivity failures into StoreUnavailableError.
    
    Other SQLAlchemy errors pass through untouched so callers can tell
    a broken connection apart from a rejected write.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.error(f"Store unavailable during {operation}: {e}")
        raise StoreUnavailableError(operation) from e
