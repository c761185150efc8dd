"""
Pytest fixtures for testing.
"""
import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Import database module BEFORE app to allow override
import careersite.database
from careersite.database import Base
# Import ALL models so Base.metadata knows about all tables
from careersite.models.company import Company
from careersite.models.content_block import ContentBlock
from careersite.models.job import Job

# Now import app (after we can override database)
from careersite.main import app as fastapi_app


# Test database URL (use in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database for each test.
    Ensures cleanup happens even if test fails.
    """
    # StaticPool keeps a single connection alive so every session
    # (test and app) sees the same in-memory database
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Point the app's engine and sessionmaker at the test database
    original_engine = careersite.database.engine
    original_sessionmaker = careersite.database.AsyncSessionLocal

    careersite.database.engine = test_engine
    careersite.database.AsyncSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    session = async_session()

    try:
        yield session
    finally:
        try:
            await session.close()
        except Exception as e:
            print(f"Warning: Failed to close session: {e}")

        try:
            async with test_engine.begin() as conn:
                await conn.run_sync(Base.metadata.drop_all)
        except Exception as e:
            print(f"Warning: Failed to drop tables: {e}")

        try:
            await test_engine.dispose()
        except Exception as e:
            print(f"Warning: Failed to dispose engine: {e}")

        careersite.database.engine = original_engine
        careersite.database.AsyncSessionLocal = original_sessionmaker


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client bound to the app.

    The db fixture already swapped in the test engine, so every endpoint
    uses the test database.
    """
    transport = ASGITransport(app=fastapi_app)

    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True  # Follow 307 redirects for trailing slashes
    ) as client:
        yield client


@pytest.fixture
def owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest_asyncio.fixture
async def company(db: AsyncSession, owner_id: uuid.UUID) -> Company:
    """An unpublished company with no sections or jobs."""
    company = Company(
        owner_id=owner_id,
        name="Acme Robotics",
        slug="acme-robotics",
        tagline="Build the robots that build the future",
        primary_color="#112233",
        accent_color="#445566",
        published=False,
    )
    db.add(company)
    await db.commit()
    await db.refresh(company)
    return company


@pytest_asyncio.fixture
async def published_company(db: AsyncSession, company: Company) -> Company:
    company.published = True
    await db.commit()
    await db.refresh(company)
    return company


@pytest.fixture
def make_section(db: AsyncSession):
    """Factory inserting section rows directly, bypassing reconciliation."""
    async def _make(company_id, **fields) -> ContentBlock:
        values = {"type": "text", "title": "Section", "order_index": 0, "visible": True}
        values.update(fields)
        section = ContentBlock(company_id=company_id, **values)
        db.add(section)
        await db.commit()
        await db.refresh(section)
        return section
    return _make


@pytest.fixture
def make_job(db: AsyncSession):
    """Factory inserting job rows directly."""
    async def _make(company_id, **fields) -> Job:
        values = {"title": "Software Engineer", "is_active": True}
        values.update(fields)
        job = Job(company_id=company_id, **values)
        db.add(job)
        await db.commit()
        await db.refresh(job)
        return job
    return _make
