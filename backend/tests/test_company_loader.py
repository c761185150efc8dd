"""
Tests for loading a company with its sections and jobs.

Validates:
- Unpublished and unknown companies are indistinguishable publicly
- Public loads only return visible sections and active jobs
- Preview loads include hidden sections and unpublished companies
- Job search filters
"""
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from careersite.errors import CompanyNotFoundError
from careersite.schemas.job import JobFilters
from careersite.services.company_loader import (
    list_active_jobs,
    load_company_by_id,
    load_company_for_preview,
    load_company_for_public,
)


@pytest.mark.asyncio
async def test_unpublished_and_unknown_raise_identical_errors(db: AsyncSession, company):
    with pytest.raises(CompanyNotFoundError) as unpublished:
        await load_company_for_public(db, "acme-robotics")
    with pytest.raises(CompanyNotFoundError) as unknown:
        await load_company_for_public(db, "does-not-exist")

    assert str(unpublished.value) == str(unknown.value)
    assert type(unpublished.value) is type(unknown.value)


@pytest.mark.asyncio
async def test_public_load_filters_hidden_sections(db: AsyncSession, published_company, make_section):
    company_id = published_company.id
    await make_section(company_id, title="Shown later", order_index=2)
    await make_section(company_id, title="Hidden", order_index=1, visible=False)
    await make_section(company_id, title="Shown first", order_index=0)

    aggregate = await load_company_for_public(db, "acme-robotics")

    assert [s.title for s in aggregate.sections] == ["Shown first", "Shown later"]
    assert aggregate.preview is False


@pytest.mark.asyncio
async def test_equal_order_index_falls_back_to_insertion_order(db: AsyncSession, published_company, make_section):
    company_id = published_company.id
    await make_section(company_id, title="Older", order_index=0)
    await make_section(company_id, title="Newer", order_index=0)

    aggregate = await load_company_for_public(db, "acme-robotics")

    assert [s.title for s in aggregate.sections] == ["Older", "Newer"]


@pytest.mark.asyncio
async def test_preview_includes_hidden_sections_of_unpublished_company(db: AsyncSession, company, make_section):
    await make_section(company.id, title="Hidden", visible=False)

    aggregate = await load_company_for_preview(db, "acme-robotics")

    assert aggregate.preview is True
    assert [s.title for s in aggregate.sections] == ["Hidden"]


@pytest.mark.asyncio
async def test_preview_of_unknown_slug(db: AsyncSession):
    with pytest.raises(CompanyNotFoundError):
        await load_company_for_preview(db, "nope")


@pytest.mark.asyncio
async def test_load_by_id(db: AsyncSession, company, make_section, make_job):
    await make_section(company.id, title="Hidden", visible=False)
    await make_job(company.id)

    everything = await load_company_by_id(db, company.id)
    visible = await load_company_by_id(db, company.id, visible_only=True)

    assert len(everything.sections) == 1
    assert visible.sections == []
    assert len(everything.jobs) == 1


@pytest.mark.asyncio
async def test_inactive_jobs_never_listed(db: AsyncSession, published_company, make_job):
    company_id = published_company.id
    await make_job(company_id, title="Open role")
    await make_job(company_id, title="Closed role", is_active=False)

    public = await load_company_for_public(db, "acme-robotics")
    preview = await load_company_for_preview(db, "acme-robotics")

    assert [j.title for j in public.jobs] == ["Open role"]
    assert [j.title for j in preview.jobs] == ["Open role"]


@pytest.mark.asyncio
async def test_jobs_newest_first(db: AsyncSession, company, make_job):
    now = datetime.utcnow()
    await make_job(company.id, title="Old", created_at=now - timedelta(days=3))
    await make_job(company.id, title="New", created_at=now)

    jobs = await list_active_jobs(db, company.id)

    assert [j.title for j in jobs] == ["New", "Old"]


@pytest_asyncio.fixture
async def job_board(company, make_job):
    company_id = company.id
    await make_job(company_id, title="Backend Engineer", location="Remote", department="Engineering",
                   employment_type="Full-time")
    await make_job(company_id, title="Data Engineer", location="Berlin", department="Data",
                   employment_type="Contract")
    await make_job(company_id, title="Product Designer", location="Remote - EU", department="Design",
                   employment_type="Full-time")
    await make_job(company_id, title="Recruiter", location="London", department="People Engineering",
                   employment_type="Part-time")
    return company_id


@pytest.mark.asyncio
async def test_query_and_location_filter(db: AsyncSession, job_board):
    jobs = await list_active_jobs(db, job_board, JobFilters(q="engineer", location="Remote"))

    assert [j.title for j in jobs] == ["Backend Engineer"]


@pytest.mark.asyncio
async def test_query_matches_department_too(db: AsyncSession, job_board):
    jobs = await list_active_jobs(db, job_board, JobFilters(q="ENGINEER"))

    assert sorted(j.title for j in jobs) == ["Backend Engineer", "Data Engineer", "Recruiter"]


@pytest.mark.asyncio
async def test_employment_type_is_exact(db: AsyncSession, job_board):
    full_time = await list_active_jobs(db, job_board, JobFilters(employment_type="Full-time"))
    partial = await list_active_jobs(db, job_board, JobFilters(employment_type="Full"))

    assert sorted(j.title for j in full_time) == ["Backend Engineer", "Product Designer"]
    assert partial == []


@pytest.mark.asyncio
async def test_blank_filters_are_ignored(db: AsyncSession, job_board):
    jobs = await list_active_jobs(db, job_board, JobFilters(q="  ", location="", department=None))

    assert len(jobs) == 4


@pytest.mark.asyncio
async def test_wildcards_in_query_are_literal(db: AsyncSession, job_board):
    jobs = await list_active_jobs(db, job_board, JobFilters(q="%"))

    assert jobs == []
