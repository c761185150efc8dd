"""
Tests for the public and preview careers page endpoints.
"""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_unpublished_and_unknown_slugs_look_the_same(client: AsyncClient, company):
    unpublished = await client.get("/api/careers/acme-robotics")
    unknown = await client.get("/api/careers/no-such-company")

    assert unpublished.status_code == unknown.status_code == 404
    assert unpublished.json() == unknown.json()


@pytest.mark.asyncio
async def test_public_page(client: AsyncClient, published_company, make_section, make_job):
    company_id = published_company.id
    await make_section(company_id, type="text", title="About", content="<p>Robots</p>", order_index=0)
    await make_section(company_id, type="cards", title="Values", layout='[{"title": "Ownership"}]', order_index=1)
    await make_section(company_id, type="text", title="Draft", visible=False, order_index=2)
    await make_section(company_id, type="carousel", title="Empty", layout="[]", order_index=3)
    await make_job(company_id, title="Engineer")
    await make_job(company_id, title="Closed", is_active=False)

    response = await client.get("/api/careers/acme-robotics")

    assert response.status_code == 200
    page = response.json()
    assert page["company"]["name"] == "Acme Robotics"
    assert page["theme"] == {"primary_color": "#112233", "accent_color": "#445566"}
    assert [s["kind"] for s in page["sections"]] == ["text", "cards"]
    assert page["sections"][1]["accent_color"] == "#112233"
    assert [j["title"] for j in page["jobs"]] == ["Engineer"]
    assert page["job_count"] == 1
    assert page["preview"] is False


@pytest.mark.asyncio
async def test_public_page_job_filters(client: AsyncClient, published_company, make_job):
    company_id = published_company.id
    await make_job(company_id, title="Backend Engineer", location="Remote", employment_type="Full-time")
    await make_job(company_id, title="Data Engineer", location="Berlin", employment_type="Full-time")
    await make_job(company_id, title="Designer", location="Remote", employment_type="Contract")

    response = await client.get(
        "/api/careers/acme-robotics",
        params={"q": "engineer", "location": "remote"},
    )
    contract = await client.get("/api/careers/acme-robotics", params={"employment_type": "Contract"})

    assert [j["title"] for j in response.json()["jobs"]] == ["Backend Engineer"]
    assert [j["title"] for j in contract.json()["jobs"]] == ["Designer"]


@pytest.mark.asyncio
async def test_public_page_survives_corrupt_layout(client: AsyncClient, published_company, make_section):
    await make_section(published_company.id, type="cards", title="Values", layout="{corrupt")
    await make_section(published_company.id, type="mystery", title="Legacy", order_index=1)

    response = await client.get("/api/careers/acme-robotics")

    assert response.status_code == 200
    sections = response.json()["sections"]
    assert sections[0]["cards"] == []
    assert sections[1]["kind"] == "text"


@pytest.mark.asyncio
async def test_preview_shows_unpublished_and_hidden(client: AsyncClient, company, make_section):
    await make_section(company.id, title="Draft", visible=False)

    response = await client.get("/api/careers/acme-robotics/preview")

    assert response.status_code == 200
    page = response.json()
    assert page["preview"] is True
    assert [s["title"] for s in page["sections"]] == ["Draft"]


@pytest.mark.asyncio
async def test_preview_unknown_slug(client: AsyncClient):
    response = await client.get("/api/careers/nobody/preview")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_culture_video_status(client: AsyncClient, published_company, db):
    published_company.culture_video_url = "https://vimeo.com/123"
    await db.commit()

    response = await client.get("/api/careers/acme-robotics")

    video = response.json()["culture_video"]
    assert video["status"] == "unplayable"
    assert video["source_url"] == "https://vimeo.com/123"
    assert video["embed_url"] is None
