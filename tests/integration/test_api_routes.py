"""API tests over the ASGI app with an in-memory database."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from jobinsight.api.app import create_app
from jobinsight.api.dependencies import get_clock, get_record_store
from jobinsight.application.interfaces.record_store import RecordStoreInterface
from jobinsight.config.database import get_db_session
from jobinsight.config.settings import settings
from jobinsight.domain.exceptions.store_error import StoreError


@pytest.fixture
def app(db_session, clock):
    application = create_app()

    async def override_db_session():
        yield db_session

    application.dependency_overrides[get_db_session] = override_db_session
    application.dependency_overrides[get_clock] = lambda: clock
    return application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as http_client:
        yield http_client


@pytest.fixture
def failing_store(app):
    store = AsyncMock(spec=RecordStoreInterface)
    error = StoreError("overview", "connection refused")
    for method in ("fetch_jobs", "fetch_reviews", "fetch_customers", "count", "group"):
        getattr(store, method).side_effect = error
    app.dependency_overrides[get_record_store] = lambda: store
    return store


@pytest.mark.integration
class TestJobRoutes:
    """Dashboard endpoints under /api/jobs."""

    @pytest.mark.asyncio
    async def test_overview_envelope_is_camel_case(self, client, factory):
        await factory.jobs(3, status="WORKING")
        await factory.job(status="COMPLETED")

        response = await client.get("/api/jobs/overview", params={"limit": "2"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["error"] is None
        assert body["source"] == "computed"
        assert body["data"]["metrics"]["totalJobs"] == 4
        assert body["data"]["metrics"]["closedJobs"] == 1
        assert body["data"]["pagination"] == {
            "total": 4,
            "page": 1,
            "limit": 2,
            "pages": 2,
        }
        row = body["data"]["jobs"][0]
        assert row["technicianNames"] == "N/A"
        assert row["createdAt"].endswith("Z")
        assert {"_id": "WORKING", "count": 3} in body["data"]["distributions"]["status"]
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_overview_status_filter_all_means_unfiltered(self, client, factory):
        await factory.job(status="WORKING")
        await factory.job(status="PENDING")

        everything = await client.get("/api/jobs/overview", params={"status": "All"})
        pending = await client.get("/api/jobs/overview", params={"status": "PENDING"})

        assert everything.json()["data"]["metrics"]["totalJobs"] == 2
        assert pending.json()["data"]["metrics"]["totalJobs"] == 1

    @pytest.mark.asyncio
    async def test_map_data_drops_unknown_coordinates(self, client, factory):
        await factory.job(location=await factory.location())
        await factory.job(location=await factory.location(coordinates=(0, 0)))

        response = await client.get("/api/jobs/map-data")

        points = response.json()["data"]
        assert len(points) == 1
        assert points[0]["lon"] == 100.53
        assert points[0]["location"]["coordinates"] == [100.53, 13.74]

    @pytest.mark.asyncio
    async def test_filter_options(self, client, factory):
        await factory.job(status="WORKING")

        response = await client.get("/api/jobs/filter-options")

        data = response.json()["data"]
        assert data["statuses"] == ["All", "WORKING"]
        assert data["teamLeaders"] == ["All"]

    @pytest.mark.asyncio
    async def test_store_failure_returns_empty_overview(self, client, failing_store):
        response = await client.get("/api/jobs/overview")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Failed to fetch job overview"
        assert body["source"] == "computed"
        assert body["data"]["jobs"] == []
        assert body["data"]["metrics"]["totalJobs"] == 0
        assert body["data"]["pagination"]["limit"] == 10

    @pytest.mark.asyncio
    async def test_store_failure_returns_empty_map(self, client, failing_store):
        response = await client.get("/api/jobs/map-data")

        assert response.status_code == 500
        assert response.json()["data"] == []


@pytest.mark.integration
class TestAnalyticsRoutes:
    """Endpoints under /api/analytics."""

    @pytest.mark.asyncio
    async def test_technician_jobs_by_ids(self, client, factory):
        somchai = await factory.technician("Somchai", "Jaidee")
        await factory.jobs(2, technicians=[somchai])
        await factory.job()

        response = await client.get(
            "/api/analytics/technician-jobs",
            params={"technicianIds": f"{somchai.id},not-a-uuid"},
        )

        summary = response.json()["data"]["summary"]
        assert summary["totalJobs"] == 2
        assert summary["statusCounts"] == {"WORKING": 2}

    @pytest.mark.asyncio
    async def test_technician_performance(self, client, factory):
        somchai = await factory.technician("Somchai", "Jaidee")
        job = await factory.job(technicians=[somchai])
        await factory.review(job, technicians=[somchai], overall=5, comment="Quick")

        response = await client.get("/api/analytics/technician-performance")

        data = response.json()["data"]
        assert data["performanceSummary"][0]["avgOverall"] == 5.0
        assert data["recentReviews"][0]["comment"] == "Quick"

    @pytest.mark.asyncio
    async def test_technician_performance_for_selected_technicians(
        self, client, factory
    ):
        somchai = await factory.technician("Somchai", "Jaidee")
        anan = await factory.technician("Anan", "Wong")
        for technician, overall in ((somchai, 5), (anan, 2)):
            job = await factory.job(technicians=[technician])
            await factory.review(job, technicians=[technician], overall=overall)

        response = await client.get(
            "/api/analytics/technician-performance",
            params={"technicianIds": str(somchai.id)},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert [s["technicianName"] for s in data["performanceSummary"]] == [
            "Somchai Jaidee"
        ]
        assert len(data["recentReviews"]) == 1

    @pytest.mark.asyncio
    async def test_geographic_store_failure(self, client, failing_store):
        response = await client.get("/api/analytics/geographic")

        assert response.status_code == 500
        assert response.json()["data"] == {
            "provinceData": [],
            "districtBreakdown": [],
            "statusByProvince": [],
        }


@pytest.mark.integration
class TestCustomerRoutes:
    """Endpoints under /api/customers."""

    @pytest.mark.asyncio
    async def test_list_uses_customer_page_size(self, client, factory):
        await factory.customer("Siam Tower")

        response = await client.get("/api/customers", params={"search": " siam "})

        body = response.json()
        assert body["data"]["pagination"]["limit"] == 20
        assert [c["name"] for c in body["data"]["customers"]] == ["Siam Tower"]

    @pytest.mark.asyncio
    async def test_invalid_customer_id(self, client):
        response = await client.get("/api/customers/not-a-uuid/jobs")

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["data"]["jobs"] == []

    @pytest.mark.asyncio
    async def test_unknown_customer(self, client):
        response = await client.get(f"/api/customers/{uuid4()}/jobs")

        assert response.status_code == 404
        assert response.json()["data"]["pagination"]["total"] == 0

    @pytest.mark.asyncio
    async def test_job_detail(self, client, factory):
        customer = await factory.customer()
        job = await factory.job(
            status="WORKING", location=await factory.location(customer=customer)
        )

        response = await client.get(f"/api/customers/{customer.id}/jobs/{job.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["jobDetails"]["jobNo"] == job.no
        assert [event["status"] for event in data["timeline"]] == ["CREATED"]

    @pytest.mark.asyncio
    async def test_job_detail_not_found(self, client, factory):
        customer = await factory.customer()

        response = await client.get(f"/api/customers/{customer.id}/jobs/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["data"] is None


@pytest.mark.integration
class TestHealthRoutes:
    """Probes and metrics."""

    @pytest.mark.asyncio
    async def test_liveness(self, client):
        response = await client.get("/api/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    @pytest.mark.asyncio
    async def test_prometheus_metrics(self, client):
        await client.get("/api/health/live")

        response = await client.get("/api/health/metrics")

        assert response.status_code == 200
        assert "api_requests_total" in response.text

    @pytest.mark.asyncio
    async def test_prometheus_metrics_disabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_METRICS", False)

        response = await client.get("/api/health/metrics")

        assert response.status_code == 404
