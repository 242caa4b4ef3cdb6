"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Iterable, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from jobinsight.application.interfaces.record_store import (
    MetricSnapshotRepositoryInterface,
    RecordStoreInterface,
)
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.infrastructure.database.models import (
    Base,
    CustomerModel,
    CustomerReviewModel,
    JobLocationModel,
    JobModel,
    JobStatusHistoryModel,
    TechnicianProfileModel,
)

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Wednesday, naive UTC
FIXED_NOW = datetime(2026, 10, 14, 12, 0, 0)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock():
    """Injected clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def utc():
    return timezone.utc


@pytest.fixture
def formatter() -> ResultFormatter:
    return ResultFormatter()


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


class DataFactory:
    """Builds and flushes rows for integration tests."""

    def __init__(self, session: AsyncSession, now: datetime):
        self.session = session
        self.now = now
        self._sequence = 0

    def _next(self) -> int:
        self._sequence += 1
        return self._sequence

    async def _save(self, model):
        self.session.add(model)
        await self.session.flush()
        return model

    async def customer(self, name: str = "Acme Facilities", **kwargs) -> CustomerModel:
        number = self._next()
        kwargs.setdefault("code", f"C{number:03d}")
        kwargs.setdefault("phone", f"02-000-{number:04d}")
        kwargs.setdefault("email", f"customer{number}@example.com")
        kwargs.setdefault("status", "ACTIVE")
        kwargs.setdefault("customer_type", "CORPORATE")
        return await self._save(CustomerModel(name=name, **kwargs))

    async def location(
        self,
        customer: Optional[CustomerModel] = None,
        province: Optional[str] = "Bangkok",
        district: Optional[str] = "Pathum Wan",
        coordinates=(100.53, 13.74),
        **kwargs,
    ) -> JobLocationModel:
        kwargs.setdefault("name", f"Site {self._next()}")
        return await self._save(
            JobLocationModel(
                customer=customer,
                province=province,
                district=district,
                coordinates=list(coordinates),
                **kwargs,
            )
        )

    async def technician(
        self, first_name: str = "Somchai", last_name: str = "Jaidee", **kwargs
    ) -> TechnicianProfileModel:
        kwargs.setdefault("code", f"T{self._next():03d}")
        kwargs.setdefault("position", "Technician")
        return await self._save(
            TechnicianProfileModel(first_name=first_name, last_name=last_name, **kwargs)
        )

    async def job(
        self,
        status: str = "WORKING",
        location: Optional[JobLocationModel] = None,
        technicians: Iterable[TechnicianProfileModel] = (),
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        **kwargs,
    ) -> JobModel:
        created_at = created_at or self.now - timedelta(days=1)
        kwargs.setdefault("no", f"JOB-{self._next():04d}")
        kwargs.setdefault("type", "REPAIR")
        kwargs.setdefault("priority", "MEDIUM")
        return await self._save(
            JobModel(
                status=status,
                location=location,
                technicians=list(technicians),
                created_at=created_at,
                updated_at=updated_at or created_at + timedelta(hours=2),
                **kwargs,
            )
        )

    async def review(
        self,
        job: JobModel,
        technicians: Iterable[TechnicianProfileModel] = (),
        created_at: Optional[datetime] = None,
        **ratings,
    ) -> CustomerReviewModel:
        return await self._save(
            CustomerReviewModel(
                job_id=job.id,
                technicians=list(technicians),
                created_at=created_at or job.created_at + timedelta(hours=3),
                **ratings,
            )
        )

    async def status_event(
        self,
        job: JobModel,
        status: str,
        created_at: datetime,
        created_by_name: Optional[str] = None,
    ) -> JobStatusHistoryModel:
        return await self._save(
            JobStatusHistoryModel(
                job_id=job.id,
                status=status,
                created_at=created_at,
                created_by_name=created_by_name,
            )
        )

    async def jobs(self, count: int, **kwargs) -> List[JobModel]:
        return [await self.job(**kwargs) for _ in range(count)]


@pytest_asyncio.fixture
async def factory(db_session) -> DataFactory:
    return DataFactory(db_session, FIXED_NOW)


@pytest.fixture
def mock_record_store():
    """Mock record store."""
    mock_store = AsyncMock(spec=RecordStoreInterface)

    mock_store.fetch_jobs = AsyncMock(return_value=[])
    mock_store.fetch_reviews = AsyncMock(return_value=[])
    mock_store.fetch_customers = AsyncMock(return_value=[])
    mock_store.fetch_technicians = AsyncMock(return_value=[])
    mock_store.customer_exists = AsyncMock(return_value=True)
    mock_store.count = AsyncMock(return_value=0)
    mock_store.group = AsyncMock(return_value=[])

    return mock_store


@pytest.fixture
def mock_snapshot_repository():
    """Mock metric snapshot repository."""
    mock_repo = AsyncMock(spec=MetricSnapshotRepositoryInterface)

    mock_repo.upsert = AsyncMock(side_effect=lambda snapshot: snapshot)
    mock_repo.get = AsyncMock(return_value=None)
    mock_repo.find_latest = AsyncMock(return_value=None)
    mock_repo.commit = AsyncMock()

    return mock_repo
