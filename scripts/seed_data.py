#!/usr/bin/env python3
"""
Seed database with a demo dataset for development.
"""

import asyncio
import logging
import random
from datetime import timedelta

from jobinsight.config.database import (
    close_database_connections,
    get_async_session_factory,
    get_engine,
)
from jobinsight.domain.value_objects.date_window import utcnow
from jobinsight.infrastructure.database.models import (
    Base,
    CustomerModel,
    CustomerReviewModel,
    JobLocationModel,
    JobModel,
    JobStatusHistoryModel,
    TechnicianProfileModel,
)
from sqlalchemy import func, select

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PROVINCES = {
    "Bangkok": (["Pathum Wan", "Bang Rak", "Chatuchak"], (100.52, 13.74)),
    "Chiang Mai": (["Mueang Chiang Mai", "San Sai"], (98.98, 18.79)),
    "Phuket": (["Mueang Phuket", "Kathu"], (98.39, 7.88)),
}
STATUSES = ["CREATED", "ASSIGNED", "WORKING", "COMPLETED", "CANCELLED"]
TYPES = ["INSTALLATION", "REPAIR", "MAINTENANCE"]
PRIORITIES = ["LOW", "MEDIUM", "HIGH"]
TECHNICIANS = [
    ("Somchai", "Jaidee", "Team Leader"),
    ("Anan", "Srisuk", "Technician"),
    ("Malee", "Chanthra", "Technician"),
    ("Preecha", "Wong", "Team Leader"),
]


async def seed_database(job_count: int = 200):
    """Seed database with demo customers, technicians, jobs and reviews."""
    random.seed(7)
    now = utcnow()

    async with get_engine().begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    async with get_async_session_factory()() as session:
        existing = await session.execute(select(func.count()).select_from(JobModel))
        if existing.scalar() > 0:
            logger.info("Database already has data, skipping seed.")
            return

        technicians = [
            TechnicianProfileModel(
                code=f"T{index:03d}", first_name=first, last_name=last, position=position
            )
            for index, (first, last, position) in enumerate(TECHNICIANS, start=1)
        ]
        session.add_all(technicians)

        locations = []
        for index, (province, (districts, (lon, lat))) in enumerate(PROVINCES.items()):
            customer = CustomerModel(
                code=f"C{index + 1:03d}",
                name=f"{province} Facilities Co.",
                phone=f"02-000-{index:04d}",
                email=f"ops{index}@example.com",
                customer_type="CORPORATE",
                status="ACTIVE",
            )
            session.add(customer)
            for district in districts:
                locations.append(
                    JobLocationModel(
                        name=f"{district} Branch",
                        province=province,
                        district=district,
                        address=f"1 Main Road, {district}",
                        customer=customer,
                        coordinates=[
                            round(lon + random.uniform(-0.05, 0.05), 5),
                            round(lat + random.uniform(-0.05, 0.05), 5),
                        ],
                    )
                )
        # A location that was never geocoded
        locations.append(
            JobLocationModel(name="Unmapped Site", province="Bangkok", coordinates=[0, 0])
        )
        session.add_all(locations)

        for index in range(job_count):
            created_at = now - timedelta(minutes=random.randint(0, 60 * 24 * 45))
            status = random.choice(STATUSES)
            job = JobModel(
                no=f"JOB-{index + 1:05d}",
                status=status,
                type=random.choice(TYPES),
                priority=random.choice(PRIORITIES),
                created_at=created_at,
                updated_at=created_at + timedelta(hours=random.randint(1, 48)),
                appointment_time=created_at + timedelta(days=1),
                location=random.choice(locations + [None]),
                contact_first_name="Walk-in",
                contact_last_name=f"Customer {index}",
                technicians=random.sample(technicians, k=random.randint(0, 2)),
            )
            job.status_history.append(
                JobStatusHistoryModel(
                    status="ASSIGNED",
                    created_at=created_at + timedelta(minutes=30),
                    created_by_name="Dispatcher",
                )
            )
            session.add(job)

            if status == "COMPLETED" and job.technicians:
                session.add(
                    CustomerReviewModel(
                        job=job,
                        created_at=job.updated_at,
                        time=random.randint(3, 5),
                        manner=random.randint(3, 5),
                        knowledge=random.randint(3, 5),
                        overall=random.randint(3, 5),
                        recommend=random.randint(3, 5),
                        comment="Good service",
                        technicians=list(job.technicians),
                    )
                )

        await session.commit()
        logger.info("Seeded %d jobs", job_count)

    await close_database_connections()


if __name__ == "__main__":
    asyncio.run(seed_database())
