"""Join-aggregate executor over the relational record store."""

from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobinsight.application.interfaces.record_store import (
    CustomerRecord,
    GroupRow,
    RecordStoreInterface,
)
from jobinsight.application.operations import (
    Dimension,
    Join,
    OperationDescriptor,
    Ordering,
    RootEntity,
)
from jobinsight.config.logging import get_logger
from jobinsight.domain.entities import (
    RATING_FIELDS,
    Customer,
    CustomerReview,
    Job,
    JobLocation,
    StatusEvent,
    TechnicianProfile,
)
from jobinsight.domain.exceptions.store_error import StoreError
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.database.models import (
    CustomerModel,
    CustomerReviewModel,
    JobLocationModel,
    JobModel,
    JobStatusHistoryModel,
    TechnicianProfileModel,
    job_technicians,
    review_technicians,
)

logger = get_logger(__name__)

_JOB_DIMENSIONS = {
    Dimension.STATUS: JobModel.status,
    Dimension.TYPE: JobModel.type,
    Dimension.PRIORITY: JobModel.priority,
    Dimension.PROVINCE: JobLocationModel.province,
    Dimension.DISTRICT: JobLocationModel.district,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, value: str):
    """Case-insensitive substring predicate."""
    return column.ilike(f"%{_escape_like(value)}%", escape="\\")


def rank_by_overall(groups: List[GroupRow]) -> List[GroupRow]:
    """Order technician groups by their rounded overall average, highest first.

    Groups without an overall average go last. The sort is stable, so equal
    displayed averages keep the order the store returned them in.
    """
    return sorted(
        groups,
        key=lambda g: (
            g.averages.get("overall") is None,
            -(g.averages.get("overall") or 0),
        ),
    )


class JoinAggregateExecutor(RecordStoreInterface):
    """Runs operation descriptors with SQLAlchemy.

    Every join is a left join: a job without location, technicians or a
    review is never dropped. One-to-many relations (technicians, status
    history) are attached with one batch query per page.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @contextmanager
    def _store_errors(self, op: OperationDescriptor) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                "Record store query failed",
                operation=op.name,
                root=op.root.value,
                error=str(e),
            )
            raise StoreError(op.name, str(e)) from e

    # Predicates

    def _job_conditions(self, job_filter: JobFilter) -> List[Any]:
        conditions = []

        # Time window first, then categorical predicates
        if job_filter.window is not None:
            conditions.append(JobModel.created_at >= job_filter.window.start)
            conditions.append(JobModel.created_at <= job_filter.window.end)

        if job_filter.job_id is not None:
            conditions.append(JobModel.id == job_filter.job_id)
        if job_filter.status:
            conditions.append(JobModel.status == job_filter.status)
        if job_filter.type:
            conditions.append(JobModel.type == job_filter.type)
        if job_filter.priority:
            conditions.append(JobModel.priority == job_filter.priority)
        if job_filter.province:
            conditions.append(JobLocationModel.province == job_filter.province)
        if job_filter.provinces:
            conditions.append(JobLocationModel.province.in_(job_filter.provinces))
        if job_filter.customer_id is not None:
            conditions.append(JobLocationModel.customer_id == job_filter.customer_id)

        if job_filter.team_leader is not None:
            name_matches = [
                _contains(
                    TechnicianProfileModel.first_name,
                    job_filter.team_leader.first_name,
                )
            ]
            if job_filter.team_leader.last_name:
                name_matches.append(
                    _contains(
                        TechnicianProfileModel.last_name,
                        job_filter.team_leader.last_name,
                    )
                )
            conditions.append(
                exists(
                    select(job_technicians.c.job_id)
                    .join(
                        TechnicianProfileModel,
                        TechnicianProfileModel.id == job_technicians.c.technician_id,
                    )
                    .where(
                        job_technicians.c.job_id == JobModel.id,
                        or_(*name_matches),
                    )
                )
            )

        if job_filter.technician_ids:
            conditions.append(
                exists(
                    select(job_technicians.c.job_id).where(
                        job_technicians.c.job_id == JobModel.id,
                        job_technicians.c.technician_id.in_(job_filter.technician_ids),
                    )
                )
            )

        return conditions

    def _review_conditions(self, job_filter: JobFilter) -> List[Any]:
        conditions = []
        if job_filter.window is not None:
            conditions.append(CustomerReviewModel.created_at >= job_filter.window.start)
            conditions.append(CustomerReviewModel.created_at <= job_filter.window.end)
        if job_filter.technician_ids:
            # Aliased so the subquery keeps its own FROM when the outer
            # statement already joins review_technicians
            reviewed_by = review_technicians.alias("reviewed_by")
            conditions.append(
                exists(
                    select(reviewed_by.c.review_id)
                    .where(
                        reviewed_by.c.review_id == CustomerReviewModel.id,
                        reviewed_by.c.technician_id.in_(job_filter.technician_ids),
                    )
                    .correlate(CustomerReviewModel)
                )
            )
        return conditions

    def _customer_conditions(self, job_filter: JobFilter) -> List[Any]:
        if not job_filter.search:
            return []
        return [
            or_(
                _contains(CustomerModel.name, job_filter.search),
                _contains(CustomerModel.phone, job_filter.search),
                _contains(CustomerModel.email, job_filter.search),
            )
        ]

    def _join_job_relations(self, stmt, op: OperationDescriptor):
        if op.needs_location():
            stmt = stmt.outerjoin(
                JobLocationModel, JobModel.job_location_id == JobLocationModel.id
            )
        if op.has_join(Join.CUSTOMER):
            stmt = stmt.outerjoin(
                CustomerModel, JobLocationModel.customer_id == CustomerModel.id
            )
        return stmt

    def _paginate(self, stmt, op: OperationDescriptor):
        if op.page is not None:
            return stmt.offset(op.page.offset).limit(op.page.limit)
        if op.limit is not None:
            return stmt.limit(op.limit)
        return stmt

    # Fetch operations

    async def fetch_jobs(self, op: OperationDescriptor) -> List[Job]:
        """Fetch job rows with the related entities the operation joins."""
        columns = [JobModel]
        with_location = op.needs_location()
        with_customer = op.has_join(Join.CUSTOMER)
        if with_location:
            columns.append(JobLocationModel)
        if with_customer:
            columns.append(CustomerModel)

        stmt = self._join_job_relations(select(*columns).select_from(JobModel), op)
        stmt = stmt.where(*self._job_conditions(op.filter)).order_by(
            JobModel.created_at.desc(), JobModel.id
        )
        stmt = self._paginate(stmt, op)

        with self._store_errors(op):
            result = await self.db.execute(stmt)
            rows = result.all()

            jobs = []
            for row in rows:
                location_model = row[1] if with_location else None
                customer_model = row[2] if with_customer else None
                jobs.append(
                    self._job_to_entity(row[0], location_model, customer_model)
                )

            job_ids = [job.id for job in jobs]
            if job_ids and op.has_join(Join.TECHNICIANS):
                technicians = await self._technicians_by_job(job_ids)
                for job in jobs:
                    job.technicians = technicians.get(job.id, [])
            if job_ids and op.has_join(Join.REVIEW):
                reviews = await self._reviews_by_job(job_ids)
                for job in jobs:
                    job.review = reviews.get(job.id)
            if job_ids and op.has_join(Join.STATUS_HISTORY):
                history = await self._status_history_by_job(job_ids)
                for job in jobs:
                    job.status_history = history.get(job.id, [])

        logger.debug("Fetched job rows", operation=op.name, count=len(jobs))
        return jobs

    async def fetch_reviews(self, op: OperationDescriptor) -> List[CustomerReview]:
        """Fetch reviews, newest first, with the reviewed job's number."""
        stmt = (
            select(CustomerReviewModel, JobModel.no)
            .select_from(CustomerReviewModel)
            .outerjoin(JobModel, JobModel.id == CustomerReviewModel.job_id)
            .where(*self._review_conditions(op.filter))
            .order_by(CustomerReviewModel.created_at.desc(), CustomerReviewModel.id)
        )
        stmt = self._paginate(stmt, op)

        with self._store_errors(op):
            result = await self.db.execute(stmt)
            reviews = []
            for row in result.all():
                review = self._review_to_entity(row[0])
                review.job_no = row[1]
                reviews.append(review)

            review_ids = [review.id for review in reviews]
            if review_ids and op.has_join(Join.TECHNICIANS):
                technicians = await self._technicians_by_review(review_ids)
                for review in reviews:
                    review.technicians = technicians.get(review.id, [])

        return reviews

    async def fetch_customers(self, op: OperationDescriptor) -> List[CustomerRecord]:
        """Fetch customers by name with their first location's name."""
        stmt = (
            select(CustomerModel)
            .where(*self._customer_conditions(op.filter))
            .order_by(CustomerModel.name.asc(), CustomerModel.id)
        )
        stmt = self._paginate(stmt, op)

        with self._store_errors(op):
            result = await self.db.execute(stmt)
            customers = [self._customer_to_entity(m) for m in result.scalars().all()]

            location_names: Dict[UUID, Optional[str]] = {}
            if customers:
                location_stmt = (
                    select(JobLocationModel.customer_id, JobLocationModel.name)
                    .where(
                        JobLocationModel.customer_id.in_([c.id for c in customers])
                    )
                    .order_by(JobLocationModel.created_at.asc(), JobLocationModel.id)
                )
                location_result = await self.db.execute(location_stmt)
                for customer_id, name in location_result.all():
                    location_names.setdefault(customer_id, name)

        return [
            CustomerRecord(customer=c, location_name=location_names.get(c.id))
            for c in customers
        ]

    async def fetch_technicians(
        self, op: OperationDescriptor
    ) -> List[TechnicianProfile]:
        """Fetch technician profiles ordered by name."""
        stmt = select(TechnicianProfileModel).order_by(
            TechnicianProfileModel.first_name.asc(),
            TechnicianProfileModel.last_name.asc(),
        )
        stmt = self._paginate(stmt, op)

        with self._store_errors(op):
            result = await self.db.execute(stmt)
            return [self._technician_to_entity(m) for m in result.scalars().all()]

    async def customer_exists(self, customer_id: UUID) -> bool:
        """Check whether a customer exists."""
        stmt = select(CustomerModel.id).where(CustomerModel.id == customer_id)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Customer lookup failed", error=str(e))
            raise StoreError("customer_lookup", str(e)) from e
        return result.scalar_one_or_none() is not None

    # Aggregate operations

    async def count(self, op: OperationDescriptor) -> int:
        """Count root rows with the same joins and predicates as the fetch."""
        if op.root == RootEntity.JOB:
            stmt = self._join_job_relations(
                select(func.count(JobModel.id)).select_from(JobModel), op
            ).where(*self._job_conditions(op.filter))
        elif op.root == RootEntity.REVIEW:
            stmt = select(func.count(CustomerReviewModel.id)).where(
                *self._review_conditions(op.filter)
            )
        elif op.root == RootEntity.CUSTOMER:
            stmt = select(func.count(CustomerModel.id)).where(
                *self._customer_conditions(op.filter)
            )
        else:
            stmt = select(func.count(TechnicianProfileModel.id))

        with self._store_errors(op):
            result = await self.db.execute(stmt)
            return result.scalar_one() or 0

    def _job_grouping_statement(self, op: OperationDescriptor):
        keys = [_JOB_DIMENSIONS[d] for d in op.grouping.dimensions]
        count = func.count(JobModel.id)
        stmt = self._join_job_relations(
            select(*keys, count).select_from(JobModel), op
        )
        # Count only; ties keep the store's grouping order
        stmt = (
            stmt.where(*self._job_conditions(op.filter))
            .group_by(*keys)
            .order_by(count.desc())
        )
        if op.grouping.top_n is not None:
            stmt = stmt.limit(op.grouping.top_n)
        return stmt

    async def group(self, op: OperationDescriptor) -> List[GroupRow]:
        """Run the operation's grouping, ordered as the descriptor asks."""
        if op.grouping is None:
            raise ValueError(f"Operation {op.name} has no grouping")

        if op.root == RootEntity.REVIEW:
            return await self._group_reviews_by_technician(op)

        stmt = self._job_grouping_statement(op)
        with self._store_errors(op):
            result = await self.db.execute(stmt)
            rows = result.all()

        width = len(op.grouping.dimensions)
        return [GroupRow(keys=tuple(row[:width]), count=row[width]) for row in rows]

    async def _group_reviews_by_technician(
        self, op: OperationDescriptor
    ) -> List[GroupRow]:
        averages = [
            func.avg(getattr(CustomerReviewModel, rating)) for rating in RATING_FIELDS
        ]
        stmt = (
            select(
                TechnicianProfileModel.id,
                TechnicianProfileModel.first_name,
                TechnicianProfileModel.last_name,
                *averages,
                func.count(CustomerReviewModel.id),
            )
            .select_from(CustomerReviewModel)
            .join(
                review_technicians,
                review_technicians.c.review_id == CustomerReviewModel.id,
            )
            .join(
                TechnicianProfileModel,
                TechnicianProfileModel.id == review_technicians.c.technician_id,
            )
            .where(*self._review_conditions(op.filter))
            .group_by(
                TechnicianProfileModel.id,
                TechnicianProfileModel.first_name,
                TechnicianProfileModel.last_name,
            )
        )

        with self._store_errors(op):
            result = await self.db.execute(stmt)
            rows = result.all()

        groups = []
        for row in rows:
            values = row[3 : 3 + len(RATING_FIELDS)]
            groups.append(
                GroupRow(
                    keys=(row[0], row[1], row[2]),
                    count=row[3 + len(RATING_FIELDS)],
                    averages={
                        rating: None if value is None else round(float(value), 1)
                        for rating, value in zip(RATING_FIELDS, values)
                    },
                )
            )

        if op.ordering == Ordering.OVERALL_DESC:
            groups = rank_by_overall(groups)
        if op.grouping.top_n is not None:
            groups = groups[: op.grouping.top_n]
        return groups

    # Batch lookups

    async def _technicians_by_job(
        self, job_ids: Sequence[UUID]
    ) -> Dict[UUID, List[TechnicianProfile]]:
        stmt = (
            select(job_technicians.c.job_id, TechnicianProfileModel)
            .join(
                TechnicianProfileModel,
                TechnicianProfileModel.id == job_technicians.c.technician_id,
            )
            .where(job_technicians.c.job_id.in_(job_ids))
            .order_by(job_technicians.c.job_id, job_technicians.c.sequence)
        )
        result = await self.db.execute(stmt)
        grouped: Dict[UUID, List[TechnicianProfile]] = defaultdict(list)
        for job_id, model in result.all():
            grouped[job_id].append(self._technician_to_entity(model))
        return grouped

    async def _technicians_by_review(
        self, review_ids: Sequence[UUID]
    ) -> Dict[UUID, List[TechnicianProfile]]:
        stmt = (
            select(review_technicians.c.review_id, TechnicianProfileModel)
            .join(
                TechnicianProfileModel,
                TechnicianProfileModel.id == review_technicians.c.technician_id,
            )
            .where(review_technicians.c.review_id.in_(review_ids))
            .order_by(
                review_technicians.c.review_id,
                TechnicianProfileModel.first_name,
                TechnicianProfileModel.last_name,
            )
        )
        result = await self.db.execute(stmt)
        grouped: Dict[UUID, List[TechnicianProfile]] = defaultdict(list)
        for review_id, model in result.all():
            grouped[review_id].append(self._technician_to_entity(model))
        return grouped

    async def _reviews_by_job(
        self, job_ids: Sequence[UUID]
    ) -> Dict[UUID, CustomerReview]:
        stmt = select(CustomerReviewModel).where(
            CustomerReviewModel.job_id.in_(job_ids)
        )
        result = await self.db.execute(stmt)
        return {
            model.job_id: self._review_to_entity(model)
            for model in result.scalars().all()
        }

    async def _status_history_by_job(
        self, job_ids: Sequence[UUID]
    ) -> Dict[UUID, List[StatusEvent]]:
        stmt = (
            select(JobStatusHistoryModel)
            .where(JobStatusHistoryModel.job_id.in_(job_ids))
            .order_by(JobStatusHistoryModel.created_at.asc())
        )
        result = await self.db.execute(stmt)
        grouped: Dict[UUID, List[StatusEvent]] = defaultdict(list)
        for model in result.scalars().all():
            grouped[model.job_id].append(
                StatusEvent(
                    status=model.status,
                    created_at=model.created_at,
                    created_by_name=model.created_by_name,
                )
            )
        return grouped

    # Model to entity mapping

    def _job_to_entity(
        self,
        model: JobModel,
        location_model: Optional[JobLocationModel],
        customer_model: Optional[CustomerModel],
    ) -> Job:
        location = None
        if location_model is not None:
            location = self._location_to_entity(location_model)
            if customer_model is not None:
                location.customer = self._customer_to_entity(customer_model)

        return Job(
            id=model.id,
            no=model.no,
            status=model.status,
            type=model.type,
            priority=model.priority,
            created_at=model.created_at,
            updated_at=model.updated_at,
            appointment_time=model.appointment_time,
            contact_first_name=model.contact_first_name,
            contact_last_name=model.contact_last_name,
            contact_phone=model.contact_phone,
            contact_email=model.contact_email,
            job_location_id=model.job_location_id,
            location=location,
        )

    def _location_to_entity(self, model: JobLocationModel) -> JobLocation:
        return JobLocation(
            id=model.id,
            name=model.name,
            address=model.address,
            sub_district=model.sub_district,
            district=model.district,
            province=model.province,
            postal_code=model.postal_code,
            contact_first_name=model.contact_first_name,
            contact_last_name=model.contact_last_name,
            contact_phone=model.contact_phone,
            customer_id=model.customer_id,
            coordinates=model.coordinates if model.coordinates is not None else [0, 0],
        )

    def _customer_to_entity(self, model: CustomerModel) -> Customer:
        return Customer(
            id=model.id,
            name=model.name,
            phone=model.phone,
            email=model.email,
            code=model.code,
            customer_type=model.customer_type,
            status=model.status,
        )

    def _technician_to_entity(self, model: TechnicianProfileModel) -> TechnicianProfile:
        return TechnicianProfile(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            code=model.code,
            position=model.position,
            status=model.status,
        )

    def _review_to_entity(self, model: CustomerReviewModel) -> CustomerReview:
        return CustomerReview(
            id=model.id,
            job_id=model.job_id,
            time=model.time,
            manner=model.manner,
            knowledge=model.knowledge,
            overall=model.overall,
            recommend=model.recommend,
            comment=model.comment,
            created_at=model.created_at,
        )
