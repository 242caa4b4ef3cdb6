"""Metric snapshot repository implementation."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobinsight.application.interfaces.record_store import (
    MetricSnapshotRepositoryInterface,
)
from jobinsight.config.logging import get_logger
from jobinsight.domain.entities.metric_snapshot import MetricSnapshot
from jobinsight.domain.exceptions.store_error import StoreError
from jobinsight.domain.value_objects.date_window import DateWindow, utcnow
from jobinsight.domain.value_objects.metric_type import MetricType
from jobinsight.infrastructure.database.models.metric_snapshot import (
    MetricSnapshotModel,
)

logger = get_logger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class MetricSnapshotRepository(MetricSnapshotRepositoryInterface):
    """Metrics cache backed by the ``metric_snapshots`` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert(self, snapshot: MetricSnapshot) -> MetricSnapshot:
        """Insert or replace the snapshot keyed by (metric_type, date)."""
        dialect = self.db.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise StoreError("snapshot_upsert", f"Unsupported dialect {dialect}")

        now = utcnow()
        values = {
            "metric_type": snapshot.metric_type.value,
            "date": snapshot.date,
            "schema_version": snapshot.schema_version,
            "period_start": snapshot.period.start,
            "period_end": snapshot.period.end,
            "payload": snapshot.payload,
            "updated_at": now,
        }
        stmt = insert(MetricSnapshotModel).values(created_at=now, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["metric_type", "date"],
            set_=values,
        )

        try:
            await self.db.execute(stmt)
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Snapshot upsert failed",
                metric_type=snapshot.metric_type.value,
                date=snapshot.date.isoformat(),
                error=str(e),
            )
            raise StoreError("snapshot_upsert", str(e)) from e

        logger.info(
            "Snapshot stored",
            metric_type=snapshot.metric_type.value,
            date=snapshot.date.isoformat(),
        )
        stored = await self.get(snapshot.metric_type, snapshot.date)
        return stored or snapshot

    async def get(
        self, metric_type: MetricType, date: datetime
    ) -> Optional[MetricSnapshot]:
        """Get the snapshot for an exact key."""
        # Upserts bypass the identity map, so reload rather than reuse
        stmt = (
            select(MetricSnapshotModel)
            .where(
                MetricSnapshotModel.metric_type == metric_type.value,
                MetricSnapshotModel.date == date,
            )
            .execution_options(populate_existing=True)
        )
        model = await self._scalar(stmt, "snapshot_get")
        return self._model_to_entity(model) if model else None

    async def find_latest(
        self, metric_type: MetricType, not_before: datetime
    ) -> Optional[MetricSnapshot]:
        """Get the most recent snapshot anchored at or after ``not_before``."""
        stmt = (
            select(MetricSnapshotModel)
            .where(
                MetricSnapshotModel.metric_type == metric_type.value,
                MetricSnapshotModel.date >= not_before,
            )
            .order_by(MetricSnapshotModel.date.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        model = await self._scalar(stmt, "snapshot_lookup")
        return self._model_to_entity(model) if model else None

    async def commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("snapshot_commit", str(e)) from e

    async def _scalar(self, stmt, operation: str) -> Optional[MetricSnapshotModel]:
        try:
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Snapshot query failed", operation=operation, error=str(e))
            raise StoreError(operation, str(e)) from e

    def _model_to_entity(self, model: MetricSnapshotModel) -> MetricSnapshot:
        return MetricSnapshot(
            metric_type=MetricType(model.metric_type),
            date=model.date,
            period=DateWindow(start=model.period_start, end=model.period_end),
            payload=model.payload,
            schema_version=model.schema_version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
