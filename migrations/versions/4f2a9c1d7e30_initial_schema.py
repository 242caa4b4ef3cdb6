"""Initial schema

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code", sa.String(50), nullable=True),
        sa.Column("customer_type", sa.String(50), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("status", sa.String(50), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customers_code", "customers", ["code"])
    op.create_index("ix_customers_name", "customers", ["name"])
    op.create_index("ix_customers_created_at", "customers", ["created_at"])

    op.create_table(
        "job_locations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("status", sa.String(50), nullable=True),
        sa.Column("type", sa.String(50), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("sub_district", sa.String(100), nullable=True),
        sa.Column("district", sa.String(100), nullable=True),
        sa.Column("province", sa.String(100), nullable=True),
        sa.Column("postal_code", sa.String(10), nullable=True),
        sa.Column("contact_first_name", sa.String(100), nullable=True),
        sa.Column("contact_last_name", sa.String(100), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("customer_id", sa.Uuid(), nullable=True),
        sa.Column("coordinates", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"]),
    )
    op.create_index("ix_job_locations_district", "job_locations", ["district"])
    op.create_index("ix_job_locations_province", "job_locations", ["province"])
    op.create_index("ix_job_locations_customer_id", "job_locations", ["customer_id"])
    op.create_index("ix_job_locations_created_at", "job_locations", ["created_at"])

    op.create_table(
        "technician_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code", sa.String(50), nullable=True),
        sa.Column("type", sa.String(50), nullable=True),
        sa.Column("status", sa.String(50), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("position", sa.String(100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_technician_profiles_code", "technician_profiles", ["code"])
    op.create_index(
        "ix_technician_profiles_created_at", "technician_profiles", ["created_at"]
    )

    op.create_table(
        "jobs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("no", sa.String(50), nullable=False),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("type", sa.String(50), nullable=True),
        sa.Column("priority", sa.String(50), nullable=True),
        sa.Column("appointment_time", sa.DateTime(), nullable=True),
        sa.Column("contact_first_name", sa.String(100), nullable=True),
        sa.Column("contact_last_name", sa.String(100), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("job_location_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["job_location_id"], ["job_locations.id"]),
        sa.UniqueConstraint("no"),
    )
    op.create_index("ix_jobs_status", "jobs", ["status"])
    op.create_index("ix_jobs_type", "jobs", ["type"])
    op.create_index("ix_jobs_priority", "jobs", ["priority"])
    op.create_index("ix_jobs_job_location_id", "jobs", ["job_location_id"])
    op.create_index("ix_jobs_created_at", "jobs", ["created_at"])

    op.create_table(
        "job_technicians",
        sa.Column("job_id", sa.Uuid(), nullable=False),
        sa.Column("technician_id", sa.Uuid(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("job_id", "technician_id"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["technician_id"], ["technician_profiles.id"], ondelete="CASCADE"
        ),
    )

    op.create_table(
        "customer_reviews",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("job_id", sa.Uuid(), nullable=False),
        sa.Column("time", sa.Float(), nullable=True),
        sa.Column("manner", sa.Float(), nullable=True),
        sa.Column("knowledge", sa.Float(), nullable=True),
        sa.Column("overall", sa.Float(), nullable=True),
        sa.Column("recommend", sa.Float(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"]),
        sa.UniqueConstraint("job_id"),
    )
    op.create_index(
        "ix_customer_reviews_created_at", "customer_reviews", ["created_at"]
    )

    op.create_table(
        "review_technicians",
        sa.Column("review_id", sa.Uuid(), nullable=False),
        sa.Column("technician_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("review_id", "technician_id"),
        sa.ForeignKeyConstraint(
            ["review_id"], ["customer_reviews.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["technician_id"], ["technician_profiles.id"], ondelete="CASCADE"
        ),
    )

    op.create_table(
        "job_status_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("job_id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("created_by_name", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_job_status_history_job_id", "job_status_history", ["job_id"])
    op.create_index(
        "ix_job_status_history_created_at", "job_status_history", ["created_at"]
    )

    op.create_table(
        "metric_snapshots",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("metric_type", sa.String(20), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("schema_version", sa.Integer(), nullable=False),
        sa.Column("period_start", sa.DateTime(), nullable=False),
        sa.Column("period_end", sa.DateTime(), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "metric_type", "date", name="uq_metric_snapshots_type_date"
        ),
    )
    op.create_index(
        "ix_metric_snapshots_metric_type", "metric_snapshots", ["metric_type"]
    )
    op.create_index("ix_metric_snapshots_date", "metric_snapshots", ["date"])
    op.create_index(
        "ix_metric_snapshots_created_at", "metric_snapshots", ["created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("metric_snapshots")
    op.drop_table("job_status_history")
    op.drop_table("review_technicians")
    op.drop_table("customer_reviews")
    op.drop_table("job_technicians")
    op.drop_table("jobs")
    op.drop_table("technician_profiles")
    op.drop_table("job_locations")
    op.drop_table("customers")
