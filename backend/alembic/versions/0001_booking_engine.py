"""Create service catalog, branch capacities and bookings.

Revision ID: 0001
Revises:
Create Date: 2026-03-02
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

BOOKING_STATUSES = ("PENDING", "RESCHEDULED", "COMPLETED", "CANCELLED")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "services",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
    )

    op.create_table(
        "branch_services",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("branch_id", sa.Integer(), nullable=False),
        sa.Column(
            "service_id",
            sa.Integer(),
            sa.ForeignKey("services.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("capacity_per_day", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("branch_id", "service_id", name="uq_branch_service"),
        sa.CheckConstraint("capacity_per_day > 0", name="ck_branch_service_capacity"),
    )
    op.create_index(
        "ix_branch_services_branch_id", "branch_services", ["branch_id"]
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "service_id",
            sa.Integer(),
            sa.ForeignKey("services.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("car_id", sa.Integer(), nullable=False),
        sa.Column("branch_id", sa.Integer(), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                *BOOKING_STATUSES,
                name="booking_status",
                native_enum=False,
                length=16,
            ),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("comments", sa.String(length=1024)),
        *_timestamps(),
    )
    op.create_index("ix_bookings_car_id", "bookings", ["car_id"])
    op.create_index(
        "ix_booking_slot",
        "bookings",
        ["branch_id", "service_id", "booking_date", "status"],
    )
    op.create_index(
        "uq_booking_pending_car",
        "bookings",
        ["car_id"],
        unique=True,
        sqlite_where=sa.text("status = 'PENDING'"),
        postgresql_where=sa.text("status = 'PENDING'"),
    )


def downgrade() -> None:
    op.drop_index("uq_booking_pending_car", table_name="bookings")
    op.drop_index("ix_booking_slot", table_name="bookings")
    op.drop_index("ix_bookings_car_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_branch_services_branch_id", table_name="branch_services")
    op.drop_table("branch_services")
    op.drop_table("services")
