"""Initial schema — workers, companies, orders, daily tallies, admin sessions, settings.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "workers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("identity_key", sa.String(32), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("company", sa.String(200), nullable=False),
        sa.Column("cost_center", sa.String(200), nullable=True),
        sa.Column("tier", sa.String(10), nullable=False, server_default="NORMAL"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_workers_identity_key", "workers", ["identity_key"], unique=True)

    op.create_table(
        "companies",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("tax_id", sa.String(32), nullable=True),
        sa.Column("address", sa.String(300), nullable=True),
        sa.Column("contact_name", sa.String(200), nullable=True),
        sa.Column("contact_email", sa.String(200), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("logo_path", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.String(8), primary_key=True),
        sa.Column("worker_identity", sa.String(32), nullable=False),
        sa.Column("worker_name", sa.String(200), nullable=False),
        sa.Column("company", sa.String(200), nullable=False),
        sa.Column("fulfillment_mode", sa.String(10), nullable=False),
        sa.Column("meal_slot", sa.String(10), nullable=False, server_default="LUNCH"),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("date_str", sa.String(10), nullable=False),
        sa.Column("pickup_time", sa.String(5), nullable=True),
        sa.Column("pickup_name", sa.String(200), nullable=True),
        sa.Column("guest_names", sa.JSON, nullable=True),
        sa.Column("order_detail", sa.Text, nullable=True),
        sa.Column("signature", sa.Text, nullable=True),
        sa.Column("printed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_orders_worker_date", "orders", ["worker_identity", "date_str"])
    op.create_index("ix_orders_date_created", "orders", ["date_str", "created_at"])

    op.create_table(
        "daily_tallies",
        sa.Column("identity_key", sa.String(32), primary_key=True),
        sa.Column("date_str", sa.String(10), primary_key=True),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "admin_sessions",
        sa.Column("token", sa.String(64), primary_key=True),
        sa.Column("expires_at", sa.BigInteger, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_admin_sessions_expires_at", "admin_sessions", ["expires_at"])

    op.create_table(
        "settings",
        sa.Column("key", sa.String(50), primary_key=True),
        sa.Column("value", sa.Text, nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("settings")
    op.drop_index("ix_admin_sessions_expires_at", table_name="admin_sessions")
    op.drop_table("admin_sessions")
    op.drop_table("daily_tallies")
    op.drop_index("ix_orders_date_created", table_name="orders")
    op.drop_index("ix_orders_worker_date", table_name="orders")
    op.drop_table("orders")
    op.drop_table("companies")
    op.drop_index("ix_workers_identity_key", table_name="workers")
    op.drop_table("workers")
