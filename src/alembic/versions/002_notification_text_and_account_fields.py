"""Unbounded notification message, teacher profile, preferences, soft delete

Revision ID: 002
Revises: 001
Create Date: 2026-10-25 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    # The owner message embeds the full review comment
    with op.batch_alter_table("notifications") as batch_op:
        batch_op.alter_column(
            "message",
            existing_type=sqlmodel.sql.sqltypes.AutoString(length=2000),
            type_=sa.Text(),
            existing_nullable=False,
        )

    op.add_column(
        "users",
        sa.Column("department", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
    )
    op.add_column(
        "users",
        sa.Column("specialization", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
    )
    op.add_column("users", sa.Column("notification_preferences", JSON_TYPE, nullable=True))
    # Null means not deleted
    op.add_column("users", sa.Column("deleted_at", sa.DateTime(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("users") as batch_op:
        batch_op.drop_column("deleted_at")
        batch_op.drop_column("notification_preferences")
        batch_op.drop_column("specialization")
        batch_op.drop_column("department")

    with op.batch_alter_table("notifications") as batch_op:
        batch_op.alter_column(
            "message",
            existing_type=sa.Text(),
            type_=sqlmodel.sql.sqltypes.AutoString(length=2000),
            existing_nullable=False,
        )
