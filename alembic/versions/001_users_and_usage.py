"""Create users and user_usage tables.

Revision ID: 001_users_and_usage
Revises:
Create Date: 2026-10-19

users holds the Google identity, plan (user_type), extended profile and settings.
user_usage holds one counter row per user per calendar month.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_users_and_usage"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column(
            "user_type",
            sa.Enum("basic", "premium", "admin", name="usertype"),
            nullable=False,
            server_default="basic",
        ),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("postal_code", sa.String(), nullable=True),
        sa.Column("document", sa.String(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("settings", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "user_usage",
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("scripts_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("titles_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("images_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("audios_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("user_id", "month", "year"),
        sa.CheckConstraint("month BETWEEN 1 AND 12", name="ck_user_usage_month"),
    )


def downgrade() -> None:
    op.drop_table("user_usage")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    sa.Enum(name="usertype").drop(op.get_bind(), checkfirst=True)
