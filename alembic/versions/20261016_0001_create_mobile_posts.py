"""create mobile_posts table

Revision ID: 20261016_0001
Revises:
Create Date: 2026-10-16 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261016_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "mobile_posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("mobile_code", sa.String(length=32), nullable=True, comment="Upstream van code, e.g. MO1"),
        sa.Column("seq", sa.Integer(), nullable=True, comment="Stop sequence within the van's weekly route"),
        sa.Column("name_en", sa.String(length=255), nullable=True),
        sa.Column("name_tc", sa.String(length=255), nullable=True),
        sa.Column("name_sc", sa.String(length=255), nullable=True),
        sa.Column("district_en", sa.String(length=120), nullable=True),
        sa.Column("district_tc", sa.String(length=120), nullable=True),
        sa.Column("district_sc", sa.String(length=120), nullable=True),
        sa.Column("location_en", sa.String(length=500), nullable=True),
        sa.Column("location_tc", sa.String(length=500), nullable=True),
        sa.Column("location_sc", sa.String(length=500), nullable=True),
        sa.Column("address_en", sa.String(length=500), nullable=True),
        sa.Column("address_tc", sa.String(length=500), nullable=True),
        sa.Column("address_sc", sa.String(length=500), nullable=True),
        sa.Column("open_hour", sa.String(length=5), nullable=True, comment="HH:MM, 24-hour clock"),
        sa.Column("close_hour", sa.String(length=5), nullable=True, comment="HH:MM, 24-hour clock"),
        sa.Column("day_of_week_code", sa.SmallInteger(), nullable=True, comment="1 = Monday ... 7 = Sunday"),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("imported_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("mobile_code", "seq", name="uq_mobile_posts_mobile_code_seq"),
    )
    op.create_index("ix_mobile_posts_district_en", "mobile_posts", ["district_en"], unique=False)
    op.create_index("ix_mobile_posts_day_of_week_code", "mobile_posts", ["day_of_week_code"], unique=False)
    op.create_index("ix_mobile_posts_mobile_code", "mobile_posts", ["mobile_code"], unique=False)
    op.create_index("ix_mobile_posts_seq", "mobile_posts", ["seq"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_mobile_posts_seq", table_name="mobile_posts")
    op.drop_index("ix_mobile_posts_mobile_code", table_name="mobile_posts")
    op.drop_index("ix_mobile_posts_day_of_week_code", table_name="mobile_posts")
    op.drop_index("ix_mobile_posts_district_en", table_name="mobile_posts")
    op.drop_table("mobile_posts")
