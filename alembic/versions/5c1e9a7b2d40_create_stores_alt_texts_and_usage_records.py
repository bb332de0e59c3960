"""create stores, alt texts and usage records

Revision ID: 5c1e9a7b2d40
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e9a7b2d40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "stores",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("site_id", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("site_name", sa.String(255), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=False),
        sa.Column("plan", sa.String(20), nullable=False, server_default="FREE"),
        sa.Column("credits_remaining", sa.Integer(), nullable=False, server_default="100"),
        sa.Column("credits_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("alt_text_style", sa.String(20), nullable=False, server_default="balanced"),
        sa.Column("default_language", sa.String(10), nullable=False, server_default="en"),
        sa.Column("auto_process", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint(
            "credits_remaining >= 0", name="ck_stores_credits_remaining_non_negative"
        ),
    )

    op.create_table(
        "alt_texts",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "store_id", sa.Integer(), sa.ForeignKey("stores.id"), nullable=False, index=True
        ),
        sa.Column("product_id", sa.String(255), nullable=False),
        sa.Column("product_name", sa.String(500), nullable=True),
        sa.Column("image_id", sa.String(255), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("generated_alt_text", sa.Text(), nullable=True),
        sa.Column("final_alt_text", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="GENERATED"),
        sa.Column("applied_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint(
            "store_id", "product_id", "image_id", name="uq_alt_texts_store_product_image"
        ),
    )

    op.create_table(
        "usage_records",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "store_id", sa.Integer(), sa.ForeignKey("stores.id"), nullable=False, index=True
        ),
        sa.Column("action", sa.String(30), nullable=False),
        sa.Column("credits_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("product_id", sa.String(255), nullable=True),
        sa.Column("image_id", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("usage_records")
    op.drop_table("alt_texts")
    op.drop_table("stores")
