"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-01 00:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.Text(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.UniqueConstraint("slug"),
    )
    op.create_table(
        "knowledge_items",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column(
            "tenant_id",
            sa.Text(),
            sa.ForeignKey("tenants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "category", sa.Text(), nullable=False, server_default=sa.text("'General'")
        ),
        sa.Column(
            "subcategory", sa.Text(), nullable=False, server_default=sa.text("''")
        ),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("keywords", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("image", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("video", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("views", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "created_at",
            sa.Text(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index(
        "ix_knowledge_items_tenant_id", "knowledge_items", ["tenant_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_knowledge_items_tenant_id", table_name="knowledge_items")
    op.drop_table("knowledge_items")
    op.drop_table("tenants")
