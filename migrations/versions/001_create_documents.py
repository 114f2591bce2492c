"""Create documents table

Revision ID: 001_create_documents
Revises:
Create Date: 2026-10-19

Backs the SQL document store: one row per document, addressed by its path.
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "001_create_documents"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "documents",
        sa.Column("path", sa.String(length=1024), primary_key=True),
        sa.Column("collection", sa.String(length=1024), nullable=False),
        sa.Column("doc_id", sa.String(length=128), nullable=False),
        sa.Column("data", sa.JSON, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_documents_collection_doc_id", "documents", ["collection", "doc_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_documents_collection_doc_id", table_name="documents")
    op.drop_table("documents")
