"""
SQLAlchemy models for the SQL document store.
"""

from sqlalchemy import JSON, Column, DateTime, Index, String
from sqlalchemy.sql import func

from .base import Base


class DocumentModel(Base):
    """One document of the hierarchical store, keyed by its full path."""

    __tablename__ = "documents"

    path = Column(String(1024), primary_key=True)
    collection = Column(String(1024), nullable=False)
    doc_id = Column(String(128), nullable=False)
    data = Column(JSON, nullable=False, default=dict)

    # Row bookkeeping, independent of any timestamp fields inside ``data``
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_documents_collection_doc_id", "collection", "doc_id"),
    )
