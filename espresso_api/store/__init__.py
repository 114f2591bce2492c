"""
Hierarchical document stores.
"""

from ..config import Settings
from .base import (
    SERVER_TIMESTAMP,
    DocumentNotFound,
    DocumentSnapshot,
    DocumentStore,
    is_valid_segment,
)


def build_document_store(settings: Settings) -> DocumentStore:
    """Create the store selected by ``settings.document_store``."""
    if settings.document_store == "sql":
        from ..db.base import create_database_engine, init_database
        from .sql import SQLDocumentStore

        engine = create_database_engine(settings.database_url)
        init_database(engine)
        return SQLDocumentStore(engine)

    from .firestore import FirestoreDocumentStore

    return FirestoreDocumentStore.from_project(settings.firebase_project_id)


__all__ = [
    "SERVER_TIMESTAMP",
    "DocumentNotFound",
    "DocumentSnapshot",
    "DocumentStore",
    "build_document_store",
    "is_valid_segment",
]
