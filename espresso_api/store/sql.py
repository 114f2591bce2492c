"""
SQLAlchemy-backed document store.

Each document is one row of the ``documents`` table with its fields kept in
a JSON column. Used for local development and tests; production runs
against Firestore.
"""

import secrets
import string
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import Engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ..db.models import DocumentModel
from .base import (
    SERVER_TIMESTAMP,
    DocumentNotFound,
    DocumentSnapshot,
    DocumentStore,
)

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 20


def generate_document_id() -> str:
    """Generate a 20 character alphanumeric id, the same shape Firestore uses."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def _resolve(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    """Replace timestamp sentinels and make datetimes JSON-safe."""
    resolved = {}
    for key, value in data.items():
        if value is SERVER_TIMESTAMP:
            value = now
        if isinstance(value, datetime):
            value = value.isoformat()
        resolved[key] = value
    return resolved


def _snapshot(row: DocumentModel) -> DocumentSnapshot:
    return DocumentSnapshot(id=row.doc_id, path=row.path, data=dict(row.data or {}))


class SQLDocumentStore(DocumentStore):
    """Document store over a single SQL table."""

    def __init__(self, engine: Engine):
        self.engine = engine
        # An in-memory database is one shared connection
        self.concurrent_reads = not isinstance(engine.pool, StaticPool)
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
        )

    def get(self, path: str) -> Optional[DocumentSnapshot]:
        with self._session_factory() as session:
            row = session.get(DocumentModel, path)
            return _snapshot(row) if row else None

    def find(
        self,
        collection: str,
        field_name: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[DocumentSnapshot]:
        query = select(DocumentModel).where(DocumentModel.collection == collection)

        if isinstance(value, str):
            query = query.where(DocumentModel.data[field_name].as_string() == value)
            if limit is not None:
                query = query.limit(limit)
            with self._session_factory() as session:
                rows = session.scalars(query.order_by(DocumentModel.doc_id)).all()
            return [_snapshot(row) for row in rows]

        # Non-string equality is compared after loading the collection
        matches = [
            snapshot
            for snapshot in self.list(collection)
            if snapshot.data.get(field_name) == value
        ]
        return matches[:limit] if limit is not None else matches

    def list(self, collection: str) -> List[DocumentSnapshot]:
        query = (
            select(DocumentModel)
            .where(DocumentModel.collection == collection)
            .order_by(DocumentModel.doc_id)
        )
        with self._session_factory() as session:
            return [_snapshot(row) for row in session.scalars(query).all()]

    def create(self, collection: str, data: Dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        doc_id = generate_document_id()
        path = f"{collection}/{doc_id}"

        with self._session_factory.begin() as session:
            session.add(
                DocumentModel(
                    path=path,
                    collection=collection,
                    doc_id=doc_id,
                    data=_resolve(data, now),
                    created_at=now,
                    updated_at=now,
                )
            )

        return doc_id

    def update(self, path: str, data: Dict[str, Any]) -> None:
        now = datetime.now(timezone.utc)
        with self._session_factory.begin() as session:
            row = session.get(DocumentModel, path)
            if row is None:
                raise DocumentNotFound(path)
            # Reassign so the JSON column is flagged dirty
            row.data = {**(row.data or {}), **_resolve(data, now)}
            row.updated_at = now

    def close(self) -> None:
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"SQLDocumentStore(url={self.engine.url!r})"
