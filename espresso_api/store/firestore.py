"""
Google Cloud Firestore document store.
"""

from typing import Any, Dict, List, Optional

from google.api_core.exceptions import NotFound
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .base import SERVER_TIMESTAMP, DocumentNotFound, DocumentSnapshot, DocumentStore


def _resolve(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: firestore.SERVER_TIMESTAMP if value is SERVER_TIMESTAMP else value
        for key, value in data.items()
    }


def _snapshot(doc: Any) -> DocumentSnapshot:
    return DocumentSnapshot(id=doc.id, path=doc.reference.path, data=doc.to_dict() or {})


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by a Firestore client."""

    def __init__(self, client: firestore.Client):
        self.client = client

    @classmethod
    def from_project(cls, project_id: str) -> "FirestoreDocumentStore":
        """Connect with application default credentials."""
        return cls(firestore.Client(project=project_id))

    def get(self, path: str) -> Optional[DocumentSnapshot]:
        doc = self.client.document(path).get()
        if not doc.exists:
            return None
        return _snapshot(doc)

    def find(
        self,
        collection: str,
        field_name: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[DocumentSnapshot]:
        query = self.client.collection(collection).where(
            filter=FieldFilter(field_name, "==", value)
        )
        if limit is not None:
            query = query.limit(limit)
        return [_snapshot(doc) for doc in query.stream()]

    def list(self, collection: str) -> List[DocumentSnapshot]:
        return [_snapshot(doc) for doc in self.client.collection(collection).stream()]

    def create(self, collection: str, data: Dict[str, Any]) -> str:
        ref = self.client.collection(collection).document()

        @firestore.transactional
        def write(transaction: firestore.Transaction) -> None:
            transaction.set(ref, _resolve(data), merge=True)

        write(self.client.transaction())
        return ref.id

    def update(self, path: str, data: Dict[str, Any]) -> None:
        try:
            self.client.document(path).update(_resolve(data))
        except NotFound as e:
            raise DocumentNotFound(path) from e

    def close(self) -> None:
        self.client.close()
