"""
Document store interface.

Documents live in collections and are addressed by slash-separated paths
that alternate collection and document segments, e.g.
``companies/{company_id}/widgets/{widget_id}``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class _ServerTimestamp:
    """Sentinel replaced with the store's current time on write."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class DocumentNotFound(Exception):
    """Raised when updating a document that does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No document at '{path}'")


def is_valid_segment(segment: Optional[str]) -> bool:
    """Whether ``segment`` can name a single collection or document."""
    return bool(segment) and "/" not in segment


@dataclass
class DocumentSnapshot:
    """A document read from the store."""

    id: str
    path: str
    data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


class DocumentStore(ABC):
    """
    Hierarchical document store.

    Implementations must be safe to share across requests for the lifetime
    of the application.
    """

    # Whether reads may be issued from several threads at once
    concurrent_reads: bool = True

    @abstractmethod
    def get(self, path: str) -> Optional[DocumentSnapshot]:
        """Read a document, or None if it does not exist."""

    def exists(self, path: str) -> bool:
        return self.get(path) is not None

    @abstractmethod
    def find(
        self,
        collection: str,
        field_name: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[DocumentSnapshot]:
        """Documents of ``collection`` whose ``field_name`` equals ``value``."""

    @abstractmethod
    def list(self, collection: str) -> List[DocumentSnapshot]:
        """Every document of ``collection``, ordered by document id."""

    @abstractmethod
    def create(self, collection: str, data: Dict[str, Any]) -> str:
        """Write a new document with a generated id inside a transaction.

        Returns:
            The generated document id
        """

    @abstractmethod
    def update(self, path: str, data: Dict[str, Any]) -> None:
        """Overwrite the given fields of an existing document.

        Raises:
            DocumentNotFound: If nothing exists at ``path``
        """

    def close(self) -> None:
        """Release any client resources."""
