"""
Failures raised by the hierarchy access layer.

Each error knows the HTTP status it maps to so the route layer can translate
it without a lookup table.
"""

from typing import Any, Dict


class HierarchyError(Exception):
    """
    Base class for expected failures of hierarchy operations.

    Attributes:
        status_code: HTTP status the failure is reported with
        message: Human-readable error description
    """

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {"error": self.message}


class NotFoundError(HierarchyError):
    """Raised when a target entity or one of its ancestors does not exist."""

    status_code = 404


class ConflictError(HierarchyError):
    """Raised when a name is already taken within its scope."""

    # Duplicate names have always been reported as 422 by this API.
    status_code = 422


class UnprocessableEntityError(HierarchyError):
    """Raised when a deployment artifact reference cannot be resolved."""

    status_code = 422


class ArtifactLookupError(Exception):
    """Raised when the artifact bucket cannot be listed."""
