"""
FastAPI dependencies.

The document store and artifact oracle are created once per application
and kept on ``app.state``; each request gets a service bound to them.
"""

from fastapi import Request

from .artifacts import ArtifactOracle
from .hierarchy.services import HierarchyService
from .store import DocumentStore


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_oracle(request: Request) -> ArtifactOracle:
    return request.app.state.oracle


def get_hierarchy_service(request: Request) -> HierarchyService:
    """Dependency to get the hierarchy access layer."""
    return HierarchyService(get_store(request), get_oracle(request))
