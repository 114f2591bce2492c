"""
Espresso API

Companies, widgets and branches stored in a hierarchical document store,
with branch writes gated on deployment artifacts existing in a bucket.
"""

import importlib.metadata

__version__ = importlib.metadata.version("espresso-api")

from .errors import (
    ArtifactLookupError,
    ConflictError,
    HierarchyError,
    NotFoundError,
    UnprocessableEntityError,
)
from .hierarchy import Branch, Company, HierarchyService, Widget

__all__ = [
    "ArtifactLookupError",
    "Branch",
    "Company",
    "ConflictError",
    "HierarchyError",
    "HierarchyService",
    "NotFoundError",
    "UnprocessableEntityError",
    "Widget",
]
