"""
Company → widget → branch hierarchy.
"""

from .schemas import (
    Branch,
    BranchCreate,
    BranchUpdate,
    Company,
    CompanyCreate,
    Widget,
    WidgetCreate,
)
from .services import HierarchyService

__all__ = [
    "Branch",
    "BranchCreate",
    "BranchUpdate",
    "Company",
    "CompanyCreate",
    "HierarchyService",
    "Widget",
    "WidgetCreate",
]
