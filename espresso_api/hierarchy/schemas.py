"""
Request and response schemas for the company/widget/branch hierarchy.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Stored entities
# =============================================================================


class Branch(BaseModel):
    """A deployable line of a widget, pointing at one deployment artifact."""

    id: str = Field(..., description="Document id of the branch")
    branch_name: str = Field(..., description="Unique within the parent widget")
    deployment_artifact_id: str = Field(..., description="Id of the deployed artifact")
    created_at: Optional[datetime] = Field(None, description="Server creation time")
    updated_at: Optional[datetime] = Field(None, description="Last artifact change")


class Widget(BaseModel):
    """A widget of a company, owning its branches."""

    id: str
    widget_name: str = Field(..., description="Unique within the parent company")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    branches: List[Branch] = Field(default_factory=list)


class Company(BaseModel):
    """A company, the root of the hierarchy."""

    id: str
    company_name: str = Field(..., description="Unique across all companies")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    widgets: List[Widget] = Field(default_factory=list)


# =============================================================================
# Request bodies
# =============================================================================


class CompanyCreate(BaseModel):
    """Schema for creating a new Company."""

    model_config = ConfigDict(extra="ignore")

    company_name: str = Field(..., min_length=1, description="Company name")


class WidgetCreate(BaseModel):
    """Schema for creating a new Widget."""

    model_config = ConfigDict(extra="ignore")

    company_id: str = Field(..., description="Id of the owning company")
    widget_name: str = Field(..., min_length=1, description="Widget name")


class BranchCreate(BaseModel):
    """Schema for creating a new Branch."""

    model_config = ConfigDict(extra="ignore")

    company_id: str = Field(..., description="Id of the associated company")
    widget_id: str = Field(..., description="Id of the associated widget")
    branch_name: str = Field(..., min_length=1, description="Branch name")
    deployment_artifact_id: str = Field(..., description="Id of the deployment artifact")


class BranchUpdate(BaseModel):
    """Schema for pointing a Branch at another artifact."""

    model_config = ConfigDict(extra="ignore")

    company_id: str = Field(..., description="Id of the associated company")
    widget_id: str = Field(..., description="Id of the associated widget")
    deployment_artifact_id: str = Field(..., description="Id of the deployment artifact")
