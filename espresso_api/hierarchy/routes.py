"""
Espresso API Routes.

REST endpoints for companies, widgets and branches.
All endpoints are prefixed with /espresso.
"""

from typing import Any, Dict

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..deps import get_hierarchy_service
from ..errors import ArtifactLookupError, HierarchyError
from ..log import LogLabel
from .schemas import BranchCreate, BranchUpdate, CompanyCreate, WidgetCreate
from .services import HierarchyService

logger = structlog.get_logger()

router = APIRouter(prefix="/espresso")

_ERROR_BODY = {"type": "object", "properties": {"error": {"type": "string"}}}


def _error_doc(description: str) -> Dict[str, Any]:
    return {
        "description": description,
        "content": {"application/json": {"schema": _ERROR_BODY}},
    }


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def failure_response(exc: Exception, message: str) -> JSONResponse:
    """Translate a failure into the JSON error body of its status code.

    Expected hierarchy failures carry their own status and message; anything
    else is logged and reported as ``message`` with status 500.
    """
    if isinstance(exc, HierarchyError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    label = (
        LogLabel.GCP_BUCKET
        if isinstance(exc, ArtifactLookupError)
        else LogLabel.FIREBASE_OPERATIONS
    )
    logger.error(message, label=label.value, error=str(exc), exc_type=type(exc).__name__)
    return error_response(500, message)


# =============================================================================
# Create Endpoints
# =============================================================================


@router.post(
    "/company",
    tags=["Espresso - Create"],
    responses={
        422: _error_doc("Company name already exists"),
        500: _error_doc("Error creating company"),
    },
)
def create_company(
    company: CompanyCreate,
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """Create a new company."""
    try:
        company_id = service.create_company(company.company_name)
    except Exception as exc:
        return failure_response(exc, "Error creating company")
    return {"company_id": company_id}


@router.post(
    "/widget",
    tags=["Espresso - Create"],
    responses={
        404: _error_doc("Company not found"),
        422: _error_doc("Widget name already exists"),
        500: _error_doc("Error creating widget"),
    },
)
def create_widget(
    widget: WidgetCreate,
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """Create a new widget under a company."""
    try:
        widget_id = service.create_widget(widget.company_id, widget.widget_name)
    except Exception as exc:
        return failure_response(exc, "Error creating widget")
    return {"widget_id": widget_id}


@router.post(
    "/branch",
    tags=["Espresso - Create"],
    responses={
        404: _error_doc("Company or widget not found"),
        422: _error_doc("Branch name already exists or Deployment artifact not found"),
        500: _error_doc("Error creating branch"),
    },
)
def create_branch(
    branch: BranchCreate,
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """Create a new branch under a widget."""
    try:
        branch_id = service.create_branch(
            branch.company_id,
            branch.widget_id,
            branch.branch_name,
            branch.deployment_artifact_id,
        )
    except Exception as exc:
        return failure_response(exc, "Error creating branch")
    return {"branch_id": branch_id}


# =============================================================================
# Update Endpoints
# =============================================================================


@router.patch(
    "/branch/{branch_id}",
    tags=["Espresso - Update"],
    responses={
        404: _error_doc("Company, widget or branch not found"),
        422: _error_doc("Deployment artifact not found"),
        500: _error_doc("Error updating branch"),
    },
)
def update_branch(
    branch_id: str,
    update: BranchUpdate,
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """Point a branch at another deployment artifact."""
    try:
        service.update_branch(
            update.company_id,
            update.widget_id,
            branch_id,
            update.deployment_artifact_id,
        )
    except Exception as exc:
        return failure_response(exc, "Error updating branch")
    return {"message": "Branch updated successfully"}


# =============================================================================
# Read Endpoints
# =============================================================================


@router.get(
    "/companies",
    tags=["Espresso - Read"],
    responses={500: _error_doc("Error getting companies")},
)
def get_companies(
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """List every company with its widgets and branches."""
    try:
        companies = service.get_companies()
    except Exception as exc:
        return failure_response(exc, "Error getting companies")
    return {"companies": jsonable_encoder(companies)}


@router.get(
    "/branch/{branch_id}",
    tags=["Espresso - Read"],
    responses={
        404: _error_doc("Company, widget or branch not found"),
        500: _error_doc("Error getting branch"),
    },
)
def get_branch(
    branch_id: str,
    company_id: str = Query(..., description="Id of the company the branch belongs to"),
    widget_id: str = Query(..., description="Id of the widget the branch belongs to"),
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """Get branch details."""
    try:
        branch = service.get_branch(company_id, widget_id, branch_id)
    except Exception as exc:
        return failure_response(exc, "Error getting branch")
    return {"branch": jsonable_encoder(branch)}


@router.get(
    "/branch-id/{branch_name}",
    tags=["Espresso - Read"],
    responses={
        404: _error_doc("Company, widget or branch not found"),
        500: _error_doc("Error getting branch"),
    },
)
def get_branch_id(
    branch_name: str,
    company_id: str = Query(...),
    widget_id: str = Query(...),
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """Get the id of a branch by its name."""
    try:
        branch_id = service.get_branch_id_by_name(company_id, widget_id, branch_name)
    except Exception as exc:
        return failure_response(exc, "Error getting branch")
    return {"branch_id": branch_id}


@router.get(
    "/widget-id/{widget_name}",
    tags=["Espresso - Read"],
    responses={
        404: _error_doc("Company or widget not found"),
        500: _error_doc("Error getting widget"),
    },
)
def get_widget_id(
    widget_name: str,
    company_id: str = Query(...),
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """Get the id of a widget by its name."""
    try:
        widget_id = service.get_widget_id_by_name(company_id, widget_name)
    except Exception as exc:
        return failure_response(exc, "Error getting widget")
    return {"widget_id": widget_id}


@router.get(
    "/company-id/{company_name}",
    tags=["Espresso - Read"],
    responses={
        404: _error_doc("Company not found"),
        500: _error_doc("Error getting company"),
    },
)
def get_company_id(
    company_name: str,
    service: HierarchyService = Depends(get_hierarchy_service),
) -> Any:
    """Get the id of a company by its name."""
    try:
        company_id = service.get_company_id_by_name(company_name)
    except Exception as exc:
        return failure_response(exc, "Error getting company")
    return {"company_id": company_id}
