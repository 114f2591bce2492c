"""
Hierarchy access layer.

Companies own widgets and widgets own branches; each level is a collection
nested under its parent document:

    companies/{company_id}/widgets/{widget_id}/branches/{branch_id}

Names are unique within their parent collection. Uniqueness is checked by
querying before the write, so two concurrent creates with the same name can
both pass the check and both commit. The transaction around each create
only makes the single write atomic.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

import structlog

from ..artifacts import ArtifactOracle
from ..errors import ConflictError, NotFoundError, UnprocessableEntityError
from ..log import LogLabel
from ..store import SERVER_TIMESTAMP, DocumentSnapshot, DocumentStore, is_valid_segment
from .schemas import Branch, Company, Widget

logger = structlog.get_logger()

T = TypeVar("T")
R = TypeVar("R")

# Upper bound on reads issued at once by one tree fetch level
MAX_FANOUT = 8

COMPANIES = "companies"
WIDGETS = "widgets"
BRANCHES = "branches"


def company_path(company_id: str) -> str:
    return f"{COMPANIES}/{company_id}"


def widget_path(company_id: str, widget_id: str) -> str:
    return f"{company_path(company_id)}/{WIDGETS}/{widget_id}"


def branch_path(company_id: str, widget_id: str, branch_id: str) -> str:
    return f"{widget_path(company_id, widget_id)}/{BRANCHES}/{branch_id}"


def _company(snapshot: DocumentSnapshot, widgets: List[Widget]) -> Company:
    return Company(id=snapshot.id, widgets=widgets, **snapshot.data)


def _widget(snapshot: DocumentSnapshot, branches: List[Branch]) -> Widget:
    return Widget(id=snapshot.id, branches=branches, **snapshot.data)


def _branch(snapshot: DocumentSnapshot) -> Branch:
    return Branch(id=snapshot.id, **snapshot.data)


class HierarchyService:
    """Create, read and update operations over companies, widgets and branches."""

    def __init__(self, store: DocumentStore, oracle: ArtifactOracle):
        self.store = store
        self.oracle = oracle

    # -------------------------------------------------------------------------
    # Existence checks
    # -------------------------------------------------------------------------

    def _require_company(self, company_id: str) -> DocumentSnapshot:
        snapshot = None
        if is_valid_segment(company_id):
            snapshot = self.store.get(company_path(company_id))
        if snapshot is None:
            raise NotFoundError("Company not found")
        return snapshot

    def _require_widget(self, company_id: str, widget_id: str) -> DocumentSnapshot:
        self._require_company(company_id)
        snapshot = None
        if is_valid_segment(widget_id):
            snapshot = self.store.get(widget_path(company_id, widget_id))
        if snapshot is None:
            raise NotFoundError("Widget not found")
        return snapshot

    def _require_branch(
        self, company_id: str, widget_id: str, branch_id: str
    ) -> DocumentSnapshot:
        self._require_widget(company_id, widget_id)
        snapshot = None
        if is_valid_segment(branch_id):
            snapshot = self.store.get(branch_path(company_id, widget_id, branch_id))
        if snapshot is None:
            raise NotFoundError("Branch not found")
        return snapshot

    def _require_artifact(self, deployment_artifact_id: str) -> None:
        if not self.oracle.exists(deployment_artifact_id):
            raise UnprocessableEntityError("Deployment artifact not found")

    def _name_taken(self, collection: str, field_name: str, name: str) -> bool:
        return bool(self.store.find(collection, field_name, name, limit=1))

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_company(self, company_name: str) -> str:
        """Create a company and return its id.

        Raises:
            ConflictError: If a company with the same name exists
        """
        if self._name_taken(COMPANIES, "company_name", company_name):
            raise ConflictError("Company name already exists")

        company_id = self.store.create(
            COMPANIES,
            {
                "company_name": company_name,
                "created_at": SERVER_TIMESTAMP,
                "updated_at": None,
            },
        )
        logger.info(
            "company_created",
            label=LogLabel.FIREBASE_OPERATIONS.value,
            company_id=company_id,
        )
        return company_id

    def create_widget(self, company_id: str, widget_name: str) -> str:
        """Create a widget under an existing company and return its id.

        Raises:
            NotFoundError: If the company does not exist
            ConflictError: If the company already has a widget with that name
        """
        self._require_company(company_id)

        widgets = f"{company_path(company_id)}/{WIDGETS}"
        if self._name_taken(widgets, "widget_name", widget_name):
            raise ConflictError("Widget name already exists")

        widget_id = self.store.create(
            widgets,
            {
                "widget_name": widget_name,
                "created_at": SERVER_TIMESTAMP,
                "updated_at": None,
            },
        )
        logger.info(
            "widget_created",
            label=LogLabel.FIREBASE_OPERATIONS.value,
            company_id=company_id,
            widget_id=widget_id,
        )
        return widget_id

    def create_branch(
        self,
        company_id: str,
        widget_id: str,
        branch_name: str,
        deployment_artifact_id: str,
    ) -> str:
        """Create a branch under an existing widget and return its id.

        The artifact is checked before any ancestor, so an unknown artifact
        is reported even when the company or widget is also missing.

        Raises:
            UnprocessableEntityError: If the artifact is unknown
            NotFoundError: If the company or the widget does not exist
            ConflictError: If the widget already has a branch with that name
        """
        self._require_artifact(deployment_artifact_id)
        self._require_widget(company_id, widget_id)

        branches = f"{widget_path(company_id, widget_id)}/{BRANCHES}"
        if self._name_taken(branches, "branch_name", branch_name):
            raise ConflictError("Branch name already exists")

        branch_id = self.store.create(
            branches,
            {
                "branch_name": branch_name,
                "deployment_artifact_id": deployment_artifact_id,
                "created_at": SERVER_TIMESTAMP,
                "updated_at": None,
            },
        )
        logger.info(
            "branch_created",
            label=LogLabel.FIREBASE_OPERATIONS.value,
            company_id=company_id,
            widget_id=widget_id,
            branch_id=branch_id,
            deployment_artifact_id=deployment_artifact_id,
        )
        return branch_id

    def update_branch(
        self,
        company_id: str,
        widget_id: str,
        branch_id: str,
        deployment_artifact_id: str,
    ) -> None:
        """Point a branch at another artifact and refresh ``updated_at``.

        Raises:
            UnprocessableEntityError: If the artifact is unknown
            NotFoundError: If the company, widget or branch does not exist
        """
        self._require_artifact(deployment_artifact_id)
        self._require_branch(company_id, widget_id, branch_id)

        self.store.update(
            branch_path(company_id, widget_id, branch_id),
            {
                "deployment_artifact_id": deployment_artifact_id,
                "updated_at": SERVER_TIMESTAMP,
            },
        )
        logger.info(
            "branch_updated",
            label=LogLabel.FIREBASE_OPERATIONS.value,
            company_id=company_id,
            widget_id=widget_id,
            branch_id=branch_id,
            deployment_artifact_id=deployment_artifact_id,
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _fan_out(self, fn: Callable[[T], R], items: Sequence[T]) -> List[R]:
        """Apply ``fn`` to each item, in parallel when the store allows it."""
        if not self.store.concurrent_reads or len(items) < 2:
            return [fn(item) for item in items]
        with ThreadPoolExecutor(max_workers=min(len(items), MAX_FANOUT)) as pool:
            return list(pool.map(fn, items))

    def _load_widget(self, widget: DocumentSnapshot) -> Widget:
        branches = self.store.list(f"{widget.path}/{BRANCHES}")
        return _widget(widget, [_branch(branch) for branch in branches])

    def _load_company(self, company: DocumentSnapshot) -> Company:
        widgets = self.store.list(f"{company.path}/{WIDGETS}")
        return _company(company, self._fan_out(self._load_widget, widgets))

    def get_companies(self) -> List[Company]:
        """Every company with its widgets and their branches.

        Reads every document of the hierarchy on each call. Companies are
        loaded in parallel, and so are the widgets of each company; the
        result keeps the store's ordering.
        """
        return self._fan_out(self._load_company, self.store.list(COMPANIES))

    def get_branch(self, company_id: str, widget_id: str, branch_id: str) -> Branch:
        return _branch(self._require_branch(company_id, widget_id, branch_id))

    def get_branch_id_by_name(
        self, company_id: str, widget_id: str, branch_name: str
    ) -> str:
        self._require_widget(company_id, widget_id)
        matches = self.store.find(
            f"{widget_path(company_id, widget_id)}/{BRANCHES}",
            "branch_name",
            branch_name,
            limit=1,
        )
        if not matches:
            raise NotFoundError("Branch not found")
        return matches[0].id

    def get_widget_id_by_name(self, company_id: str, widget_name: str) -> str:
        self._require_company(company_id)
        matches = self.store.find(
            f"{company_path(company_id)}/{WIDGETS}", "widget_name", widget_name, limit=1
        )
        if not matches:
            raise NotFoundError("Widget not found")
        return matches[0].id

    def get_company_id_by_name(self, company_name: str) -> str:
        matches = self.store.find(COMPANIES, "company_name", company_name, limit=1)
        if not matches:
            raise NotFoundError("Company not found")
        return matches[0].id
