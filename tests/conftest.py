"""Test configuration and fixtures."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from espresso_api.api import create_app
from espresso_api.artifacts import FixtureArtifactOracle
from espresso_api.config import Settings
from espresso_api.db.base import create_database_engine, init_database
from espresso_api.hierarchy.services import HierarchyService
from espresso_api.store.sql import SQLDocumentStore


@pytest.fixture
def store() -> Generator[SQLDocumentStore, None, None]:
    """Create a fresh in-memory document store for each test."""
    engine = create_database_engine("sqlite:///:memory:")
    init_database(engine)
    store = SQLDocumentStore(engine)
    yield store
    store.close()


@pytest.fixture
def file_store(tmp_path) -> Generator[SQLDocumentStore, None, None]:
    """Create a document store over an SQLite file in a temporary directory."""
    engine = create_database_engine(f"sqlite:///{tmp_path / 'espresso.db'}")
    init_database(engine)
    store = SQLDocumentStore(engine)
    yield store
    store.close()


@pytest.fixture
def oracle() -> FixtureArtifactOracle:
    return FixtureArtifactOracle("test-bucket")


@pytest.fixture
def service(store, oracle) -> HierarchyService:
    return HierarchyService(store, oracle)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_version="v2", document_store="sql", artifact_oracle="fixture")


@pytest.fixture
def client(settings, store, oracle) -> Generator[TestClient, None, None]:
    """API client wired to the in-memory store."""
    app = create_app(settings=settings, store=store, oracle=oracle)
    with TestClient(app) as test_client:
        yield test_client
