"""Tests for environment-driven settings."""

from espresso_api.config import Settings


def test_defaults(monkeypatch):
    for name in ("API_PORT", "API_VERSION", "FIREBASE_PROJECT_ID", "FIREBASE_STORAGE_BUCKET"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.api_port == 3001
    assert settings.api_version == "v2"
    assert settings.api_prefix == "/api/v2"
    assert settings.firebase_project_id == "headbits-tha"
    assert settings.firebase_storage_bucket == "headbits-tha.appspot.com"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("API_PORT", "8080")
    monkeypatch.setenv("API_VERSION", "v3")
    monkeypatch.setenv("FIREBASE_PROJECT_ID", "other-project")
    monkeypatch.setenv("DOCUMENT_STORE", "sql")

    settings = Settings(_env_file=None)

    assert settings.api_port == 8080
    assert settings.api_prefix == "/api/v3"
    assert settings.firebase_project_id == "other-project"
    assert settings.document_store == "sql"
