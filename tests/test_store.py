"""Tests for the SQL document store."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest
from sqlalchemy import make_url

from espresso_api.db.base import create_database_engine, is_memory_database
from espresso_api.store import SERVER_TIMESTAMP, DocumentNotFound, is_valid_segment
from espresso_api.store.sql import generate_document_id


class TestPaths:
    @pytest.mark.parametrize("segment", ["", "a/b", None])
    def test_invalid_segments(self, segment):
        assert is_valid_segment(segment) is False

    def test_valid_segment(self):
        assert is_valid_segment("abc123") is True

    def test_generated_ids_look_like_firestore_ids(self):
        doc_id = generate_document_id()
        assert len(doc_id) == 20
        assert doc_id.isalnum()
        assert generate_document_id() != doc_id


class TestSQLDocumentStore:
    def test_create_and_get(self, store):
        doc_id = store.create("companies", {"company_name": "Acme", "updated_at": None})

        snapshot = store.get(f"companies/{doc_id}")
        assert snapshot is not None
        assert snapshot.id == doc_id
        assert snapshot.path == f"companies/{doc_id}"
        assert snapshot.data == {"company_name": "Acme", "updated_at": None}

    def test_server_timestamp_is_resolved(self, store):
        doc_id = store.create("companies", {"created_at": SERVER_TIMESTAMP})

        created_at = store.get(f"companies/{doc_id}").get("created_at")
        assert isinstance(created_at, str)
        assert datetime.fromisoformat(created_at).tzinfo is not None

    def test_get_missing_returns_none(self, store):
        assert store.get("companies/missing") is None
        assert store.exists("companies/missing") is False

    def test_find_is_scoped_to_collection(self, store):
        first = store.create("companies/a/widgets", {"widget_name": "Widget A"})
        store.create("companies/b/widgets", {"widget_name": "Widget A"})
        store.create("companies/a/widgets", {"widget_name": "Widget B"})

        matches = store.find("companies/a/widgets", "widget_name", "Widget A")
        assert [m.id for m in matches] == [first]

    def test_find_does_not_descend_into_subcollections(self, store):
        company_id = store.create("companies", {"company_name": "Acme"})
        store.create(f"companies/{company_id}/widgets", {"company_name": "Acme"})

        assert len(store.find("companies", "company_name", "Acme")) == 1

    def test_find_with_limit(self, store):
        for _ in range(3):
            store.create("things", {"name": "same"})

        assert len(store.find("things", "name", "same")) == 3
        assert len(store.find("things", "name", "same", limit=1)) == 1

    def test_find_non_string_value(self, store):
        store.create("things", {"size": 3})
        store.create("things", {"size": 4})

        matches = store.find("things", "size", 3)
        assert len(matches) == 1
        assert matches[0].get("size") == 3

    def test_list_is_ordered_by_id(self, store):
        ids = [store.create("things", {"n": n}) for n in range(5)]

        assert [s.id for s in store.list("things")] == sorted(ids)
        assert store.list("other") == []

    def test_update_merges_fields(self, store):
        doc_id = store.create("things", {"a": 1, "b": 2})

        store.update(f"things/{doc_id}", {"b": 3, "changed_at": SERVER_TIMESTAMP})

        data = store.get(f"things/{doc_id}").data
        assert data["a"] == 1
        assert data["b"] == 3
        assert isinstance(data["changed_at"], str)

    def test_update_missing_raises(self, store):
        with pytest.raises(DocumentNotFound) as exc_info:
            store.update("things/missing", {"a": 1})
        assert exc_info.value.path == "things/missing"

    def test_in_memory_store_reads_serially(self, store):
        assert store.concurrent_reads is False


class TestDatabaseEngine:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("sqlite://", True),
            ("sqlite:///:memory:", True),
            ("sqlite:///./espresso.db", False),
            ("postgresql://user@localhost/espresso", False),
        ],
    )
    def test_is_memory_database(self, url, expected):
        assert is_memory_database(make_url(url)) is expected

    def test_aiosqlite_url_uses_sync_driver(self, tmp_path):
        engine = create_database_engine(f"sqlite+aiosqlite:///{tmp_path / 'a.db'}")
        try:
            assert engine.url.drivername == "sqlite"
        finally:
            engine.dispose()


class TestFileDatabaseConcurrency:
    def test_file_store_allows_concurrent_reads(self, file_store):
        assert file_store.concurrent_reads is True

    def test_concurrent_create_and_list(self, file_store):
        def create_then_list(n):
            created = [file_store.create("things", {"n": n, "i": i}) for i in range(10)]
            listed = [snapshot.id for snapshot in file_store.list("things")]
            return created, listed

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(create_then_list, range(8)))

        created_ids = set()
        for created, listed in results:
            assert set(created) <= set(listed)
            created_ids.update(created)
            for doc_id in listed:
                assert file_store.get(f"things/{doc_id}") is not None

        assert len(created_ids) == 80
        assert {s.id for s in file_store.list("things")} == created_ids
