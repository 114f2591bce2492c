"""Tests for the Firestore document store adapter, against a mocked client."""

from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import NotFound
from google.cloud import firestore

from espresso_api.store import SERVER_TIMESTAMP, DocumentNotFound
from espresso_api.store.firestore import FirestoreDocumentStore


def _doc(doc_id, path, data):
    doc = MagicMock()
    doc.id = doc_id
    doc.exists = True
    doc.reference.path = path
    doc.to_dict.return_value = data
    return doc


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def firestore_store(client):
    return FirestoreDocumentStore(client)


def test_get(firestore_store, client):
    client.document.return_value.get.return_value = _doc(
        "abc", "companies/abc", {"company_name": "Acme"}
    )

    snapshot = firestore_store.get("companies/abc")

    client.document.assert_called_once_with("companies/abc")
    assert snapshot.id == "abc"
    assert snapshot.path == "companies/abc"
    assert snapshot.data == {"company_name": "Acme"}


def test_get_missing(firestore_store, client):
    client.document.return_value.get.return_value.exists = False

    assert firestore_store.get("companies/abc") is None


def test_find_uses_equality_filter(firestore_store, client):
    query = client.collection.return_value.where.return_value
    query.limit.return_value.stream.return_value = [
        _doc("abc", "companies/abc", {"company_name": "Acme"})
    ]

    matches = firestore_store.find("companies", "company_name", "Acme", limit=1)

    client.collection.assert_called_once_with("companies")
    field_filter = client.collection.return_value.where.call_args.kwargs["filter"]
    assert field_filter.field_path == "company_name"
    assert field_filter.op_string == "=="
    assert field_filter.value == "Acme"
    query.limit.assert_called_once_with(1)
    assert [m.id for m in matches] == ["abc"]


def test_list(firestore_store, client):
    client.collection.return_value.stream.return_value = [
        _doc("a", "companies/a", {}),
        _doc("b", "companies/b", {}),
    ]

    assert [s.id for s in firestore_store.list("companies")] == ["a", "b"]


def test_create_sets_document_in_transaction(firestore_store, client, monkeypatch):
    # Run the transactional function directly instead of through the retry wrapper
    monkeypatch.setattr(firestore, "transactional", lambda fn: fn)
    ref = client.collection.return_value.document.return_value
    ref.id = "generated"
    transaction = client.transaction.return_value

    doc_id = firestore_store.create(
        "companies", {"company_name": "Acme", "created_at": SERVER_TIMESTAMP}
    )

    assert doc_id == "generated"
    transaction.set.assert_called_once_with(
        ref,
        {"company_name": "Acme", "created_at": firestore.SERVER_TIMESTAMP},
        merge=True,
    )


def test_update_resolves_server_timestamp(firestore_store, client):
    firestore_store.update("companies/abc", {"updated_at": SERVER_TIMESTAMP, "x": 1})

    client.document.return_value.update.assert_called_once_with(
        {"updated_at": firestore.SERVER_TIMESTAMP, "x": 1}
    )


def test_update_missing_document(firestore_store, client):
    client.document.return_value.update.side_effect = NotFound("no document")

    with pytest.raises(DocumentNotFound):
        firestore_store.update("companies/abc", {"x": 1})
