import pytest

from loginapp.config import Settings
from loginapp.errors import PersistenceError
from loginapp.infra.account_repo import AccountRepository, connect

from conftest import UnreachableCollection


def test_create_then_find(store):
    acc = store.create("alice", "h1", "a@x.com")
    assert acc.id
    found = store.find_by_email("a@x.com")
    assert found == acc


def test_find_missing_returns_none(store):
    assert store.find_by_email("nobody@x.com") is None


def test_duplicates_allowed_and_first_wins(store, collection):
    first = store.create("alice", "h1", "a@x.com")
    second = store.create("alice2", "h2", "a@x.com")
    assert first.id != second.id
    assert collection.count_documents({"email": "a@x.com"}) == 2
    assert store.find_by_email("a@x.com").id == first.id


def test_document_layout(store, collection):
    acc = store.create("alice", "h1", "a@x.com")
    doc = collection.find_one({"email": "a@x.com"})
    assert str(doc["_id"]) == acc.id
    assert doc["username"] == "alice"
    assert doc["password_hash"] == "h1"
    assert "password" not in doc


def test_create_matches_later_lookup_for_missing_fields(store):
    created = store.create(None, "h1", "a@x.com")
    assert created.username == ""
    assert store.find_by_email("a@x.com") == created


def test_public_dict_hides_hash(store):
    acc = store.create("alice", "h1", "a@x.com")
    assert acc.public_dict() == {"id": acc.id, "username": "alice", "email": "a@x.com"}


def test_ensure_indexes_creates_email_index(store, collection):
    store.ensure_indexes()
    info = collection.index_information()
    assert "email_lookup" in info
    assert not info["email_lookup"].get("unique", False)


def test_driver_errors_become_persistence_errors():
    store = AccountRepository(UnreachableCollection())
    with pytest.raises(PersistenceError):
        store.find_by_email("a@x.com")
    with pytest.raises(PersistenceError):
        store.create("alice", "h1", "a@x.com")
    with pytest.raises(PersistenceError):
        store.ensure_indexes()


def test_connect_uses_database_from_uri():
    col = connect(Settings(mongo_uri="mongodb://127.0.0.1:27017/otherdb", mongo_collection="people"))
    try:
        assert col.database.name == "otherdb"
        assert col.name == "people"
    finally:
        col.database.client.close()


def test_connect_explicit_database_wins():
    col = connect(Settings(mongo_uri="mongodb://127.0.0.1:27017/otherdb", mongo_db="picked"))
    try:
        assert col.database.name == "picked"
        assert col.name == "users"
    finally:
        col.database.client.close()


def test_connect_default_database():
    col = connect(Settings(mongo_uri="mongodb://127.0.0.1:27017"))
    try:
        assert col.database.name == "loginapp"
    finally:
        col.database.client.close()
