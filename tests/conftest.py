import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from loginapp.app import create_app
from loginapp.auth.passwords import PasswordHasher
from loginapp.auth.service import AuthService
from loginapp.config import Settings
from loginapp.infra.account_repo import AccountRepository

# Cheapest argon2 setting; keeps the suite fast
FAST_TIME_COST = 1


class UnreachableCollection:
    """Stand-in for a collection whose server cannot be reached."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("127.0.0.1:27017: [Errno 111] Connection refused")

    find_one = _fail
    insert_one = _fail
    create_index = _fail


@pytest.fixture()
def collection():
    return mongomock.MongoClient().loginapp.users


@pytest.fixture()
def store(collection) -> AccountRepository:
    return AccountRepository(collection)


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=FAST_TIME_COST)


@pytest.fixture()
def service(store, hasher) -> AuthService:
    return AuthService(store=store, hasher=hasher)


@pytest.fixture()
def settings() -> Settings:
    return Settings(hash_time_cost=FAST_TIME_COST)


@pytest.fixture()
def client(settings, collection):
    app = create_app(settings, collection=collection)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def broken_client(settings):
    app = create_app(settings, collection=UnreachableCollection())
    with TestClient(app) as c:
        yield c
