# tests/conftest.py
import copy
import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from main import app
from repositories.user import UserRepository, make_pwd_context
from routes.auth import get_signup_policy, get_user_repository


class InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class InMemoryUsers:
    """Minimal stand-in for the users collection with a unique email index."""

    def __init__(self):
        self.docs = []
        self.fail_with = None

    def create_index(self, keys, **kwargs):
        return kwargs.get("name", "index")

    def find_one(self, filter, projection=None):
        if self.fail_with:
            raise self.fail_with
        for doc in self.docs:
            if all(doc.get(k) == v for k, v in filter.items()):
                found = copy.deepcopy(doc)
                for key, include in (projection or {}).items():
                    if not include:
                        found.pop(key, None)
                return found
        return None

    def insert_one(self, doc):
        if self.fail_with:
            raise self.fail_with
        if any(d["email"] == doc["email"] for d in self.docs):
            raise DuplicateKeyError(
                "E11000 duplicate key error collection: users index: email_unique",
                code=11000,
                details={"code": 11000, "keyPattern": {"email": 1}, "keyValue": {"email": doc["email"]}},
            )
        doc["_id"] = ObjectId()
        self.docs.append(copy.deepcopy(doc))
        return InsertResult(doc["_id"])


@pytest.fixture
def users_collection():
    return InMemoryUsers()


@pytest.fixture
def repo(users_collection):
    return UserRepository(users_collection, make_pwd_context(4))


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_user_repository] = lambda: repo
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def strict_client(client):
    app.dependency_overrides[get_signup_policy] = lambda: False
    return client
