"""
RecipeBook Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is set BEFORE any recipebook import so the settings
       singleton picks it up. Firebase is never contacted: the app's
       collaborator dependencies are overridden with in-memory fakes that
       follow the same contracts (including atomic array semantics).

Fixtures:
    ├── identity:       FakeIdentityProvider (accounts + tokens in dicts)
    ├── store:          InMemoryDocumentStore (collections in dicts)
    ├── app:            Fresh FastAPI app with dependencies overridden
    └── test_client:    HTTPX AsyncClient bound to that app
"""

import copy
import os
import uuid
from typing import Any, Dict, List, Optional

os.environ["APP_ENV"] = "test"
os.environ["ENABLE_TEST_ENDPOINTS"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from recipebook.dependencies import get_document_store, get_identity_provider
from recipebook.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
)
from recipebook.services.identity_base import IdentityProvider
from recipebook.services.store_base import DocumentStore, StoredDocument


# ══════════════════════════════════════════════════════════════════════════
# In-memory collaborators
# ══════════════════════════════════════════════════════════════════════════


class FakeIdentityProvider(IdentityProvider):
    """
    Accounts keyed by uid; tokens issued explicitly by tests via issue_token().
    """

    def __init__(self):
        self.accounts: Dict[str, Dict[str, str]] = {}
        self.tokens: Dict[str, str] = {}

    def issue_token(self, uid: str) -> str:
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = uid
        return token

    async def create_account(self, email: str, password: str, display_name: str) -> str:
        if any(a["email"] == email for a in self.accounts.values()):
            raise ConflictError()
        uid = uuid.uuid4().hex[:28]
        self.accounts[uid] = {"email": email, "password": password, "display_name": display_name}
        return uid

    async def verify_token(self, token: str) -> str:
        uid = self.tokens.get(token)
        if uid is None:
            raise AuthenticationError(message="Invalid token", details="Token is not recognized")
        return uid

    async def get_account_by_email(self, email: str) -> str:
        for uid, account in self.accounts.items():
            if account["email"] == email:
                return uid
        raise NotFoundError(resource="account", message=f"No user record found for {email}")

    async def list_all_accounts(self) -> List[str]:
        return list(self.accounts)

    async def delete_account(self, uid: str) -> None:
        if uid not in self.accounts:
            raise NotFoundError(resource="account", resource_id=uid)
        del self.accounts[uid]


class InMemoryDocumentStore(DocumentStore):
    """Collections are dicts of key → deep-copied record."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self.collections.setdefault(name, {})

    async def get(self, collection: str, key: str) -> Optional[StoredDocument]:
        data = self._collection(collection).get(key)
        if data is None:
            return None
        return StoredDocument(key=key, data=copy.deepcopy(data))

    async def query(self, collection, field_name, value, limit=None):
        matches = [
            StoredDocument(key=key, data=copy.deepcopy(data))
            for key, data in self._collection(collection).items()
            if field_name in data and data[field_name] == value
        ]
        return matches[:limit] if limit else matches

    async def set(self, collection, key, data):
        self._collection(collection)[key] = copy.deepcopy(data)

    async def update(self, collection, key, fields):
        records = self._collection(collection)
        if key not in records:
            raise NotFoundError(resource="document", message=f"No document to update: {collection}/{key}")
        records[key].update(copy.deepcopy(fields))

    def new_key(self, collection):
        return uuid.uuid4().hex[:20]

    async def array_union(self, collection, key, field_name, values):
        records = self._collection(collection)
        if key not in records:
            raise NotFoundError(resource="document", message=f"No document to update: {collection}/{key}")
        current = records[key].setdefault(field_name, [])
        for value in values:
            if value not in current:
                current.append(copy.deepcopy(value))

    async def array_remove(self, collection, key, field_name, values):
        records = self._collection(collection)
        if key not in records:
            raise NotFoundError(resource="document", message=f"No document to update: {collection}/{key}")
        current = records[key].get(field_name, [])
        records[key][field_name] = [item for item in current if item not in values]


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def app(identity, store):
    """A fresh app per test, wired to the in-memory collaborators."""
    from recipebook.main import create_app

    application = create_app()
    application.dependency_overrides[get_identity_provider] = lambda: identity
    application.dependency_overrides[get_document_store] = lambda: store
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server, no lifespan).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def signup_payload():
    return {
        "email": "ada@example.com",
        "password": "correct-horse-battery",
        "firstName": "Ada",
        "lastName": "Lovelace",
    }


@pytest_asyncio.fixture
async def signed_up_user(test_client, signup_payload):
    """Signs up the default user and returns its id."""
    response = await test_client.post("/signup", json=signup_payload)
    assert response.status_code == 201
    return response.json()["userId"]
