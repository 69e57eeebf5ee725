"""Shared fixtures: an in-memory stand-in for the Motor database, cheap
password hashing and a fake object store, wired into the app through
``dependency_overrides``.
"""
import asyncio
import copy
from collections import defaultdict
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from app.aws_client import get_object_storage
from app.main import app
from app.utils.hash_utils import CredentialStore, get_credential_store
from facilitiease.db.database import FACILITIES, SERVICE_PROVIDERS, STARTUPS, USERS, get_database

UNIQUE_FIELDS = {
    USERS: {"_id", "email"},
    STARTUPS: {"_id", "user_id"},
    SERVICE_PROVIDERS: {"_id", "user_id"},
    FACILITIES: {"_id"},
}


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in (query or {}).items())


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key, direction=1):
        self.docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return self.docs if length is None else self.docs[:length]


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = []
        self.unique_fields = set(UNIQUE_FIELDS.get(name, {"_id"}))
        self.indexes = []
        self.fail_next_insert = None

    async def create_index(self, keys, unique=False, **kwargs):
        field = keys if isinstance(keys, str) else keys[0][0]
        self.indexes.append((field, unique))
        if unique:
            self.unique_fields.add(field)
        return f"{field}_1"

    async def find_one(self, query=None, session=None):
        # Yield so concurrent requests interleave like real I/O
        await asyncio.sleep(0)
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query=None):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    async def insert_one(self, doc, session=None):
        await asyncio.sleep(0)
        if self.fail_next_insert is not None:
            exc, self.fail_next_insert = self.fail_next_insert, None
            raise exc
        doc.setdefault("_id", ObjectId())
        for field in self.unique_fields:
            if field in doc and any(d.get(field) == doc[field] for d in self.docs):
                raise DuplicateKeyError(
                    f"E11000 duplicate key error collection: {self.name} index: {field}_1",
                    code=11000,
                    details={"keyValue": {field: doc[field]}},
                )
        self.docs.append(copy.deepcopy(doc))
        if session is not None:
            session.inserted.append((self, doc["_id"]))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query, update, session=None):
        await asyncio.sleep(0)
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)


class FakeSession:
    """Transaction whose inserts are undone if the callback raises."""

    def __init__(self, client):
        self.client = client
        self.inserted = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def with_transaction(self, callback):
        self.inserted = []
        try:
            result = await callback(self)
        except Exception:
            for collection, doc_id in reversed(self.inserted):
                collection.docs = [d for d in collection.docs if d["_id"] != doc_id]
            self.client.aborted += 1
            raise
        self.client.committed += 1
        return result


class FakeClient:
    def __init__(self):
        self.committed = 0
        self.aborted = 0

    async def start_session(self):
        return FakeSession(self)


class FakeDatabase:
    def __init__(self):
        self.client = FakeClient()
        self.collections = defaultdict(lambda: None)

    def __getitem__(self, name):
        if self.collections[name] is None:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


class FakeObjectStorage:
    def __init__(self):
        self.uploads = []

    async def upload(self, content, content_type, filename):
        self.uploads.append((content, content_type, filename))
        return f"https://test-bucket.s3.us-east-1.amazonaws.com/facilities/{len(self.uploads)}.png"


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture(scope="session")
def credential_store():
    # Minimal work factor keeps the suite fast
    return CredentialStore(time_cost=1, memory_cost=8, parallelism=1, bcrypt_rounds=4)


@pytest.fixture
def storage():
    return FakeObjectStorage()


@pytest.fixture
def client(database, credential_store, storage):
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_credential_store] = lambda: credential_store
    app.dependency_overrides[get_object_storage] = lambda: storage
    # No context manager: the lifespan would try to reach a real MongoDB
    yield TestClient(app)
    app.dependency_overrides.clear()


STARTUP_SEED = {
    "startupName": "Acme Labs",
    "contactName": "Alice Doe",
    "contactNumber": "9876543210",
}

PROVIDER_SEED = {
    "serviceName": "BioHub",
    "primaryContactNumber": "9123456780",
}

PROVIDER_COMPLETION = {
    "serviceProviderType": "Incubator",
    "address": "12 Lab Street",
    "city": "Pune",
    "stateProvince": "Maharashtra",
    "zipPostalCode": "411001",
    "primaryContact1Name": "Ravi Kumar",
    "primaryContact1Designation": "Director",
    "contact2Name": "Meera Shah",
    "contact2Designation": "Lab Manager",
    "alternateContactNumber": "9123456781",
    "alternateEmailId": "lab@x.com",
    "logoUrl": "https://biohub.in/logo.png",
    "websiteUrl": "https://biohub.in",
}


@pytest.fixture
def signup(client):
    def _signup(email, password="pw123456", role="Startup", seed=None):
        if seed is None:
            seed = STARTUP_SEED if role == "Startup" else PROVIDER_SEED
        return client.post("/api/accounts", json={
            "email": email,
            "password": password,
            "role": role,
            "roleProfileSeed": seed,
        })
    return _signup


@pytest.fixture
def signin(client):
    def _signin(email, password="pw123456", role=None):
        body = {"email": email, "password": password}
        if role:
            body["role"] = role
        return client.post("/api/sessions", json=body)
    return _signin


@pytest.fixture
def provider_token(signup, signin):
    assert signup("provider@facilitiease.io", role="ServiceProvider").status_code == 201
    res = signin("provider@facilitiease.io", role="ServiceProvider")
    return res.json()["accessToken"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
