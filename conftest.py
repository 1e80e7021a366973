# conftest.py
"""Shared fixtures: an in-memory Firestore double and a wired test app."""

import copy
import uuid

import pytest
from firebase_admin import firestore
from google.api_core.exceptions import FailedPrecondition

import petcare
from petcare import create_app
from petcare.models.user import UserRole


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


def _apply_update(current, changes):
    updated = dict(current)
    for key, value in changes.items():
        if isinstance(value, firestore.ArrayUnion):
            existing = list(updated.get(key) or [])
            existing.extend(v for v in value.values if v not in existing)
            updated[key] = existing
        else:
            updated[key] = copy.deepcopy(value)
    return updated


class FakeDocumentRef:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    def get(self, transaction=None):
        return FakeSnapshot(self.id, self._collection.docs.get(self.id))

    def set(self, data):
        self._collection.docs[self.id] = copy.deepcopy(data)

    def update(self, changes):
        if self.id not in self._collection.docs:
            raise KeyError(f"No document to update: {self.id}")
        self._collection.docs[self.id] = _apply_update(self._collection.docs[self.id], changes)

    def delete(self):
        self._collection.docs.pop(self.id, None)


class FakeQuery:
    _ops = {
        '==': lambda a, b: a == b,
        'in': lambda a, b: a in b,
        '>=': lambda a, b: a is not None and a >= b,
        '<=': lambda a, b: a is not None and a <= b,
    }

    def __init__(self, collection, filters=(), orders=(), max_results=None):
        self._collection = collection
        self._filters = list(filters)
        self._orders = list(orders)
        self._limit = max_results

    def where(self, field_path, op_string, value):
        return FakeQuery(self._collection, self._filters + [(field_path, op_string, value)],
                         self._orders, self._limit)

    def order_by(self, field_path, direction='ASCENDING'):
        return FakeQuery(self._collection, self._filters,
                         self._orders + [(field_path, direction)], self._limit)

    def limit(self, count):
        return FakeQuery(self._collection, self._filters, self._orders, count)

    def stream(self):
        # Firestore needs a composite index to filter on one field and order by another.
        filtered = {f for f, _, _ in self._filters}
        ordered = {f for f, _ in self._orders}
        if filtered and ordered - filtered:
            raise FailedPrecondition("The query requires an index.")
        items = [
            (doc_id, data) for doc_id, data in self._collection.docs.items()
            if all(self._ops[op](data.get(f), v) for f, op, v in self._filters)
        ]
        # Stable multi-key sort: apply the least significant key first.
        for field_path, direction in reversed(self._orders):
            items.sort(
                key=lambda item: (item[1].get(field_path) is not None, item[1].get(field_path)),
                reverse=(direction == firestore.Query.DESCENDING)
            )
        if self._limit is not None:
            items = items[:self._limit]
        return iter([FakeSnapshot(doc_id, copy.deepcopy(data)) for doc_id, data in items])

    def get(self):
        return list(self.stream())


class FakeCollection(FakeQuery):
    def __init__(self, name):
        self.name = name
        self.docs = {}
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocumentRef(self, doc_id or uuid.uuid4().hex)


class FakeTransaction:
    """Buffers writes and applies them on commit, like a Firestore transaction."""
    def __init__(self):
        self._writes = []

    def set(self, ref, data):
        self._writes.append(lambda: ref.set(data))

    def update(self, ref, changes):
        self._writes.append(lambda: ref.update(changes))

    def delete(self, ref):
        self._writes.append(ref.delete)

    def commit(self):
        for write in self._writes:
            write()
        self._writes = []


class FakeFirestore:
    def __init__(self):
        self._collections = {}

    def collection(self, name):
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]

    def transaction(self):
        return FakeTransaction()


def fake_transactional(fn):
    def wrapper(transaction, *args, **kwargs):
        result = fn(transaction, *args, **kwargs)
        transaction.commit()
        return result
    return wrapper


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def app(db, monkeypatch):
    monkeypatch.setattr(firestore, "client", lambda *args, **kwargs: db)
    monkeypatch.setattr(firestore, "transactional", fake_transactional)
    monkeypatch.setattr(petcare, "_initialize_firebase", lambda app: None)
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Register through the API and return (user_json, headers)."""
    def _register(username="alice", email=None, password="password123"):
        response = client.post("/api/auth/register", json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        })
        assert response.status_code == 201, response.get_json()
        body = response.get_json()
        return body["user"], _bearer(body["token"])
    return _register


@pytest.fixture
def user_headers(register_user):
    _, headers = register_user("alice")
    return headers


@pytest.fixture
def admin_user(app):
    with app.app_context():
        user, token = app.services["auth"].register(
            username="admin", email="admin@example.com", password="adminpass123",
            full_name="Administrator", role=UserRole.ADMIN
        )
    return user, _bearer(token)


@pytest.fixture
def admin_headers(admin_user):
    return admin_user[1]


@pytest.fixture
def create_pet(client, admin_headers):
    """Create a pet through the admin API and return its JSON."""
    def _create(**overrides):
        payload = {
            "name": "Buddy",
            "species": "Dog",
            "breed": "Labrador",
            "age": 3,
            "gender": "Male",
            "availableForAdoption": True,
            "adoptionStatus": "available",
        }
        payload.update(overrides)
        response = client.post("/api/pets", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["pet"]
    return _create


@pytest.fixture
def application_payload():
    def _payload(pet_id, **overrides):
        payload = {
            "petId": pet_id,
            "fullName": "Jane Doe",
            "email": "jane@example.com",
            "phone": "555-0100",
            "address": "1 Main St",
            "housingType": "house",
            "ownOrRent": "own",
            "householdMembers": "2",
            "petExperience": "Grew up with dogs",
            "hoursAlone": "0-4",
            "agreement": True,
        }
        payload.update(overrides)
        return payload
    return _payload
