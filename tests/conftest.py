"""In-memory stand-in for the Motor products collection, plus a TestClient wired to it.

Writes are BSON-encoded first so oversized ints and invalid keys fail as they
would in the driver.
"""

import copy
import re
from types import SimpleNamespace

import bson
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from catalog.database.mongo import get_products_collection
from catalog.main import app

_MISSING = object()


def _get_path(doc, path):
    value = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _candidates(value):
    if isinstance(value, list):
        return value + [value]
    return [value]


def _match_operator(value, op, arg, options):
    if value is _MISSING:
        return False
    for v in _candidates(value):
        if op == "$regex":
            flags = re.IGNORECASE if "i" in options else 0
            if isinstance(v, str) and re.search(arg, v, flags):
                return True
        elif op == "$gte":
            if isinstance(v, (int, float)) and v >= arg:
                return True
        elif op == "$lte":
            if isinstance(v, (int, float)) and v <= arg:
                return True
        else:
            raise NotImplementedError(op)
    return False


def _matches(doc, query):
    for key, cond in query.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in cond):
                return False
            continue

        value = _get_path(doc, key)
        if isinstance(cond, dict) and cond and all(k.startswith("$") for k in cond):
            options = cond.get("$options", "")
            for op, arg in cond.items():
                if op == "$options":
                    continue
                if not _match_operator(value, op, arg, options):
                    return False
        elif value is _MISSING or cond not in _candidates(value):
            return False
    return True


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs
        self._skip = 0
        self._limit = 0
        self._sort = []

    def skip(self, n):
        self._skip = n
        return self

    def limit(self, n):
        self._limit = n
        return self

    def sort(self, keys):
        self._sort = keys
        return self

    async def to_list(self, length=None):
        bson.encode({"skip": self._skip, "limit": self._limit})
        docs = list(self._docs)
        for field, direction in reversed(self._sort):
            present = [d for d in docs if _get_path(d, field) is not _MISSING]
            missing = [d for d in docs if _get_path(d, field) is _MISSING]
            present.sort(key=lambda d: _get_path(d, field), reverse=direction < 0)
            docs = present + missing if direction < 0 else missing + present
        docs = docs[self._skip:]
        if self._limit:
            docs = docs[:self._limit]
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    def __init__(self):
        self.docs = []

    async def count_documents(self, query, limit=0):
        count = sum(1 for d in self.docs if _matches(d, query))
        return min(count, limit) if limit else count

    def find(self, query=None):
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    async def find_one(self, query):
        for d in self.docs:
            if _matches(d, query):
                return copy.deepcopy(d)
        return None

    async def insert_one(self, doc):
        bson.encode(doc)  # same client-side encoding checks as the driver
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def update_one(self, query, update):
        bson.encode(update)
        for d in self.docs:
            if _matches(d, query):
                d.update(copy.deepcopy(update["$set"]))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query):
        for i, d in enumerate(self.docs):
            if _matches(d, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def distinct(self, field):
        values = []
        for d in self.docs:
            v = _get_path(d, field)
            if v is not _MISSING and v not in values:
                values.append(v)
        return values

    def seed(self, *docs):
        ids = []
        for doc in docs:
            stored = dict(doc)
            stored.setdefault("_id", ObjectId())
            self.docs.append(stored)
            ids.append(str(stored["_id"]))
        return ids


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def client(collection):
    app.dependency_overrides[get_products_collection] = lambda: collection
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_for():
    """TestClient bound to an arbitrary collection object (e.g. a mock)."""
    def _make(coll):
        app.dependency_overrides[get_products_collection] = lambda: coll
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
