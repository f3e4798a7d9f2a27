"""
Test configuration and fixtures

Provides an in-memory stand-in for a Motor database so repository and
service tests run without a MongoDB server.
"""

import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId

from grok_list.services.grocery_service import GroceryService


def _matches(document, query):
    return all(document.get(key) == value for key, value in query.items())


class FakeCursor:
    """Async iterator over a snapshot of matching documents."""

    def __init__(self, documents):
        self._documents = iter(documents)

    def __aiter__(self):
        return self

    async def __anext__(self):
        try:
            return next(self._documents)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    """Implements the subset of AsyncIOMotorCollection the service uses."""

    def __init__(self, name):
        self.name = name
        self.documents = []
        self.indexes = {"_id_": [("_id", 1)]}

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, query):
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query):
        return FakeCursor(
            [copy.deepcopy(d) for d in self.documents if _matches(d, query)]
        )

    async def replace_one(self, query, replacement):
        for position, document in enumerate(self.documents):
            if _matches(document, query):
                stored = copy.deepcopy(replacement)
                stored["_id"] = document["_id"]
                self.documents[position] = stored
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query):
        for position, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[position]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def create_index(self, keys, name=None, **kwargs):
        self.indexes[name] = keys
        return name


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


@pytest.fixture
def fake_db():
    """Fresh in-memory database for each test."""
    return FakeDatabase()


@pytest.fixture
def service(fake_db):
    """GroceryService bound to the in-memory database."""
    return GroceryService(fake_db)
