"""
News Archive API — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The MongoDB collection is replaced by ``FakeCollection``, an
       in-memory double of the small Motor surface the repository uses.
       The repository receives it through its constructor; the HTTP tests
       inject it through ``app.dependency_overrides``.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_collection: empty in-memory collection
    ├── repository: ArticleRepository bound to fake_collection
    ├── seeded_repository: repository after seed_defaults()
    ├── sample_payload: a valid create-article body
    ├── make_doc, utc: factories for raw store documents and UTC datetimes
    └── test_client: HTTPX AsyncClient against the app, store overridden
"""

import asyncio
import copy
import os
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument

os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["LOG_LEVEL"] = "WARNING"

from app.repositories.article_repository import ArticleRepository  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-memory collection
# ══════════════════════════════════════════════════════════════════════════


def _matches(doc: Dict[str, Any], mongo_filter: Dict[str, Any]) -> bool:
    for key, expected in mongo_filter.items():
        actual = doc.get(key)
        if isinstance(expected, dict) and "$ne" in expected:
            if actual == expected["$ne"]:
                return False
        elif actual != expected:
            return False
    return True


class _SortKey:
    """Orders None before any value, like MongoDB does for null."""

    def __init__(self, value: Any):
        self.value = value

    def __lt__(self, other: "_SortKey") -> bool:
        if self.value is None:
            return other.value is not None
        if other.value is None:
            return False
        return self.value < other.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _SortKey) and self.value == other.value


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    def sort(self, keys, direction: Optional[int] = None) -> "FakeCursor":
        if isinstance(keys, str):
            keys = [(keys, direction or 1)]
        # Stable sorts applied from the least significant key.
        for field, order in reversed(list(keys)):
            self._docs.sort(
                key=lambda d, f=field: _SortKey(d.get(f)), reverse=order < 0
            )
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        docs = self._docs if length is None else self._docs[:length]
        return [copy.deepcopy(doc) for doc in docs]


class FakeCollection:
    """
    The subset of ``AsyncIOMotorCollection`` used by ArticleRepository.

    Set ``fail_with`` to an exception instance to make every operation
    raise it (simulates an unreachable server).

    Count, update and delete yield to the event loop once before touching
    the data, so concurrent callers interleave the way they would against
    a real server.
    """

    def __init__(self):
        self.docs: List[Dict[str, Any]] = []
        self.indexes: List[Any] = []
        self.fail_with: Optional[Exception] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def find(self, mongo_filter: Optional[Dict[str, Any]] = None) -> FakeCursor:
        self._check()
        return FakeCursor([d for d in self.docs if _matches(d, mongo_filter or {})])

    async def find_one(self, mongo_filter, projection=None):
        self._check()
        for doc in self.docs:
            if _matches(doc, mongo_filter):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc):
        self._check()
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def insert_many(self, docs):
        self._check()
        ids = []
        for doc in docs:
            doc.setdefault("_id", ObjectId())
            self.docs.append(copy.deepcopy(doc))
            ids.append(doc["_id"])
        return SimpleNamespace(inserted_ids=ids)

    async def find_one_and_update(
        self, mongo_filter, update, return_document=ReturnDocument.BEFORE
    ):
        self._check()
        await asyncio.sleep(0)
        for doc in self.docs:
            if _matches(doc, mongo_filter):
                before = copy.deepcopy(doc)
                doc.update(update.get("$set", {}))
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, mongo_filter):
        self._check()
        await asyncio.sleep(0)
        for i, doc in enumerate(self.docs):
            if _matches(doc, mongo_filter):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def count_documents(self, mongo_filter, limit: Optional[int] = None):
        self._check()
        await asyncio.sleep(0)
        count = sum(1 for d in self.docs if _matches(d, mongo_filter))
        return min(count, limit) if limit else count

    async def create_index(self, keys, **kwargs):
        self._check()
        self.indexes.append((keys, kwargs))
        return kwargs.get("name", "index")

    def get(self, article_id: str) -> Optional[Dict[str, Any]]:
        """Test helper: raw stored document by string id."""
        for doc in self.docs:
            if str(doc["_id"]) == article_id:
                return doc
        return None


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def repository(fake_collection) -> ArticleRepository:
    return ArticleRepository(fake_collection)


@pytest_asyncio.fixture
async def seeded_repository(repository) -> ArticleRepository:
    await repository.seed_defaults()
    return repository


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    return {
        "title": "The importance of reading",
        "description": "Reading is fundamental to personal development",
        "date": "2020-03-10T04:05:06.157Z",
        "content": "Reading lets us understand the world around us.",
        "author": "Alexander K. Dewdney",
    }


def _make_doc(
    title: str,
    date: datetime,
    archive_date: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Raw store document, as it would come back from MongoDB."""
    return {
        "_id": ObjectId(),
        "title": title,
        "description": f"{title} description",
        "date": date,
        "content": f"{title} content",
        "author": "Test Author",
        "archiveDate": archive_date,
    }


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def make_doc():
    """Factory for raw store documents."""
    return _make_doc


@pytest.fixture
def utc():
    """Factory for timezone-aware UTC datetimes."""
    return _utc


@pytest_asyncio.fixture
async def test_client(fake_collection):
    """
    HTTPX AsyncClient talking to the app in-process.

    The lifespan is not run, so no MongoDB client is created; the
    repository dependency is overridden to use ``fake_collection``.
    """
    from app.database import get_article_repository
    from app.main import app

    app.dependency_overrides[get_article_repository] = lambda: ArticleRepository(
        fake_collection
    )
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
