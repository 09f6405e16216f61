# repositories/article_repository.py

"""
MongoDB repository for news articles using Motor.

The repository is bound to one collection handle at construction time; the
handle's lifetime is owned by the application lifespan (see ``app.database``).
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.exceptions import (
    AlreadyArchivedError,
    NotArchivedError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.models.article import Article, utcnow
from app.schemas.article import parse_article_draft

logger = logging.getLogger(__name__)

ARCHIVE_FIELD = "archiveDate"

ACTIVE_FILTER: Dict[str, Any] = {ARCHIVE_FIELD: None}
ARCHIVED_FILTER: Dict[str, Any] = {ARCHIVE_FIELD: {"$ne": None}}

ACTIVE_SORT: List[Tuple[str, int]] = [("date", DESCENDING), ("_id", DESCENDING)]
ARCHIVED_SORT: List[Tuple[str, int]] = [(ARCHIVE_FIELD, DESCENDING), ("_id", DESCENDING)]

# Serializes the check-then-insert of seed_defaults within one process.
_seed_lock = asyncio.Lock()


def default_articles(now: datetime) -> List[Article]:
    """Placeholder articles inserted by ``seed_defaults``."""
    return [
        Article(
            title=f"News {n}",
            description=f"Description {n}",
            date=now,
            content=f"Content for news {n}",
            author=f"Author {n}",
        )
        for n in range(1, 4)
    ]


class ArticleRepository:
    """MongoDB repository for article operations with Motor."""

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Args:
            collection: Handle to the news collection
        """
        self.collection = collection

    async def ensure_indexes(self) -> None:
        """Create the indexes backing the two listings."""
        indexes = [
            ([("date", DESCENDING)], {"name": "date_desc_idx"}),
            ([(ARCHIVE_FIELD, DESCENDING)], {"name": "archive_date_desc_idx"}),
        ]
        try:
            for keys, kwargs in indexes:
                await self.collection.create_index(keys, **kwargs)
        except PyMongoError as e:
            raise self._store_error("ensure_indexes", e)
        logger.info("News collection indexes ensured")

    # ── Queries ───────────────────────────────────────────────────────────

    async def list_active(self) -> List[Article]:
        """Active articles, newest ``date`` first."""
        return await self._find(ACTIVE_FILTER, ACTIVE_SORT, "list_active")

    async def list_archived(self) -> List[Article]:
        """Archived articles, most recently archived first."""
        return await self._find(ARCHIVED_FILTER, ARCHIVED_SORT, "list_archived")

    async def _find(
        self,
        mongo_filter: Dict[str, Any],
        sort: Sequence[Tuple[str, int]],
        operation: str,
    ) -> List[Article]:
        try:
            cursor = self.collection.find(mongo_filter).sort(list(sort))
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise self._store_error(operation, e)
        return [Article(**doc) for doc in docs]

    # ── Inserts ───────────────────────────────────────────────────────────

    async def insert(self, payload: Any) -> Article:
        """
        Validate ``payload`` and persist it as a new active article.

        Raises:
            ValidationError: the payload failed the validation step
            StoreError: the insert failed
        """
        result = parse_article_draft(payload)
        if not result.ok:
            raise ValidationError(
                errors=[error.model_dump() for error in result.errors],
            )

        article = result.draft.to_article()
        try:
            inserted = await self.collection.insert_one(article.to_document())
        except PyMongoError as e:
            raise self._store_error("insert", e)

        article.id = str(inserted.inserted_id)
        logger.info("Inserted article %s", article.id)
        return article

    async def seed_defaults(self, skip_if_populated: bool = True) -> int:
        """
        Insert the placeholder articles.

        Concurrent calls in one process are serialized, so two seeds of an
        empty collection insert one set. Separate processes are not
        coordinated and can still both insert.

        Args:
            skip_if_populated: do nothing when the collection already holds
                any document

        Returns:
            Number of articles inserted.
        """
        async with _seed_lock:
            try:
                if skip_if_populated:
                    existing = await self.collection.count_documents({}, limit=1)
                    if existing:
                        logger.info("Seed skipped: news collection is not empty")
                        return 0

                docs = [article.to_document() for article in default_articles(utcnow())]
                result = await self.collection.insert_many(docs)
            except PyMongoError as e:
                raise self._store_error("seed_defaults", e)

        logger.info("Seeded %d default articles", len(result.inserted_ids))
        return len(result.inserted_ids)

    # ── Lifecycle transitions ─────────────────────────────────────────────

    async def archive(self, article_id: str) -> List[Article]:
        """
        Move an active article to the archive.

        The update only matches while ``archiveDate`` is null, so of two
        concurrent requests for the same article exactly one succeeds.

        Returns:
            The refreshed active listing.

        Raises:
            NotFoundError: no article with this id
            AlreadyArchivedError: the article is already archived
            StoreError: a store operation failed
        """
        oid = self._object_id(article_id)
        try:
            updated = await self.collection.find_one_and_update(
                {"_id": oid, ARCHIVE_FIELD: None},
                {"$set": {ARCHIVE_FIELD: utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
            if updated is None:
                await self._raise_for_missing_or_state(
                    oid, article_id, AlreadyArchivedError
                )
        except PyMongoError as e:
            raise self._store_error("archive", e, article_id=article_id)

        logger.info("Archived article %s", article_id)
        return await self.list_active()

    async def delete(self, article_id: str) -> List[Article]:
        """
        Permanently remove an archived article.

        Returns:
            The refreshed archived listing.

        Raises:
            NotFoundError: no article with this id
            NotArchivedError: the article is still active
            StoreError: a store operation failed
        """
        oid = self._object_id(article_id)
        try:
            result = await self.collection.delete_one(
                {"_id": oid, **ARCHIVED_FILTER}
            )
            if result.deleted_count == 0:
                await self._raise_for_missing_or_state(
                    oid, article_id, NotArchivedError
                )
        except PyMongoError as e:
            raise self._store_error("delete", e, article_id=article_id)

        logger.info("Deleted article %s", article_id)
        return await self.list_archived()

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _raise_for_missing_or_state(
        self, oid: ObjectId, article_id: str, state_error: type
    ) -> None:
        """A conditional write matched nothing: tell absence from wrong state."""
        exists = await self.collection.find_one({"_id": oid}, {"_id": 1})
        if exists is None:
            raise NotFoundError(article_id=article_id)
        raise state_error(article_id=article_id)

    @staticmethod
    def _object_id(article_id: str) -> ObjectId:
        # Malformed ids cannot match any document.
        if not ObjectId.is_valid(article_id):
            raise NotFoundError(article_id=article_id)
        return ObjectId(article_id)

    @staticmethod
    def _store_error(
        operation: str, error: PyMongoError, article_id: Optional[str] = None
    ) -> StoreError:
        logger.error("Store error during %s: %s", operation, error)
        context: Dict[str, Any] = {
            "operation": operation,
            "original_error": type(error).__name__,
        }
        if article_id is not None:
            context["article_id"] = article_id
        return StoreError(context=context)
