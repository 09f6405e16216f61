"""
News Archive API — MongoDB Client Management
==============================================

What:  Motor client construction, collection lookup, and the FastAPI
       dependency that hands an ``ArticleRepository`` to each request.
How:   The lifespan in ``main.py`` creates one client, stores it on
       ``app.state`` and closes it on shutdown. Requests only ever see the
       collection through the repository built by ``get_article_repository``.

Connection settings:
    tz_aware=True:              datetimes come back timezone-aware (UTC)
    serverSelectionTimeoutMS:   bounded wait when the server is unreachable
"""

import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from app.config import Settings
from app.repositories.article_repository import ArticleRepository

logger = logging.getLogger(__name__)


def create_mongo_client(config: Settings) -> AsyncIOMotorClient:
    """Build a client; no I/O happens until the first operation."""
    return AsyncIOMotorClient(
        config.mongodb_uri,
        tz_aware=True,
        serverSelectionTimeoutMS=config.mongodb_timeout_ms,
    )


def get_news_collection(
    client: AsyncIOMotorClient, config: Settings
) -> AsyncIOMotorCollection:
    return client[config.mongodb_database][config.news_collection]


async def ping(client: AsyncIOMotorClient) -> bool:
    """Round-trip to the server; False if it cannot be reached."""
    try:
        await client.admin.command("ping")
    except Exception as e:
        logger.warning("MongoDB ping failed: %s", e)
        return False
    return True


# ── Request Dependency ────────────────────────────────────────────────────
async def get_article_repository(request: Request) -> ArticleRepository:
    """
    FastAPI dependency providing a repository bound to the app's collection.

    Example usage in a route:
        @router.get("/api/news")
        async def list_news(repo: ArticleRepository = Depends(get_article_repository)):
            return await repo.list_active()

    Tests replace this dependency through ``app.dependency_overrides``.
    """
    return ArticleRepository(request.app.state.news_collection)


def dispose_client(client: AsyncIOMotorClient) -> None:
    """Close all pooled connections; called during application shutdown."""
    client.close()
