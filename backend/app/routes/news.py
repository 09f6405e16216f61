"""
News Archive API — News Route Handlers
========================================

What:  The ``/api/news`` resource: list, list archived, seed, create,
       archive, delete.
How:   Each handler calls one repository operation and returns its result.
       Lifecycle and store errors propagate to the global exception
       handlers registered in ``main.py``.

Route Inventory:
    GET     /api/news                 active articles, newest first
    GET     /api/news/archived        archived articles, latest archived first
    POST    /api/news/init            insert the placeholder articles
    POST    /api/news                 create one article
    PUT     /api/news/{id}/archive    archive, returns the active list
    DELETE  /api/news/{id}            delete archived, returns the archived list

``GET`` and ``POST`` also answer on ``/api/news/`` (hidden from the schema)
so clients that do not follow redirects get the same result.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from app.config import settings
from app.database import get_article_repository
from app.repositories.article_repository import ArticleRepository
from app.schemas.article import (
    ArticleResponse,
    ErrorResponse,
    SeedResponse,
    to_response_list,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/news", tags=["News"])

_STORE_ERROR = {"description": "Internal server error", "model": ErrorResponse}


@router.get(
    "",
    response_model=List[ArticleResponse],
    responses={500: _STORE_ERROR},
    summary="Lists all the news",
    description="Returns every active article ordered by publication date, newest first.",
)
@router.get("/", response_model=List[ArticleResponse], include_in_schema=False)
async def list_news(
    repo: ArticleRepository = Depends(get_article_repository),
) -> List[ArticleResponse]:
    return to_response_list(await repo.list_active())


@router.get(
    "/archived",
    response_model=List[ArticleResponse],
    responses={500: _STORE_ERROR},
    summary="Lists all the news archived",
    description="Returns every archived article ordered by archive date, most recent first.",
)
async def list_archived_news(
    repo: ArticleRepository = Depends(get_article_repository),
) -> List[ArticleResponse]:
    return to_response_list(await repo.list_archived())


@router.post(
    "/init",
    response_model=SeedResponse,
    responses={500: _STORE_ERROR},
    summary="Initialize the database with default news data",
    description=(
        "Inserts three placeholder articles. When SEED_SKIP_WHEN_POPULATED is "
        "enabled (the default) nothing is inserted into a non-empty collection."
    ),
)
async def init_news(
    repo: ArticleRepository = Depends(get_article_repository),
) -> SeedResponse:
    inserted = await repo.seed_defaults(
        skip_if_populated=settings.seed_skip_when_populated
    )
    if inserted == 0:
        return SeedResponse(message="Database already contains news data", inserted=0)
    return SeedResponse(
        message="Database initialized with default news data", inserted=inserted
    )


@router.post(
    "",
    status_code=201,
    response_model=ArticleResponse,
    responses={
        400: {"description": "Invalid article payload", "model": ErrorResponse},
        500: _STORE_ERROR,
    },
    summary="Create a news article",
    description=(
        "Validates the body and stores it as a new active article. "
        "title, description, content and author are required and must be non-empty; "
        "date defaults to now. archiveDate is ignored."
    ),
)
@router.post(
    "/", status_code=201, response_model=ArticleResponse, include_in_schema=False
)
async def create_news(
    payload: Dict[str, Any] = Body(
        ...,
        examples=[
            {
                "title": "The importance of reading",
                "description": "Reading is fundamental to personal development",
                "content": "Reading lets us understand the world around us.",
                "author": "Alexander K. Dewdney",
            }
        ],
    ),
    repo: ArticleRepository = Depends(get_article_repository),
) -> ArticleResponse:
    article = await repo.insert(payload)
    return ArticleResponse.from_article(article)


@router.put(
    "/{article_id}/archive",
    response_model=List[ArticleResponse],
    responses={
        400: {"description": "The article is already archived", "model": ErrorResponse},
        404: {"description": "The article was not found", "model": ErrorResponse},
        500: _STORE_ERROR,
    },
    summary="Archive an article by id",
    description="Archives an active article and returns the remaining active articles.",
)
async def archive_news(
    article_id: str,
    repo: ArticleRepository = Depends(get_article_repository),
) -> List[ArticleResponse]:
    return to_response_list(await repo.archive(article_id))


@router.delete(
    "/{article_id}",
    response_model=List[ArticleResponse],
    responses={
        400: {"description": "The article is not archived and cannot be removed", "model": ErrorResponse},
        404: {"description": "The article was not found", "model": ErrorResponse},
        500: _STORE_ERROR,
    },
    summary="Remove an archived article by id",
    description="Deletes an archived article and returns the remaining archived articles.",
)
async def delete_news(
    article_id: str,
    repo: ArticleRepository = Depends(get_article_repository),
) -> List[ArticleResponse]:
    return to_response_list(await repo.delete(article_id))
