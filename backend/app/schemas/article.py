"""
News Archive API — Pydantic Request/Response Schemas
======================================================

What:  The API contract for the news resource, plus the validation step that
       turns an untyped request body into a typed article draft.
How:   FastAPI serializes responses through these models (by alias, so the
       archive timestamp is emitted as ``archiveDate``) and builds the OpenAPI
       document from them.

Validation step:
    payload (any JSON) ──parse_article_draft()──▶ ArticleDraftResult
                                                   ├── ok=True,  draft=ArticleCreate
                                                   └── ok=False, errors=[{field, message}]
    Nothing reaches the store unless ``ok`` is true.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from app.models.article import Article, utcnow


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ArticleCreate(BaseModel):
    """
    A validated article draft, not yet persisted.

    Unknown keys (including ``archiveDate``) are ignored: new articles are
    always active.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(min_length=1, description="Headline")
    description: str = Field(min_length=1, description="Short summary")
    date: Optional[datetime] = Field(
        default=None, description="Publication date; defaults to creation time"
    )
    content: str = Field(min_length=1, description="Article body")
    author: str = Field(min_length=1, description="Author name")

    def to_article(self, now: Optional[datetime] = None) -> Article:
        return Article(
            title=self.title,
            description=self.description,
            date=self.date or now or utcnow(),
            content=self.content,
            author=self.author,
            archive_date=None,
        )


class FieldError(BaseModel):
    field: str
    message: str


class ArticleDraftResult(BaseModel):
    """Outcome of the validation step: either a draft or a list of errors."""

    draft: Optional[ArticleCreate] = None
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.draft is not None and not self.errors


def parse_article_draft(payload: Any) -> ArticleDraftResult:
    """
    Validate a raw request body into an ``ArticleCreate``.

    Never raises for bad input; every failing field is reported in
    ``errors``. A body that is not a JSON object is reported under ``body``.
    """
    try:
        draft = ArticleCreate.model_validate(payload)
    except PydanticValidationError as exc:
        errors = [
            FieldError(
                field=".".join(str(part) for part in err["loc"]) or "body",
                message=err["msg"],
            )
            for err in exc.errors()
        ]
        return ArticleDraftResult(errors=errors)
    return ArticleDraftResult(draft=draft)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ArticleResponse(BaseModel):
    """
    Public representation of an article.

    JSON shape: ``{id, title, description, date, content, author, archiveDate}``
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "65f1c0a2e4b0a1b2c3d4e5f6",
                "title": "The importance of reading",
                "description": "Reading is fundamental to personal development",
                "date": "2020-03-10T04:05:06.157Z",
                "content": "Reading lets us understand the world around us.",
                "author": "Alexander K. Dewdney",
                "archiveDate": None,
            }
        },
    )

    id: str = Field(description="Store-assigned identifier (24 hex characters)")
    title: str
    description: str
    date: datetime = Field(description="Publication date (UTC ISO 8601)")
    content: str
    author: str
    archive_date: Optional[datetime] = Field(
        default=None,
        alias="archiveDate",
        description="When the article was archived; null while active",
    )

    @classmethod
    def from_article(cls, article: Article) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            description=article.description,
            date=article.date,
            content=article.content,
            author=article.author,
            archive_date=article.archive_date,
        )


def to_response_list(articles: List[Article]) -> List[ArticleResponse]:
    return [ArticleResponse.from_article(article) for article in articles]


class SeedResponse(BaseModel):
    message: str = Field(description="Human-readable outcome")
    inserted: int = Field(description="Number of articles inserted (0 when skipped)")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "not_found", "already_archived")
        message: Human-readable description
        details: Optional extra context (validation errors only)
        request_id: Correlation ID for tracing this error in server logs
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
