"""
News Archive API — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the article lifecycle and the store.
How:   Each exception carries a client-safe ``message`` and a ``context`` dict
       that is logged server-side only. Global handlers registered in
       ``main.py`` translate them into JSON error responses.
Who:   Raised by the article repository; caught by the global handlers.

Exception Hierarchy:
    NewsApiError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── ArticleStateError        → 400 Bad Request
    │   ├── AlreadyArchivedError
    │   └── NotArchivedError
    └── StoreError               → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class NewsApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    #: Machine-readable code used in the ``error`` field of responses.
    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NewsApiError):
    """
    Raised when an article payload fails the validation step.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Article payload is invalid",
            "details": {"errors": [{"field": "title", "message": "..."}]}
        }
    """

    code = "validation_error"

    def __init__(
        self,
        message: str = "Article payload is invalid",
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        self.errors = errors or []
        ctx["errors"] = self.errors
        super().__init__(message=message, context=ctx)


class NotFoundError(NewsApiError):
    """
    Raised when the referenced article does not exist.

    HTTP:    404 Not Found
    When:    Unknown id, or an id that is not a valid ObjectId.
    """

    code = "not_found"

    def __init__(
        self,
        article_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if article_id is not None:
            ctx["article_id"] = article_id
        super().__init__(message="News item not found", context=ctx)
        self.article_id = article_id


class ArticleStateError(NewsApiError):
    """An operation is not allowed in the article's current lifecycle state."""

    code = "invalid_state"

    def __init__(
        self,
        message: str,
        article_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if article_id is not None:
            ctx["article_id"] = article_id
        super().__init__(message=message, context=ctx)
        self.article_id = article_id


class AlreadyArchivedError(ArticleStateError):
    """Archive requested for an article whose ``archiveDate`` is already set."""

    code = "already_archived"

    def __init__(self, article_id: Optional[str] = None):
        super().__init__("News item is already archived", article_id=article_id)


class NotArchivedError(ArticleStateError):
    """Delete requested for an article that is still active."""

    code = "not_archived"

    def __init__(self, article_id: Optional[str] = None):
        super().__init__("News item is not archived", article_id=article_id)


class StoreError(NewsApiError):
    """
    Raised when a MongoDB operation fails.

    HTTP:    500 Internal Server Error
    When:    Server selection timeout, network error, write error, etc.

    The client always receives a generic message; the driver error type is
    kept in ``context`` for the server log.
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
