"""
News Archive API — Article Document Model
===========================================

What:  Pydantic model mirroring one document of the ``news`` collection.
How:   ``Article(**doc)`` loads a raw MongoDB document; ``to_document()``
       produces the dict written back to the store.

Stored document shape:
    {
        "_id":         ObjectId,
        "title":       str,
        "description": str,
        "date":        datetime,
        "content":     str,
        "author":      str,
        "archiveDate": datetime | null     # null → active
    }
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Article(BaseModel):
    """
    A news item in either of its two states.

    Lifecycle:
        1. Inserted active (``archive_date is None``)
        2. Archived: ``archive_date`` set to the archival time, never cleared
        3. Deleted: removed from the collection (archived articles only)
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    title: str
    description: str
    date: datetime = Field(default_factory=utcnow)
    content: str
    author: str
    archive_date: Optional[datetime] = Field(default=None, alias="archiveDate")

    @field_validator("id", mode="before")
    @classmethod
    def validate_object_id(cls, v: Any) -> Any:
        """Convert ObjectId to string"""
        if isinstance(v, ObjectId):
            return str(v)
        return v

    @property
    def is_archived(self) -> bool:
        return self.archive_date is not None

    def to_document(self) -> Dict[str, Any]:
        """Document for insertion; ``_id`` is left to the store."""
        return self.model_dump(by_alias=True, exclude={"id"})
