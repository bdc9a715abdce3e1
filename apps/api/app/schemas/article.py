"""Article API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, JsonValue


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class ArticleWrite(BaseModel):
    """Validated article fields, after the multipart form has been read."""

    title: str = Field(min_length=3, max_length=100)
    author: str = Field(min_length=3, max_length=50)
    status: ArticleStatus = ArticleStatus.DRAFT
    photo_header: str | None = None
    content: JsonValue


class ArticleOut(BaseModel):
    id: int
    title: str
    author: str
    status: ArticleStatus
    photo_header: str
    content: JsonValue
    created_at: datetime
    updated_at: datetime | None = None


class MediaUrl(BaseModel):
    object_name: str
    url: str
