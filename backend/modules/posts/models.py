"""
Posts module data models.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from modules.users.models import User
from shared.models import Ref


class Post(BaseModel):
    """A stored post. ``owner`` is a weak reference to a User."""

    id: str = Field(..., description="Post ID (UUID)")
    text: str
    owner: Ref[User]
    image: Optional[str] = None
    link: Optional[str] = None
    likes: int = 0
    tags: list[str] = Field(default_factory=list)
    publish_date: datetime
    idempotency_key: Optional[str] = None

    @field_validator("owner", mode="before")
    @classmethod
    def _wrap_owner(cls, value: Any) -> Any:
        return Ref.coerce(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value: Any) -> Any:
        return value or []

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Post":
        return cls.model_validate(doc)


class CreatePostInput(BaseModel):
    """Payload for createPost."""

    text: str = Field(..., min_length=6, max_length=1000)
    owner: str
    image: Optional[str] = None
    link: Optional[str] = None
    likes: int = Field(0, ge=0)
    tags: list[str] = Field(default_factory=list)
    idempotency_key: Optional[str] = None

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(tag.strip() for tag in value if tag and tag.strip()))


class UpdatePostInput(BaseModel):
    """Payload for updatePost. Only provided fields change."""

    text: Optional[str] = Field(None, min_length=6, max_length=1000)
    owner: Optional[str] = None
    image: Optional[str] = None
    link: Optional[str] = None
    likes: Optional[int] = Field(None, ge=0)
    tags: Optional[list[str]] = None

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return None
        return list(dict.fromkeys(tag.strip() for tag in value if tag and tag.strip()))


class PostFilter(BaseModel):
    """Filter for post lists. ``publish_date`` keeps posts on or after it."""

    text: Optional[str] = None
    owner: Optional[str] = None
    tags: Optional[list[str]] = None
    publish_date: Optional[str] = None
