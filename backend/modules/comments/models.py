"""
Comments module data models.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from modules.posts.models import Post
from modules.users.models import User
from shared.models import IsoDateTime, Ref


class Comment(BaseModel):
    """A stored comment. ``owner`` and ``post`` are weak references."""

    id: str = Field(..., description="Comment ID (UUID)")
    message: str
    owner: Ref[User]
    post: Ref[Post]
    publish_date: datetime

    @field_validator("owner", "post", mode="before")
    @classmethod
    def _wrap_reference(cls, value: Any) -> Any:
        return Ref.coerce(value)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Comment":
        return cls.model_validate(doc)


class CreateCommentInput(BaseModel):
    """Payload for createComment."""

    message: str = Field(..., min_length=2, max_length=500)
    owner: str
    post: str
    publish_date: Optional[IsoDateTime] = None


class UpdateCommentInput(BaseModel):
    message: Optional[str] = Field(None, min_length=2, max_length=500)


class CommentFilter(BaseModel):
    message: Optional[str] = None
    publish_date: Optional[str] = None
