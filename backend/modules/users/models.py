"""
Users module data models.

Store documents use snake_case columns; the GraphQL layer exposes them in
camelCase.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared.models import IsoDateTime


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Title(str, Enum):
    MR = "mr"
    MISS = "miss"
    DR = "dr"
    NONE = ""


class Location(BaseModel):
    """Postal location of a user."""

    street: Optional[str] = Field(None, min_length=5, max_length=100)
    city: Optional[str] = Field(None, min_length=2, max_length=30)
    state: Optional[str] = Field(None, min_length=2, max_length=30)
    country: Optional[str] = Field(None, min_length=2, max_length=30)
    timezone: Optional[str] = None


class User(BaseModel):
    """A stored user."""

    id: str = Field(..., description="User ID (UUID)")
    first_name: str
    last_name: str
    email: str
    title: Optional[Title] = None
    gender: Optional[Gender] = None
    date_of_birth: Optional[IsoDateTime] = None
    register_date: datetime
    phone: Optional[str] = None
    picture: Optional[str] = None
    location: Optional[Location] = None
    idempotency_key: Optional[str] = None
    password_hash: Optional[str] = Field(None, exclude=True, repr=False)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "User":
        return cls.model_validate(doc)


class CreateUserInput(BaseModel):
    """Payload for createUser."""

    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: str
    title: Optional[Title] = None
    gender: Optional[Gender] = None
    date_of_birth: Optional[IsoDateTime] = None
    phone: Optional[str] = None
    picture: Optional[str] = None
    location: Optional[Location] = None
    idempotency_key: Optional[str] = None
    password: Optional[str] = Field(None, min_length=8, repr=False)


class UpdateUserInput(BaseModel):
    """Payload for updateUser. Only provided fields change."""

    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[str] = None
    title: Optional[Title] = None
    gender: Optional[Gender] = None
    date_of_birth: Optional[IsoDateTime] = None
    phone: Optional[str] = None
    picture: Optional[str] = None
    location: Optional[Location] = None


class UserFilter(BaseModel):
    """Filter for the users list."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[Gender] = None
    email: Optional[str] = None
