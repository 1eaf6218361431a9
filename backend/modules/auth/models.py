"""
Authentication module data models.
"""

from pydantic import BaseModel, ConfigDict, Field

from modules.users.models import User


class TokenClaims(BaseModel):
    """
    Claims carried by an issued token.

    Wire names follow the token format (``userId``), not Python naming.
    """

    user_id: str = Field(..., alias="userId", description="Subject user ID")
    email: str = Field(..., description="User's email at issue time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AuthPayload(BaseModel):
    """Result of a successful login."""

    token: str
    user: User
