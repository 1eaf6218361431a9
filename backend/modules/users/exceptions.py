"""
Users module exceptions.
"""

from shared.exceptions import InvalidBodyError, ResourceNotFoundError


class UserNotFoundError(ResourceNotFoundError):
    """Raised when a user id does not resolve."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            reason="USER_NOT_FOUND",
            details={"user_id": user_id},
            message_key="userNotFound",
        )


class EmailExistsError(InvalidBodyError):
    """Raised when an email is already registered."""

    def __init__(self, email: str = ""):
        super().__init__(
            "Email already exists",
            reason="EMAIL_EXISTS",
            details={"email": email} if email else {},
            message_key="emailExists",
        )
