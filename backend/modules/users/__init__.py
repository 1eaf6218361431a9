"""
Users module.

Handles user creation, lookup, listing, search, update and deletion.

Public API:
- IUserService: Interface for user operations
- User, CreateUserInput, UpdateUserInput: Data models
- Users exceptions: UserNotFoundError, EmailExistsError
"""

from .interfaces import IUserService
from .models import CreateUserInput, Gender, Location, Title, UpdateUserInput, User, UserFilter
from .exceptions import EmailExistsError, UserNotFoundError

__all__ = [
    # Interface
    "IUserService",
    # Models
    "User",
    "CreateUserInput",
    "UpdateUserInput",
    "UserFilter",
    "Gender",
    "Title",
    "Location",
    # Exceptions
    "UserNotFoundError",
    "EmailExistsError",
]
