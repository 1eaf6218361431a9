"""
Shared infrastructure for the Chatter backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- store: DocumentStore contract; database: its Supabase implementation
- exceptions: The five error kinds every failure maps onto
- pagination: Paginated query builder shared by all list operations
- i18n: Translation tables and locale-aware date formatting

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import SupabaseDocumentStore, get_supabase_client, reset_client_cache
from .exceptions import (
    ApiError,
    InvalidParametersError,
    InvalidBodyError,
    ResourceNotFoundError,
    OperationNotSupportedError,
    InternalFailureError,
)
from .models import AuthenticatedUser, Ref

__all__ = [
    "Settings",
    "get_settings",
    "SupabaseDocumentStore",
    "get_supabase_client",
    "reset_client_cache",
    "ApiError",
    "InvalidParametersError",
    "InvalidBodyError",
    "ResourceNotFoundError",
    "OperationNotSupportedError",
    "InternalFailureError",
    "AuthenticatedUser",
    "Ref",
]
