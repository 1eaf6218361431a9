"""
Posts module.

Handles post creation, lookup, listing by owner or tag, search, update,
deletion and the derived tag set.
"""

from .interfaces import IPostService
from .models import CreatePostInput, Post, PostFilter, UpdatePostInput
from .exceptions import PostNotFoundError

__all__ = [
    "IPostService",
    "Post",
    "CreatePostInput",
    "UpdatePostInput",
    "PostFilter",
    "PostNotFoundError",
]
