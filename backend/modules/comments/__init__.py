"""
Comments module.

Handles comment creation against existing posts and users, listing by post
or author, update and deletion.
"""

from .interfaces import ICommentService
from .models import Comment, CommentFilter, CreateCommentInput, UpdateCommentInput
from .exceptions import CommentNotFoundError

__all__ = [
    "ICommentService",
    "Comment",
    "CreateCommentInput",
    "UpdateCommentInput",
    "CommentFilter",
    "CommentNotFoundError",
]
