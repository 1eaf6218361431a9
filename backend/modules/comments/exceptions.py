"""
Comments module exceptions.
"""

from shared.exceptions import ResourceNotFoundError


class CommentNotFoundError(ResourceNotFoundError):
    """Raised when a comment id does not resolve."""

    def __init__(self, comment_id: str):
        super().__init__(
            "Comment not found",
            reason="COMMENT_NOT_FOUND",
            details={"comment_id": comment_id},
            message_key="commentNotFound",
        )
