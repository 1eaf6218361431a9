"""
Posts module exceptions.
"""

from shared.exceptions import ResourceNotFoundError


class PostNotFoundError(ResourceNotFoundError):
    """Raised when a post id does not resolve."""

    def __init__(self, post_id: str):
        super().__init__(
            "Post not found",
            reason="POST_NOT_FOUND",
            details={"post_id": post_id},
            message_key="postNotFound",
        )
