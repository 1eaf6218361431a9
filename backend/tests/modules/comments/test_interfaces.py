from modules.comments.interfaces import ICommentService
from modules.comments.repository import CommentRepository
from modules.comments.service import CommentService
from modules.posts.repository import PostRepository
from modules.users.repository import UserRepository

from tests.fakes import InMemoryDocumentStore


class TestCommentsInterface:
    def test_interface_methods_exist(self):
        """ICommentService should define required methods."""
        methods = [
            "create_comment", "get_comment", "find_comment", "list_comments",
            "comments_by_post", "comments_by_user", "update_comment",
            "delete_comment", "resolve_owner", "resolve_post",
        ]
        for method in methods:
            assert hasattr(ICommentService, method)

    def test_service_declares_interface(self):
        """CommentService should subclass the protocol explicitly."""
        assert ICommentService in CommentService.__mro__

    def test_service_implements_interface(self):
        store = InMemoryDocumentStore()
        service = CommentService(
            CommentRepository(store), UserRepository(store), PostRepository(store)
        )
        assert isinstance(service, ICommentService)
