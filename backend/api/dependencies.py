"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations on top of one shared
DocumentStore.

Tests build a container around an in-memory store and install it with
``app.dependency_overrides[get_container]``.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings
from shared.i18n import Translator
from shared.store import DocumentStore

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from api.middleware.context import RequestContext
    from api.middleware.response_policy import ResponsePolicyEngine
    from api.versions.base import ResolverSet
    from modules.auth.interfaces import IAuthService
    from modules.comments.interfaces import ICommentService
    from modules.posts.interfaces import IPostService
    from modules.users.interfaces import IUserService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them.

    Args:
        store: Document store; defaults to the Supabase-backed store.
        settings: Defaults to get_settings().
        translator: Defaults to the built-in en/fr tables.
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        settings: Optional[Settings] = None,
        translator: Optional[Translator] = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._translator = translator
        self._auth_service: "IAuthService | None" = None
        self._user_service: "IUserService | None" = None
        self._post_service: "IPostService | None" = None
        self._comment_service: "ICommentService | None" = None
        self._policy: "ResponsePolicyEngine | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def store(self) -> DocumentStore:
        """Get the document store."""
        if self._store is None:
            from shared.database import SupabaseDocumentStore, get_supabase_client
            self._store = SupabaseDocumentStore(get_supabase_client())
        return self._store

    @property
    def translator(self) -> Translator:
        if self._translator is None:
            self._translator = Translator(default_locale=self.settings.default_locale)
        return self._translator

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.repository import UserRepository
            from modules.users.service import UserService
            self._user_service = UserService(UserRepository(self.store))
        return self._user_service

    @property
    def posts(self) -> "IPostService":
        """Get the post service instance."""
        if self._post_service is None:
            from modules.posts.repository import PostRepository
            from modules.posts.service import PostService
            from modules.users.repository import UserRepository
            self._post_service = PostService(
                repository=PostRepository(self.store),
                users=UserRepository(self.store),
            )
        return self._post_service

    @property
    def comments(self) -> "ICommentService":
        """Get the comment service instance."""
        if self._comment_service is None:
            from modules.comments.repository import CommentRepository
            from modules.comments.service import CommentService
            from modules.posts.repository import PostRepository
            from modules.users.repository import UserRepository
            self._comment_service = CommentService(
                repository=CommentRepository(self.store),
                users=UserRepository(self.store),
                posts=PostRepository(self.store),
            )
        return self._comment_service

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            from modules.users.repository import UserRepository
            self._auth_service = AuthService(self.settings, UserRepository(self.store))
        return self._auth_service

    @property
    def policy(self) -> "ResponsePolicyEngine":
        """Get the response policy engine."""
        if self._policy is None:
            from api.middleware.response_policy import ResponsePolicyEngine
            self._policy = ResponsePolicyEngine(
                max_age=self.settings.cache_max_age,
                compression_level=self.settings.compression_level,
                min_size=self.settings.compression_min_size,
            )
        return self._policy

    def resolvers_for(self, context: "RequestContext") -> "ResolverSet":
        """Build the resolver set for one request's API version."""
        from api.versions import resolver_class_for
        resolver_class = resolver_class_for(context.api_version)
        return resolver_class(
            context,
            users=self.users,
            posts=self.posts,
            comments=self.comments,
            auth=self.auth,
            translator=self.translator,
        )

    def reset(self) -> None:
        """
        Reset all cached services.

        The store, settings and translator passed to the constructor are kept.
        """
        self._auth_service = None
        self._user_service = None
        self._post_service = None
        self._comment_service = None
        self._policy = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container. Also the FastAPI dependency."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None
