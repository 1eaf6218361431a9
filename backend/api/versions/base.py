"""
Version-independent resolver logic.

A ResolverSet is built once per request for the request's API version. It
turns GraphQL arguments into service calls and service results into wire
types. Subclasses only decide how entities are projected: how enumerated
values and dates are rendered, whether list results carry email, and in
which locale error messages are written.
"""

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from api.graphql import types
from api.middleware.context import ApiVersion, RequestContext
from modules.auth.interfaces import IAuthService
from modules.comments.interfaces import ICommentService
from modules.comments.models import Comment, CommentFilter
from modules.posts.interfaces import IPostService
from modules.posts.models import Post, PostFilter
from modules.users.interfaces import IUserService
from modules.users.models import User, UserFilter
from shared.exceptions import resolver_boundary
from shared.i18n import Translator
from shared.pagination import InvalidFilterError, PageRequest, PageResult, Pagination

logger = logging.getLogger(__name__)

R = TypeVar("R")


def payload_from(data: Any) -> dict[str, Any]:
    """GraphQL input object as a plain dict without unset fields."""
    if data is None:
        return {}
    return {k: v for k, v in dataclasses.asdict(data).items() if v is not None}


def filters_from(model: type[BaseModel], data: Any) -> dict[str, Any]:
    """
    Validate a GraphQL filter input against its module filter model.

    Raises:
        InvalidFilterError: A filter value has the wrong shape
    """
    raw = payload_from(data)
    try:
        return model.model_validate(raw).model_dump(exclude_none=True)
    except ValidationError as exc:
        field_name = ".".join(str(p) for p in exc.errors()[0].get("loc", ())) or "filter"
        raise InvalidFilterError(
            field_name, raw.get(field_name), message_key="invalidFilterValue"
        ) from exc


class ResolverSet:
    """
    Resolvers for one request.

    Projection hooks overridden per version:
        render_enum, render_date, list_includes_email, error_locale
    """

    version: ApiVersion = ApiVersion.V1
    list_includes_email: bool = True

    def __init__(
        self,
        context: RequestContext,
        users: IUserService,
        posts: IPostService,
        comments: ICommentService,
        auth: IAuthService,
        translator: Translator,
    ) -> None:
        self.context = context
        self._users = users
        self._posts = posts
        self._comments = comments
        self._auth = auth
        self._translator = translator

    # Projection hooks

    @property
    def error_locale(self) -> str:
        """Locale error messages are rendered in."""
        return self.context.locale

    def render_enum(self, value: Any) -> Optional[str]:
        raise NotImplementedError

    def render_date(self, value: Optional[datetime]) -> Optional[str]:
        raise NotImplementedError

    def localize_error(self, key: Optional[str], fallback: str, **params: Any) -> str:
        if key is None or not self._translator.has(key, self.error_locale):
            return fallback
        return self._translator.t(key, self.error_locale, **params)

    # Projections

    def project_user(self, user: User, in_list: bool = False) -> types.User:
        location = None
        if user.location is not None:
            location = types.Location(**user.location.model_dump())
        include_email = self.list_includes_email or not in_list
        return types.User(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email if include_email else None,
            title=user.title.value if user.title is not None else None,
            gender=self.render_enum(user.gender),
            date_of_birth=self.render_date(user.date_of_birth),
            register_date=self.render_date(user.register_date),
            phone=user.phone,
            picture=user.picture,
            location=location,
        )

    def project_post(self, post: Post) -> types.Post:
        return types.Post(
            source=post,
            id=post.id,
            text=post.text,
            likes=post.likes,
            tags=list(post.tags),
            image=post.image,
            link=post.link,
            publish_date=self.render_date(post.publish_date),
        )

    def project_comment(self, comment: Comment) -> types.Comment:
        return types.Comment(
            source=comment,
            id=comment.id,
            message=comment.message,
            publish_date=self.render_date(comment.publish_date),
        )

    @staticmethod
    def project_pagination(pagination: Pagination) -> types.Pagination:
        return types.Pagination(**pagination.model_dump())

    def _page(
        self,
        result: PageResult[Any],
        project: Callable[[Any], R],
    ) -> tuple[list[R], types.Pagination]:
        data = [project(item) for item in result.data]
        return data, self.project_pagination(result.pagination)

    def _users_response(self, result: PageResult[User]) -> types.UsersResponse:
        data, pagination = self._page(result, lambda u: self.project_user(u, in_list=True))
        return types.UsersResponse(data=data, pagination=pagination)

    def _posts_response(self, result: PageResult[Post]) -> types.PostsResponse:
        data, pagination = self._page(result, self.project_post)
        return types.PostsResponse(data=data, pagination=pagination)

    def _comments_response(self, result: PageResult[Comment]) -> types.CommentsResponse:
        data, pagination = self._page(result, self.project_comment)
        return types.CommentsResponse(data=data, pagination=pagination)

    # Queries

    def api_info(self) -> types.ApiInfo:
        return types.ApiInfo(
            version=self.version.value,
            release_date=self.render_date(datetime.now(timezone.utc)) or "",
            deprecated=False,
        )

    @resolver_boundary("failedToFetchUsers", "Failed to fetch users")
    async def users(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[types.UserFilterInput] = None,
    ) -> types.UsersResponse:
        request = PageRequest.build(page, limit, sort, filters_from(UserFilter, filter))
        return self._users_response(await self._users.list_users(request))

    @resolver_boundary("failedToFetchUser", "Failed to fetch user")
    async def user(self, user_id: str) -> types.User:
        return self.project_user(await self._users.get_user(user_id))

    @resolver_boundary("failedToSearchUsers", "Failed to search users")
    async def search_users(
        self,
        query: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> types.UsersResponse:
        request = PageRequest.build(page, limit)
        return self._users_response(await self._users.search_users(query, request))

    @resolver_boundary("failedToFetchPosts", "Failed to fetch posts")
    async def posts(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[types.PostFilterInput] = None,
    ) -> types.PostsResponse:
        request = PageRequest.build(page, limit, sort, filters_from(PostFilter, filter))
        return self._posts_response(await self._posts.list_posts(request))

    @resolver_boundary("failedToFetchPost", "Failed to fetch post")
    async def post(self, post_id: str) -> types.Post:
        return self.project_post(await self._posts.get_post(post_id))

    @resolver_boundary("failedToFetchPosts", "Failed to fetch posts")
    async def posts_by_user(
        self,
        user_id: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[types.PostFilterInput] = None,
    ) -> types.PostsResponse:
        request = PageRequest.build(page, limit, sort, filters_from(PostFilter, filter))
        return self._posts_response(await self._posts.posts_by_user(user_id, request))

    @resolver_boundary("failedToFetchPostsByTag", "Failed to fetch posts by tag")
    async def posts_by_tag(
        self,
        tag: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[types.PostFilterInput] = None,
    ) -> types.PostsResponse:
        request = PageRequest.build(page, limit, sort, filters_from(PostFilter, filter))
        return self._posts_response(await self._posts.posts_by_tag(tag, request))

    @resolver_boundary("failedToSearchPosts", "Failed to search posts")
    async def search_posts(
        self,
        query: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> types.PostsResponse:
        request = PageRequest.build(page, limit)
        return self._posts_response(await self._posts.search_posts(query, request))

    @resolver_boundary("failedToFetchTags", "Failed to fetch tags")
    async def tags(self) -> list[str]:
        return await self._posts.tags()

    @resolver_boundary("failedToFetchComments", "Failed to fetch comments")
    async def comments(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[types.CommentFilterInput] = None,
    ) -> types.CommentsResponse:
        request = PageRequest.build(page, limit, sort, filters_from(CommentFilter, filter))
        return self._comments_response(await self._comments.list_comments(request))

    @resolver_boundary("failedToFetchComment", "Failed to fetch comment")
    async def comment(self, comment_id: str) -> types.Comment:
        return self.project_comment(await self._comments.get_comment(comment_id))

    @resolver_boundary("failedToFetchComments", "Failed to fetch comments")
    async def comments_by_post(
        self,
        post_id: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[types.CommentFilterInput] = None,
    ) -> types.CommentsResponse:
        request = PageRequest.build(page, limit, sort, filters_from(CommentFilter, filter))
        return self._comments_response(await self._comments.comments_by_post(post_id, request))

    @resolver_boundary("failedToFetchComments", "Failed to fetch comments")
    async def comments_by_user(
        self,
        user_id: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[types.CommentFilterInput] = None,
    ) -> types.CommentsResponse:
        request = PageRequest.build(page, limit, sort, filters_from(CommentFilter, filter))
        return self._comments_response(await self._comments.comments_by_user(user_id, request))

    # Nested references

    @resolver_boundary("failedToFetchPostOwner", "Failed to fetch post owner")
    async def post_owner(self, post: Post) -> types.User:
        return self.project_user(await self._posts.resolve_owner(post))

    @resolver_boundary("failedToFetchCommentOwner", "Failed to fetch comment owner")
    async def comment_owner(self, comment: Comment) -> types.User:
        return self.project_user(await self._comments.resolve_owner(comment))

    @resolver_boundary("failedToFetchCommentPost", "Failed to fetch comment post")
    async def comment_post(self, comment: Comment) -> types.Post:
        return self.project_post(await self._comments.resolve_post(comment))

    # Mutations

    @resolver_boundary("failedToCreateUser", "Failed to create user")
    async def create_user(self, data: types.UserInput) -> types.User:
        return self.project_user(await self._users.create_user(payload_from(data)))

    @resolver_boundary("failedToUpdateUser", "Failed to update user")
    async def update_user(self, user_id: str, data: types.UpdateUserInput) -> types.User:
        return self.project_user(await self._users.update_user(user_id, payload_from(data)))

    @resolver_boundary("failedToDeleteUser", "Failed to delete user")
    async def delete_user(self, user_id: str) -> str:
        return await self._users.delete_user(user_id)

    @resolver_boundary("failedToCreatePost", "Failed to create post")
    async def create_post(self, data: types.PostInput) -> types.Post:
        return self.project_post(await self._posts.create_post(payload_from(data)))

    @resolver_boundary("failedToUpdatePost", "Failed to update post")
    async def update_post(self, post_id: str, data: types.UpdatePostInput) -> types.Post:
        return self.project_post(await self._posts.update_post(post_id, payload_from(data)))

    @resolver_boundary("failedToDeletePost", "Failed to delete post")
    async def delete_post(self, post_id: str) -> str:
        return await self._posts.delete_post(post_id)

    @resolver_boundary("failedToCreateComment", "Failed to create comment")
    async def create_comment(self, data: types.CommentInput) -> types.Comment:
        return self.project_comment(await self._comments.create_comment(payload_from(data)))

    @resolver_boundary("failedToUpdateComment", "Failed to update comment")
    async def update_comment(self, comment_id: str, data: types.UpdateCommentInput) -> types.Comment:
        return self.project_comment(
            await self._comments.update_comment(comment_id, payload_from(data))
        )

    @resolver_boundary("failedToDeleteComment", "Failed to delete comment")
    async def delete_comment(self, comment_id: str) -> str:
        return await self._comments.delete_comment(comment_id)

    @resolver_boundary("loginFailed", "Login failed")
    async def login(self, email: str, password: Optional[str] = None) -> types.AuthPayload:
        result = await self._auth.login(email, password)
        user = result.user
        return types.AuthPayload(
            token=result.token,
            user=types.User(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
            ),
        )
