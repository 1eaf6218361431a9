"""
GraphQL schema.

Every field delegates to the resolver set in the operation context, which
was chosen for the request's API version before execution started.
"""

import logging
from typing import List, Optional

import strawberry
from graphql import GraphQLError
from strawberry.types import ExecutionContext, Info

from shared.exceptions import ApiError

from .types import (
    ApiInfo,
    AuthPayload,
    Comment,
    CommentFilterInput,
    CommentInput,
    CommentsResponse,
    Post,
    PostFilterInput,
    PostInput,
    PostsResponse,
    UpdateCommentInput,
    UpdatePostInput,
    UpdateUserInput,
    User,
    UserFilterInput,
    UserInput,
    UsersResponse,
)

logger = logging.getLogger(__name__)


@strawberry.type
class Query:
    @strawberry.field
    def api_info(self, info: Info) -> ApiInfo:
        return info.context.resolvers.api_info()

    # Users

    @strawberry.field
    async def users(
        self,
        info: Info,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[UserFilterInput] = None,
    ) -> UsersResponse:
        return await info.context.resolvers.users(page, limit, sort, filter)

    @strawberry.field
    async def user(self, info: Info, id: strawberry.ID) -> Optional[User]:
        return await info.context.resolvers.user(id)

    @strawberry.field
    async def search_users(
        self,
        info: Info,
        query: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> UsersResponse:
        return await info.context.resolvers.search_users(query, page, limit)

    # Posts

    @strawberry.field
    async def posts(
        self,
        info: Info,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[PostFilterInput] = None,
    ) -> PostsResponse:
        return await info.context.resolvers.posts(page, limit, sort, filter)

    @strawberry.field
    async def post(self, info: Info, id: strawberry.ID) -> Optional[Post]:
        return await info.context.resolvers.post(id)

    @strawberry.field
    async def posts_by_user(
        self,
        info: Info,
        user_id: strawberry.ID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[PostFilterInput] = None,
    ) -> PostsResponse:
        return await info.context.resolvers.posts_by_user(user_id, page, limit, sort, filter)

    @strawberry.field
    async def posts_by_tag(
        self,
        info: Info,
        tag: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[PostFilterInput] = None,
    ) -> PostsResponse:
        return await info.context.resolvers.posts_by_tag(tag, page, limit, sort, filter)

    @strawberry.field
    async def search_posts(
        self,
        info: Info,
        query: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PostsResponse:
        return await info.context.resolvers.search_posts(query, page, limit)

    @strawberry.field
    async def tags(self, info: Info) -> List[str]:
        return await info.context.resolvers.tags()

    # Comments

    @strawberry.field
    async def comments(
        self,
        info: Info,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[CommentFilterInput] = None,
    ) -> CommentsResponse:
        return await info.context.resolvers.comments(page, limit, sort, filter)

    @strawberry.field
    async def comment(self, info: Info, id: strawberry.ID) -> Optional[Comment]:
        return await info.context.resolvers.comment(id)

    @strawberry.field
    async def comments_by_post(
        self,
        info: Info,
        post_id: strawberry.ID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[CommentFilterInput] = None,
    ) -> CommentsResponse:
        return await info.context.resolvers.comments_by_post(post_id, page, limit, sort, filter)

    @strawberry.field
    async def comments_by_user(
        self,
        info: Info,
        user_id: strawberry.ID,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[CommentFilterInput] = None,
    ) -> CommentsResponse:
        return await info.context.resolvers.comments_by_user(user_id, page, limit, sort, filter)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_user(self, info: Info, input: UserInput) -> User:
        return await info.context.resolvers.create_user(input)

    @strawberry.mutation
    async def update_user(self, info: Info, id: strawberry.ID, input: UpdateUserInput) -> User:
        return await info.context.resolvers.update_user(id, input)

    @strawberry.mutation
    async def delete_user(self, info: Info, id: strawberry.ID) -> strawberry.ID:
        return await info.context.resolvers.delete_user(id)

    @strawberry.mutation
    async def create_post(self, info: Info, input: PostInput) -> Post:
        return await info.context.resolvers.create_post(input)

    @strawberry.mutation
    async def update_post(self, info: Info, id: strawberry.ID, input: UpdatePostInput) -> Post:
        return await info.context.resolvers.update_post(id, input)

    @strawberry.mutation
    async def delete_post(self, info: Info, id: strawberry.ID) -> strawberry.ID:
        return await info.context.resolvers.delete_post(id)

    @strawberry.mutation
    async def create_comment(self, info: Info, input: CommentInput) -> Comment:
        return await info.context.resolvers.create_comment(input)

    @strawberry.mutation
    async def update_comment(
        self, info: Info, id: strawberry.ID, input: UpdateCommentInput
    ) -> Comment:
        return await info.context.resolvers.update_comment(id, input)

    @strawberry.mutation
    async def delete_comment(self, info: Info, id: strawberry.ID) -> strawberry.ID:
        return await info.context.resolvers.delete_comment(id)

    @strawberry.mutation
    async def login(
        self, info: Info, email: str, password: Optional[str] = None
    ) -> Optional[AuthPayload]:
        return await info.context.resolvers.login(email, password)


class ApiSchema(strawberry.Schema):
    """Schema that leaves typed API errors out of the error log."""

    def process_errors(
        self,
        errors: List[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        for error in errors:
            original = error.original_error
            if isinstance(original, ApiError):
                continue
            if original is None:
                logger.debug("Rejected operation: %s", error.message)
            else:
                logger.error("Unhandled resolver error: %s", error.message, exc_info=original)


schema = ApiSchema(query=Query, mutation=Mutation)
