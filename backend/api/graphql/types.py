"""
GraphQL object and input types.

Object types are projections: the version resolver set builds them from
module entities, so no entity field reaches the wire unless a projection
puts it there. Nested references (post owner, comment owner and post) are
resolved through the resolver set held by the operation context.
"""

from typing import List, Optional

import strawberry
from strawberry.types import Info

from modules.comments.models import Comment as CommentEntity
from modules.posts.models import Post as PostEntity


@strawberry.type
class Location:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None


@strawberry.type
class User:
    id: strawberry.ID
    first_name: str
    last_name: str
    email: Optional[str] = None
    title: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    register_date: Optional[str] = None
    phone: Optional[str] = None
    picture: Optional[str] = None
    location: Optional[Location] = None


@strawberry.type
class Post:
    source: strawberry.Private[PostEntity]
    id: strawberry.ID
    text: str
    likes: int
    tags: List[str]
    image: Optional[str] = None
    link: Optional[str] = None
    publish_date: Optional[str] = None

    @strawberry.field
    async def owner(self, info: Info) -> User:
        return await info.context.resolvers.post_owner(self.source)


@strawberry.type
class Comment:
    source: strawberry.Private[CommentEntity]
    id: strawberry.ID
    message: str
    publish_date: Optional[str] = None

    @strawberry.field
    async def owner(self, info: Info) -> User:
        return await info.context.resolvers.comment_owner(self.source)

    @strawberry.field
    async def post(self, info: Info) -> Post:
        return await info.context.resolvers.comment_post(self.source)


@strawberry.type
class Pagination:
    total_records: int
    total_pages: int
    current_page: int
    has_next_page: bool
    has_previous_page: bool


@strawberry.type
class UsersResponse:
    data: List[User]
    pagination: Pagination


@strawberry.type
class PostsResponse:
    data: List[Post]
    pagination: Pagination


@strawberry.type
class CommentsResponse:
    data: List[Comment]
    pagination: Pagination


@strawberry.type
class ApiInfo:
    version: str
    release_date: str
    deprecated: bool


@strawberry.type
class AuthPayload:
    token: str
    user: User


# Inputs. Fields the services require are still Optional here so that a
# missing value is reported as an invalid body rather than a schema error.


@strawberry.input
class LocationInput:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None


@strawberry.input
class UserInput:
    idempotency_key: Optional[strawberry.ID] = None
    title: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[str] = None
    phone: Optional[str] = None
    picture: Optional[str] = None
    location: Optional[LocationInput] = None
    password: Optional[str] = None


@strawberry.input
class UpdateUserInput:
    title: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[str] = None
    phone: Optional[str] = None
    picture: Optional[str] = None
    location: Optional[LocationInput] = None


@strawberry.input
class PostInput:
    idempotency_key: Optional[strawberry.ID] = None
    text: Optional[str] = None
    image: Optional[str] = None
    likes: Optional[int] = None
    link: Optional[str] = None
    tags: Optional[List[str]] = None
    owner: Optional[strawberry.ID] = None


@strawberry.input
class UpdatePostInput:
    text: Optional[str] = None
    image: Optional[str] = None
    likes: Optional[int] = None
    link: Optional[str] = None
    tags: Optional[List[str]] = None
    owner: Optional[strawberry.ID] = None


@strawberry.input
class CommentInput:
    message: Optional[str] = None
    owner: Optional[strawberry.ID] = None
    post: Optional[strawberry.ID] = None
    publish_date: Optional[str] = None


@strawberry.input
class UpdateCommentInput:
    message: Optional[str] = None


@strawberry.input
class UserFilterInput:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    email: Optional[str] = None


@strawberry.input
class PostFilterInput:
    text: Optional[str] = None
    owner: Optional[strawberry.ID] = None
    tags: Optional[List[str]] = None
    publish_date: Optional[str] = None


@strawberry.input
class CommentFilterInput:
    message: Optional[str] = None
    publish_date: Optional[str] = None
