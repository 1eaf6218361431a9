"""
Execution context handed to every GraphQL resolver.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.middleware.context import RequestContext

if TYPE_CHECKING:
    from api.versions.base import ResolverSet


@dataclass(frozen=True)
class OperationContext:
    """
    The request context plus the resolver set chosen for its API version.

    Resolvers never look at the version themselves; they call through
    ``resolvers``, which already carries the version's projection rules.
    """

    request: RequestContext
    resolvers: "ResolverSet"
