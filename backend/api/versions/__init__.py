"""
Version dispatch.

The resolver set is chosen once per request from the resolved API version;
every resolver of that request uses the same projection rules.
"""

from api.middleware.context import ApiVersion

from .base import ResolverSet
from .v1 import V1Resolvers
from .v2 import V2Resolvers

RESOLVER_SETS: dict[ApiVersion, type[ResolverSet]] = {
    ApiVersion.V1: V1Resolvers,
    ApiVersion.V2: V2Resolvers,
}


def resolver_class_for(version: ApiVersion) -> type[ResolverSet]:
    return RESOLVER_SETS.get(version, V1Resolvers)


__all__ = ["ResolverSet", "V1Resolvers", "V2Resolvers", "RESOLVER_SETS", "resolver_class_for"]
