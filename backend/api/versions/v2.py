"""
API version 2.0.

Raw rendering: enumerated values and ISO 8601 dates are returned as stored,
list results omit email, and error messages are always in the default
locale.
"""

from datetime import datetime
from typing import Any, Optional

from api.middleware.context import ApiVersion

from .base import ResolverSet


class V2Resolvers(ResolverSet):
    version = ApiVersion.V2
    list_includes_email = False

    @property
    def error_locale(self) -> str:
        return self._translator.default_locale

    def render_enum(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        return getattr(value, "value", value)

    def render_date(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value is not None else None
