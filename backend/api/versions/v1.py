"""
API version 1.0.

Localized rendering: enumerated values (gender) go through the translation
table and dates are formatted for the request locale. List results include
email. Error messages follow the request locale.
"""

from datetime import datetime
from typing import Any, Optional

from api.middleware.context import ApiVersion

from .base import ResolverSet


class V1Resolvers(ResolverSet):
    version = ApiVersion.V1
    list_includes_email = True

    def render_enum(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        return self._translator.t(getattr(value, "value", value), self.context.locale)

    def render_date(self, value: Optional[datetime]) -> Optional[str]:
        return self._translator.format_date(value, self.context.locale)
