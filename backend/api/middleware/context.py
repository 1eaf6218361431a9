"""
Per-request context.

Derives the API version, locale and (optional) identity from the inbound
headers. Building a context never fails: unknown versions and locales fall
back to defaults, and a bad bearer token only leaves the request
unauthenticated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Collection, Mapping, Optional

from modules.auth.interfaces import IAuthService
from shared.config import Settings

from .auth import authenticate

VERSION_HEADER = "x-api-version"
LANGUAGE_HEADERS = ("accept-language", "x-language")


class ApiVersion(str, Enum):
    V1 = "1.0"
    V2 = "2.0"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ApiVersion":
        """Unknown or missing values mean 1.0."""
        try:
            return cls((raw or "").strip())
        except ValueError:
            return cls.V1


@dataclass(frozen=True)
class RequestContext:
    """Immutable view of who is asking, in which language and version."""

    api_version: ApiVersion = ApiVersion.V1
    locale: str = "en"
    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


def resolve_locale(
    headers: Mapping[str, str],
    supported: Collection[str],
    default: str = "en",
) -> str:
    """
    First language of the Accept-Language (or X-Language) header.

    ``fr-FR,en;q=0.8`` resolves to ``fr``; anything outside the supported
    set resolves to the default.
    """
    raw = None
    for name in LANGUAGE_HEADERS:
        raw = headers.get(name)
        if raw:
            break
    if not raw:
        return default
    candidate = raw.split(",")[0].strip()[:2].lower()
    return candidate if candidate in supported else default


def build_request_context(
    headers: Mapping[str, str],
    auth: IAuthService,
    settings: Settings,
) -> RequestContext:
    """
    Build the context for one request.

    Args:
        headers: Case-insensitive header mapping (e.g. starlette Headers).
        auth: Token verifier.
        settings: Supplies the supported locales and default locale.
    """
    identity = authenticate(headers.get("authorization"), auth)
    return RequestContext(
        api_version=ApiVersion.parse(headers.get(VERSION_HEADER)),
        locale=resolve_locale(headers, settings.supported_locales, settings.default_locale),
        user_id=identity.id if identity else None,
    )
