"""
Response caching and compression policy.

Classifies each operation as a query or a mutation and decides, from that
and the outcome, which cache directives, entity tag and content coding the
response gets:

- successful query: ``Cache-Control: public, max-age=<n>``, ``Vary`` and an
  ``ETag`` derived from the serialized body; eligible for gzip
- failed query, or any mutation: ``Cache-Control: no-store``
- OPTIONS: never compressed
"""

import gzip
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from graphql import GraphQLError, get_operation_ast, parse
from graphql import OperationType as DocumentOperation

logger = logging.getLogger(__name__)

VARY = "Accept, Origin, Accept-Encoding, Accept-Language"
NO_STORE = "no-store"
GZIP = "gzip"


class OperationType(str, Enum):
    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class EncodingPreference:
    """One entry of an Accept-Encoding header."""

    encoding: str
    quality: float = 1.0


@dataclass(frozen=True)
class ResponsePolicy:
    """Outcome of the policy decision for one response."""

    operation_type: OperationType
    headers: dict[str, str] = field(default_factory=dict)
    compress: bool = False
    preferences: tuple[EncodingPreference, ...] = ()


def classify_operation(body: Optional[Mapping[str, Any]]) -> OperationType:
    """
    Decide whether a request body carries a query or a mutation.

    The document is parsed and the operation selected by ``operationName``
    decides: anything other than a query operation is a mutation. A
    declared operation name containing "mutation" also makes it a mutation.
    Documents that do not parse, or name no single operation, fall back to
    the leading keyword of the text.
    """
    if not body:
        return OperationType.QUERY
    text = str(body.get("query") or "")
    name = str(body.get("operationName") or "")
    if "mutation" in name.lower():
        return OperationType.MUTATION

    try:
        operation = get_operation_ast(parse(text), name or None)
    except GraphQLError:
        operation = None
    if operation is not None:
        if operation.operation is DocumentOperation.QUERY:
            return OperationType.QUERY
        return OperationType.MUTATION

    if text.lstrip().startswith("mutation"):
        return OperationType.MUTATION
    return OperationType.QUERY


def parse_accept_encoding(header: Optional[str]) -> list[EncodingPreference]:
    """
    Parse Accept-Encoding into preferences, highest quality first.

    A missing weight means 1.0, and so does an unparseable one.
    """
    if not header:
        return []
    preferences = []
    for item in header.split(","):
        parts = [part.strip() for part in item.strip().split(";")]
        encoding = parts[0]
        quality = 1.0
        if len(parts) > 1 and parts[1].startswith("q="):
            try:
                quality = float(parts[1][2:])
            except ValueError:
                quality = 1.0
            if quality != quality:  # NaN
                quality = 1.0
        preferences.append(EncodingPreference(encoding=encoding, quality=quality))
    # stable: equal weights keep header order
    return sorted(preferences, key=lambda p: p.quality, reverse=True)


def accepts(preferences: list[EncodingPreference], encoding: str) -> bool:
    """
    Whether the client accepts an encoding with a non-zero weight.

    An explicit entry for the encoding wins over ``*``, whatever their
    weights, so ``gzip;q=0, *`` refuses gzip.
    """
    by_name = {p.encoding.lower(): p.quality for p in reversed(preferences)}
    if encoding in by_name:
        return by_name[encoding] > 0
    if "*" in by_name:
        return by_name["*"] > 0
    return False


def compute_etag(body: str) -> str:
    """
    Quoted entity tag for a serialized response body.

    A 32-bit rolling hash (h = h * 31 + c) over the UTF-16 code units of the
    body, rendered as signed hexadecimal. Equal bodies give equal tags.
    """
    if not body:
        return ""
    data = body.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return f'"{h:x}"'


class ResponsePolicyEngine:
    """
    Computes cache headers and the compression decision for a response.

    Args:
        max_age: Seconds a successful query response may be cached.
        compression_level: gzip level used by compress().
        min_size: Bodies smaller than this are never compressed.
    """

    def __init__(self, max_age: int = 300, compression_level: int = 6, min_size: int = 0) -> None:
        self._max_age = max_age
        self._level = compression_level
        self._min_size = min_size

    @property
    def cache_directive(self) -> str:
        return f"public, max-age={self._max_age}"

    def decide(
        self,
        method: str,
        body: Optional[Mapping[str, Any]],
        request_headers: Mapping[str, str],
        response_body: str,
        has_errors: bool,
    ) -> ResponsePolicy:
        operation = classify_operation(body)
        preferences = parse_accept_encoding(request_headers.get("accept-encoding"))
        logger.debug("Request type: %s", operation.value.upper())
        logger.debug("Client encoding preferences: %s", preferences)

        headers: dict[str, str] = {}
        cacheable = operation is OperationType.QUERY and not has_errors
        if cacheable:
            headers["Cache-Control"] = self.cache_directive
            headers["Vary"] = VARY
            etag = compute_etag(response_body)
            if etag:
                headers["ETag"] = etag
        else:
            headers["Cache-Control"] = NO_STORE

        eligible = cacheable and method.upper() != "OPTIONS"
        compress = (
            eligible
            and accepts(preferences, GZIP)
            and len(response_body.encode("utf-8")) >= self._min_size
        )
        logger.debug("Applying compression: %s", compress)
        return ResponsePolicy(
            operation_type=operation,
            headers=headers,
            compress=compress,
            preferences=tuple(preferences),
        )

    def compress(self, payload: bytes) -> bytes:
        return gzip.compress(payload, compresslevel=self._level)
