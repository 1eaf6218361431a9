"""
GraphQL endpoint.

POST / and POST /graphql accept ``{query, operationName, variables}``.
Each request gets its context and version resolver set before execution;
the response policy then decides cache headers, ETag and compression.
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from api.dependencies import ServiceContainer, get_container
from api.graphql.context import OperationContext
from api.graphql.errors import format_error, format_request_error
from api.graphql.schema import schema
from api.middleware.context import build_request_context
from shared.exceptions import OperationNotSupportedError

logger = logging.getLogger(__name__)

router = APIRouter()

JSON_MEDIA_TYPE = "application/json"


def _serialize(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


async def _read_body(request: Request) -> Optional[dict[str, Any]]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


@router.post("/")
@router.post("/graphql")
async def execute_operation(
    request: Request,
    container: ServiceContainer = Depends(get_container),
) -> Response:
    """
    Execute one GraphQL operation.

    Execution errors are returned with status 200 alongside ``data``; a body
    without an operation is rejected with 400 before execution.
    """
    context = build_request_context(request.headers, container.auth, container.settings)
    resolvers = container.resolvers_for(context)

    body = await _read_body(request)
    query = body.get("query") if body else None
    if not isinstance(query, str) or not query.strip():
        error = OperationNotSupportedError(
            "Must provide a query string",
            reason="MISSING_QUERY",
            message_key="invalidOperation",
        )
        return Response(
            content=_serialize({"errors": [format_request_error(error, resolvers)]}),
            status_code=400,
            media_type=JSON_MEDIA_TYPE,
            headers={"Cache-Control": "no-store"},
        )

    variables = body.get("variables")
    result = await schema.execute(
        query,
        variable_values=variables if isinstance(variables, dict) else None,
        context_value=OperationContext(request=context, resolvers=resolvers),
        operation_name=body.get("operationName") or None,
    )

    payload: dict[str, Any] = {"data": result.data}
    if result.errors:
        payload["errors"] = [format_error(error, resolvers) for error in result.errors]
    serialized = _serialize(payload)

    policy = container.policy.decide(
        method=request.method,
        body=body,
        request_headers=request.headers,
        response_body=serialized,
        has_errors=bool(result.errors),
    )
    content = serialized.encode("utf-8")
    headers = dict(policy.headers)
    if policy.compress:
        content = container.policy.compress(content)
        headers["Content-Encoding"] = "gzip"

    return Response(content=content, media_type=JSON_MEDIA_TYPE, headers=headers)
