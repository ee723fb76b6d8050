"""
Employee API — JSON Format Middleware
======================================

What:  Turns away requests that do not speak JSON before routing.
How:   Every route of this service consumes and produces application/json.
       Methods that may carry a payload (PUT, POST, DELETE, PATCH) must
       declare a JSON Content-Type; GET, HEAD and OPTIONS must either omit
       Accept or accept application/json. Anything else is answered exactly
       like a request for an unknown path: 404 {"message": "not found"}.

Matching rules:
    Content-Type  "application/json", parameters allowed
                  ("application/json; charset=utf-8")
    Accept        any listed media range of application/json,
                  application/* or */*
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
BODY_METHODS = frozenset({"PUT", "POST", "DELETE", "PATCH"})
JSON_ACCEPT_RANGES = frozenset({"application/json", "application/*", "*/*"})
NOT_FOUND_BODY = {"message": "not found"}


def _media_type(value: str) -> str:
    """'Application/JSON; charset=utf-8' → 'application/json'."""
    return value.split(";", 1)[0].strip().lower()


def sends_json(content_type: str | None) -> bool:
    """True when a Content-Type header value declares a JSON body."""
    return content_type is not None and _media_type(content_type) == JSON_MEDIA_TYPE


def accepts_json(accept: str | None) -> bool:
    """True when an Accept header value (or its absence) allows a JSON response."""
    if accept is None or not accept.strip():
        return True
    return any(
        _media_type(media_range) in JSON_ACCEPT_RANGES
        for media_range in accept.split(",")
    )


def is_json_request(method: str, content_type: str | None, accept: str | None) -> bool:
    """Whether a request satisfies the JSON format every route requires."""
    if method.upper() in BODY_METHODS:
        return sends_json(content_type)
    return accepts_json(accept)


class JSONFormatMiddleware(BaseHTTPMiddleware):
    """Answers non-JSON requests with the routing-miss envelope."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not is_json_request(
            request.method,
            request.headers.get("content-type"),
            request.headers.get("accept"),
        ):
            logger.debug(
                "Rejecting %s %s: not a JSON request", request.method, request.url.path
            )
            return JSONResponse(status_code=404, content=NOT_FOUND_BODY)

        return await call_next(request)
