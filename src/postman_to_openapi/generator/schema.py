"""Inference of paths, parameters and request bodies from Postman requests."""

import json
import logging
from typing import Any
from urllib.parse import quote, urlsplit

from pydantic import BaseModel

from postman_to_openapi.parser.base import KeyValue, PostmanRequest, PostmanUrl
from postman_to_openapi.parser.postman import strict_loads

logger = logging.getLogger(__name__)

DEFAULT_PATH = "/"
DEFAULT_PROTOCOL = "https"
DEFAULT_HOST = "postman-echo.com"
DEFAULT_CONTENT_TYPE = "application/json"
CONTENT_TYPE_HEADER = "content-type"
# Characters a URL path keeps unescaped; space, quotes, <, >, `, { and } are encoded.
PATH_SAFE = "!$%&'()*+,-./:;=@[\\]^_|~"


class ResolvedUrl(BaseModel):
    """Where a request points. Only `path` ends up in the document."""

    path: str = DEFAULT_PATH
    protocol: str = DEFAULT_PROTOCOL
    host: str = DEFAULT_HOST


def resolve_url(url: PostmanUrl | None) -> ResolvedUrl:
    """Resolve a request URL, trying the raw URL first, then the path list."""
    if url is None:
        return ResolvedUrl()

    if url.raw:
        resolved = _parse_absolute(url.raw)
        if resolved is not None:
            return resolved
        logger.debug("Raw URL %r is not absolute, trying path segments", url.raw)

    if url.path is not None:
        return ResolvedUrl(path="/" + "/".join(url.path).lstrip("/"))

    return ResolvedUrl()


def _parse_absolute(raw: str) -> ResolvedUrl | None:
    try:
        parts = urlsplit(raw.strip())
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return ResolvedUrl(
        path=_normalize_path(parts.path),
        protocol=parts.scheme,
        host=parts.netloc,
    )


def _normalize_path(path: str) -> str:
    """Resolve dot segments and percent-encode the path like a browser URL parser."""
    if not path:
        return DEFAULT_PATH

    segments: list[str] = []
    raw_segments = path.split("/")[1:]
    for segment in raw_segments:
        if segment == "..":
            if segments:
                segments.pop()
        elif segment != ".":
            segments.append(segment)
    if raw_segments[-1] in (".", ".."):
        # "/a/b/.." keeps its trailing slash
        segments.append("")

    return quote("/" + "/".join(segments), safe=PATH_SAFE)


def build_parameters(request: PostmanRequest) -> list[dict]:
    """Collect query, path and header parameters, in that order."""
    parameters: list[dict] = []
    url = request.url

    if url is not None:
        for q in url.query:
            parameters.append(_described_param(q, "query"))

        for segment in url.path or []:
            if segment.startswith(":"):
                parameters.append(
                    {
                        "name": segment[1:],
                        "in": "path",
                        "required": True,
                        "schema": {"type": "string"},
                    }
                )

    for h in request.header:
        if h.key.lower() == CONTENT_TYPE_HEADER:
            continue
        parameters.append(_described_param(h, "header"))

    return parameters


def _described_param(kv: KeyValue, location: str) -> dict:
    param: dict[str, Any] = {
        "name": kv.key,
        "in": location,
        "schema": {"type": "string"},
    }
    if kv.value is not None:
        param["example"] = kv.value
    if kv.description:
        param["description"] = kv.description
    return param


def content_type_of(request: PostmanRequest) -> str:
    """Return the Content-Type header value, or the JSON default."""
    for h in request.header:
        if h.key.lower() == CONTENT_TYPE_HEADER:
            return _header_value(h.value)
    return DEFAULT_CONTENT_TYPE


def _header_value(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def build_body_schema(request: PostmanRequest) -> dict | None:
    """Infer a schema for the request body, or None when nothing is derivable."""
    body = request.body
    if body is None:
        return None

    if body.mode == "raw":
        if not body.raw:
            return None
        try:
            return {"type": "object", "example": strict_loads(body.raw)}
        except json.JSONDecodeError:
            logger.debug("Raw body is not JSON, describing it as a string")
            return {"type": "string", "example": body.raw}

    if body.mode == "formdata":
        if body.formdata is None:
            return None
        properties: dict[str, Any] = {}
        for field in body.formdata:
            prop: dict[str, Any] = {"type": "string"}
            if field.value is not None:
                prop["example"] = field.value
            properties[field.key] = prop
        return {"type": "object", "properties": properties}

    logger.debug("Body mode %r is not supported, skipping request body", body.mode)
    return None


def build_request_body(request: PostmanRequest) -> dict | None:
    """Build an OpenAPI requestBody object for the request, if any."""
    schema = build_body_schema(request)
    if schema is None:
        return None
    return {
        "required": True,
        "content": {content_type_of(request): {"schema": schema}},
    }
