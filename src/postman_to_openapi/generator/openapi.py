"""OpenAPI 3.0 document builder.

Walks a normalized Postman collection and produces a plain dict tree
(ordered maps, lists and scalars) ready for serialization.
"""

import logging
import re
from typing import Any

from postman_to_openapi.parser.base import PostmanCollection, PostmanItem

from .schema import build_parameters, build_request_body, resolve_url

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"
DOCUMENT_VERSION = "1.0.0"
DEFAULT_TITLE = "Converted API"
DEFAULT_METHOD = "get"
SERVER_URL = "https://postman-echo.com"
BODYLESS_METHODS = frozenset({"get", "head", "delete"})
DEFAULT_RESPONSES = {"200": {"description": "Successful response"}}
SECURITY_SCHEMES = {
    "basicAuth": {"type": "http", "scheme": "basic"},
    "digestAuth": {"type": "http", "scheme": "digest"},
}

_NON_WORD = re.compile(r"\W+", re.ASCII)


def build_openapi(collection: PostmanCollection) -> dict[str, Any]:
    """Build an OpenAPI document tree from a Postman collection."""
    info = collection.info
    document: dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": info.name or DEFAULT_TITLE,
            "description": info.description or "",
            "version": DOCUMENT_VERSION,
            "contact": {},
        },
        "servers": [{"url": SERVER_URL}],
        "paths": {},
        "components": {
            "schemas": {},
            "securitySchemes": {
                name: dict(scheme) for name, scheme in SECURITY_SCHEMES.items()
            },
        },
        "tags": [],
    }

    _walk(collection.item, [], document["paths"], document["tags"])
    return document


def operation_id(method: str, path: str) -> str:
    return method + _NON_WORD.sub("", path)


def _walk(items: list[PostmanItem], tags: list[str], paths: dict, doc_tags: list[dict]) -> None:
    # An item carrying both `request` and `item` takes both branches.
    for item in items:
        if item.is_request:
            _add_operation(item, tags, paths)

        if item.is_folder:
            name = item.name or ""
            if not any(t["name"] == name for t in doc_tags):
                doc_tags.append({"name": name, "description": item.description or ""})
            # Folder context replaces the parent's rather than extending it.
            _walk(item.item, [name] if name else [], paths, doc_tags)


def _add_operation(item: PostmanItem, tags: list[str], paths: dict) -> None:
    request = item.request
    path = resolve_url(request.url).path
    method = (request.method or "").lower() or DEFAULT_METHOD

    operation: dict[str, Any] = {}
    if tags:
        operation["tags"] = list(tags)
    operation["summary"] = item.name or ""
    operation["description"] = request.description or ""
    operation["operationId"] = operation_id(method, path)
    operation["parameters"] = build_parameters(request)
    operation["responses"] = {
        code: dict(response) for code, response in DEFAULT_RESPONSES.items()
    }

    if method not in BODYLESS_METHODS:
        request_body = build_request_body(request)
        if request_body is not None:
            operation["requestBody"] = request_body

    path_item = paths.setdefault(path, {})
    if method in path_item:
        logger.debug("Overwriting %s %s with item %r", method.upper(), path, item.name)
    path_item[method] = operation
