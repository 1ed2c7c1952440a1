"""Entry points: collection text in, OpenAPI document tree and text out."""

from typing import Any

from postman_to_openapi.generator.openapi import build_openapi
from postman_to_openapi.parser.postman import ParseError, parse_collection
from postman_to_openapi.serializer import serialize

__all__ = ["ParseError", "convert", "serialize"]


def convert(collection_text: str) -> dict[str, Any]:
    """Convert Postman collection JSON text into an OpenAPI document tree.

    Raises ParseError if the text is not valid JSON.
    """
    return build_openapi(parse_collection(collection_text))
