"""Convert Postman collections to OpenAPI 3.0 documents."""

from postman_to_openapi.converter import ParseError, convert, serialize

__all__ = ["ParseError", "convert", "serialize"]
