"""Postman Collection v2.1 parser.

Decodes collection JSON text into the normalized PostmanCollection model.
"""

import json
import logging
from pathlib import Path
from typing import Any

from .base import PostmanCollection

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when collection text is not valid JSON."""

    def __init__(self, message: str, lineno: int = 0, colno: int = 0, pos: int = 0):
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno
        self.pos = pos


class _NonStandardConstant(ValueError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


def _reject_constant(name: str) -> Any:
    raise _NonStandardConstant(name)


def strict_loads(text: str) -> Any:
    """json.loads that also rejects NaN, Infinity and -Infinity."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except _NonStandardConstant as e:
        pos = max(text.find(e.name), 0)
        raise json.JSONDecodeError(f"Invalid constant {e.name}", text, pos) from e


def decode_collection(text: str) -> Any:
    """Decode collection text into plain JSON data.

    Raises ParseError with the decoder's message and position.
    """
    try:
        return strict_loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Invalid collection JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            lineno=e.lineno,
            colno=e.colno,
            pos=e.pos,
        ) from e


def normalize_collection(data: Any) -> PostmanCollection:
    """Normalize decoded JSON data into a PostmanCollection."""
    if not isinstance(data, dict):
        logger.debug("Collection root is %s, not an object", type(data).__name__)
    return PostmanCollection.model_validate(data)


def parse_collection(text: str) -> PostmanCollection:
    """Decode collection text into a PostmanCollection.

    Only a JSON syntax error fails; any structurally odd document is
    normalized with defaults.
    """
    return normalize_collection(decode_collection(text))


def load_collection(file_path: Path) -> PostmanCollection:
    """Read a collection file and parse it."""
    return parse_collection(file_path.read_text(encoding="utf-8"))
