"""Document serializer. Renders a plain tree as JSON or restricted YAML.

The YAML writer only covers the shapes the OpenAPI builder produces: block
maps and sequences, bare or double-quoted scalars and `|` literals. No
anchors, flow collections beyond `[]`/`{}`, or full escaping.
"""

import json
import re
from typing import Any

FORMATS = ("yaml", "json")

_NEEDS_QUOTES = re.compile(r'[:#\[\]{}",\n|>]')


def to_json(tree: Any) -> str:
    """Pretty-print a tree as JSON, keeping key insertion order."""
    return json.dumps(tree, indent=2, ensure_ascii=False)


def to_yaml(tree: dict, indent: int = 0) -> str:
    """Render a map as block YAML, indenting every line by `indent` spaces."""
    spaces = " " * indent
    out = []

    for key, value in tree.items():
        if value is None:
            continue

        if isinstance(value, list):
            if not value:
                out.append(f"{spaces}{key}: []\n")
                continue
            out.append(f"{spaces}{key}:\n")
            for item in value:
                if item is None:
                    continue
                out.append(f"{spaces}  - {_sequence_item(item, indent + 4)}")
        elif isinstance(value, dict):
            if not value:
                out.append(f"{spaces}{key}: {{}}\n")
            else:
                out.append(f"{spaces}{key}:\n{to_yaml(value, indent + 2)}")
        elif isinstance(value, str) and "\n" in value:
            block = "\n".join(f"{spaces}  {line}" for line in value.split("\n"))
            out.append(f"{spaces}{key}: |\n{block}\n")
        else:
            out.append(f"{spaces}{key}: {_scalar(value)}\n")

    return "".join(out)


def _sequence_item(item: Any, indent: int) -> str:
    if isinstance(item, list):
        # Nested sequences are written as maps keyed by position.
        if not item:
            return "[]\n"
        item = {i: v for i, v in enumerate(item)}
    if isinstance(item, dict):
        rendered = to_yaml(item, indent).lstrip()
        return rendered or "{}\n"
    return f"{_scalar(item)}\n"


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        if _NEEDS_QUOTES.search(value):
            return '"' + value.replace('"', '\\"') + '"'
        return value
    return str(value)


def serialize(document: dict, fmt: str = "yaml") -> str:
    """Render a document in the given format ('yaml' or 'json')."""
    fmt = fmt.lower()
    if fmt == "json":
        return to_json(document)
    if fmt == "yaml":
        return to_yaml(document)
    raise ValueError(f"Unsupported output format: {fmt!r} (expected one of {', '.join(FORMATS)})")
